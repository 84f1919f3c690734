import logging
from typing import Any, Dict, Optional

from app.dto.verification_code_dto import VerificationCodeCreate
from app.exceptions.base_exception import InvalidCodeException, ValidationException
from app.services.account_provisioning import provision_account
from app.utils.code_generator import DEFAULT_TTL_MINUTES, generate_verification_code

logger = logging.getLogger(__name__)

CODE_SENT_MESSAGE = "Verification code sent. Please check your inbox."


class VerificationService:
    """
    Email verification gate in front of account provisioning.

    A code is stored before it is sent and only deleted after a successful
    sign in, so every failed verification leaves the code usable until it
    expires.
    """

    def __init__(
        self,
        codes,
        notifier,
        identity,
        ttl_minutes: int = DEFAULT_TTL_MINUTES,
        code_generator=generate_verification_code,
    ):
        self.codes = codes
        self.notifier = notifier
        self.identity = identity
        self.ttl_minutes = ttl_minutes
        self.code_generator = code_generator

    async def request_code(self, email: Optional[str], password: Optional[str]) -> str:
        if not email or not password:
            raise ValidationException("Email and password are required")

        code, expires_at = self.code_generator(ttl_minutes=self.ttl_minutes)

        # Clearing first keeps a single active code per email
        await self.codes.clear_active(email)
        await self.codes.issue(
            VerificationCodeCreate(email=email, code=code, expires_at=expires_at)
        )
        logger.info("Generated code for %s, expires at %s", email, expires_at.isoformat())

        await self.notifier.send_verification_code(email, code)
        return CODE_SENT_MESSAGE

    async def verify_and_provision(
        self,
        email: Optional[str],
        password: Optional[str],
        code: Optional[str],
    ) -> Dict[str, Any]:
        if not email or not password or not code:
            raise ValidationException("Email, password, and code are required")

        logger.info("Verifying code for %s", email)
        if await self.codes.find_valid(email, code) is None:
            logger.info("Code verification failed for %s", email)
            raise InvalidCodeException()

        user = await provision_account(self.identity, email, password, retry_on_duplicate=True)

        await self.codes.consume(email, code)
        return user
