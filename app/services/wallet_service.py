import logging
from typing import Any, Dict, Optional

from app.exceptions.base_exception import ValidationException
from app.services.account_provisioning import provision_account

logger = logging.getLogger(__name__)


class WalletProvisioningService:
    """Provision accounts bound to a wallet public key, without a verification code."""

    def __init__(self, identity, provider_name: str = "phantom", retry_on_duplicate: bool = False):
        self.identity = identity
        self.provider_name = provider_name
        self.retry_on_duplicate = retry_on_duplicate

    def wallet_metadata(self, public_key: str) -> Dict[str, str]:
        return {"provider": self.provider_name, "full_public_key": public_key}

    async def provision(
        self,
        email: Optional[str],
        password: Optional[str],
        public_key: Optional[str],
    ) -> Dict[str, Any]:
        if not email or not password or not public_key:
            raise ValidationException("Email, password, and public key are required")

        logger.info("Wallet signup for %s", email)
        return await provision_account(
            self.identity,
            email,
            password,
            metadata=self.wallet_metadata(public_key),
            retry_on_duplicate=self.retry_on_duplicate,
        )
