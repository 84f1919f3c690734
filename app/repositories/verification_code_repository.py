import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import MultipleResultsFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.dto.verification_code_dto import VerificationCodeCreate
from app.exceptions.base_exception import StorageException
from app.models.verification_code import VerificationCode

logger = logging.getLogger(__name__)


class VerificationCodeRepository:
    """
    Code store: keeps at most one active verification code per email.

    Emails are stored lower-cased. Expiry is only enforced when reading;
    stale rows are removed by ``purge_expired``.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def clear_active(self, email: str) -> None:
        """Delete every code row for ``email``. No error when none exist."""
        await self._execute_and_commit(
            delete(VerificationCode).where(VerificationCode.email == email.lower())
        )

    async def issue(self, data: VerificationCodeCreate) -> VerificationCode:
        try:
            new_code = VerificationCode(
                email=data.email.lower(),
                code=data.code,
                expires_at=data.expires_at
            )
            self.db.add(new_code)
            await self.db.commit()
            await self.db.refresh(new_code)
            return new_code
        except SQLAlchemyError as e:
            logger.error("Error creating verification code for %s: %s", data.email, e)
            await self.db.rollback()
            raise StorageException(str(e)) from e

    async def find_valid(self, email: str, code: str, now: Optional[datetime] = None) -> Optional[VerificationCode]:
        """
        Return the row matching ``email`` and ``code`` that has not expired at ``now``.

        More than one match means the single-active-code invariant is broken
        and is reported as a storage error instead of picking a row.
        """
        current_time = now or datetime.now(timezone.utc)
        try:
            result = await self.db.execute(
                select(VerificationCode).where(
                    VerificationCode.email == email.lower(),
                    VerificationCode.code == code,
                    VerificationCode.expires_at >= current_time
                )
            )
            return result.scalars().one_or_none()
        except MultipleResultsFound as e:
            logger.error("Multiple active verification codes found for %s", email)
            raise StorageException("Multiple active verification codes found") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageException(str(e)) from e

    async def consume(self, email: str, code: str) -> None:
        """Delete the specific code row. Idempotent."""
        await self._execute_and_commit(
            delete(VerificationCode).where(
                VerificationCode.email == email.lower(),
                VerificationCode.code == code
            )
        )

    async def purge_expired(self, now: Optional[datetime] = None) -> int:
        """Delete rows that expired before ``now`` and return how many were removed."""
        current_time = now or datetime.now(timezone.utc)
        result = await self._execute_and_commit(
            delete(VerificationCode)
            .where(VerificationCode.expires_at < current_time)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def _execute_and_commit(self, statement):
        try:
            result = await self.db.execute(statement)
            await self.db.commit()
            return result
        except SQLAlchemyError as e:
            logger.error("Verification code store error: %s", e)
            await self.db.rollback()
            raise StorageException(str(e)) from e
