"""
verification_code_tasks.py
Periodic removal of verification codes whose expiry has passed.

Expired codes are already rejected at lookup time; this task only keeps the
table from growing.
"""

import asyncio
import logging
from typing import Dict

from app.celery_app import celery_app
from app.database.database import async_session
from app.repositories.verification_code_repository import VerificationCodeRepository

logger = logging.getLogger(__name__)


def _get_loop() -> asyncio.AbstractEventLoop:
    """Make sure the Celery worker always has an event loop."""
    try:
        return asyncio.get_event_loop()
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        return loop


@celery_app.task(name="purge_expired_verification_codes")
def purge_expired_verification_codes() -> Dict[str, int]:
    """Celery task: delete expired verification codes, returns the count."""
    loop = _get_loop()
    deleted = loop.run_until_complete(_purge_expired_verification_codes())
    logger.info("Purged %s expired verification codes", deleted)
    return {"verification_codes": deleted}


async def _purge_expired_verification_codes(session_factory=async_session) -> int:
    async with session_factory() as db:
        return await VerificationCodeRepository(db).purge_expired()
