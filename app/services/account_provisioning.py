import logging
from typing import Any, Dict, Optional

from fastapi import status

from app.exceptions.base_exception import IdentityProviderException

logger = logging.getLogger(__name__)


async def provision_account(
    identity,
    email: str,
    password: str,
    metadata: Optional[Dict[str, Any]] = None,
    retry_on_duplicate: bool = True,
) -> Dict[str, Any]:
    """
    Drive the identity provider until the caller holds a signed-in user.

    Steps: sign in an existing account; otherwise sign up, force-confirm the
    new account and sign in again. When sign up reports an existing account
    and ``retry_on_duplicate`` is set, sign in is retried once and the
    original sign-up error is raised if the retry fails.

    Sign-up rejections are reported as 400, confirm and final sign-in
    failures as 500.
    """
    try:
        user = await identity.sign_in(email, password)
        logger.info("Existing account signed in: %s", email)
        return user
    except IdentityProviderException as e:
        logger.info("Sign in failed for %s (%s), attempting sign up", email, e.message)

    try:
        account = await identity.sign_up(email, password, metadata)
    except IdentityProviderException as signup_error:
        if retry_on_duplicate and signup_error.kind == IdentityProviderException.DUPLICATE_ACCOUNT:
            logger.info("Account already exists for %s, retrying sign in", email)
            try:
                return await identity.sign_in(email, password)
            except IdentityProviderException as retry_error:
                logger.info("Sign in retry failed for %s: %s", email, retry_error.message)
        logger.error("Signup error for %s: %s", email, signup_error.message)
        raise signup_error.with_status(status.HTTP_400_BAD_REQUEST) from signup_error

    try:
        await identity.force_confirm(account["id"])
    except IdentityProviderException as e:
        logger.error("Confirmation error for %s: %s", email, e.message)
        raise e.with_status(status.HTTP_500_INTERNAL_SERVER_ERROR) from e

    try:
        user = await identity.sign_in(email, password)
    except IdentityProviderException as e:
        logger.error("Login error after confirmation for %s: %s", email, e.message)
        raise e.with_status(status.HTTP_500_INTERNAL_SERVER_ERROR) from e

    logger.info("Provisioned and signed in new account: %s", email)
    return user
