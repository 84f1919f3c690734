from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from supabase import AsyncClient

from app.configs.settings import Settings, settings
from app.database.database import get_db
from app.repositories.post_repository import PostRepository
from app.repositories.verification_code_repository import VerificationCodeRepository
from app.services.email_service import EmailService
from app.services.identity_provider import SupabaseIdentityProvider
from app.services.verification_service import VerificationService
from app.services.wallet_service import WalletProvisioningService
from app.utils.supabase_client import create_session_client


def get_settings() -> Settings:
    return settings


def get_supabase(request: Request) -> AsyncClient:
    """Service-role client created once in the application lifespan."""
    return request.app.state.supabase


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_identity_provider(
    client: AsyncClient = Depends(get_supabase),
    app_settings: Settings = Depends(get_settings),
) -> SupabaseIdentityProvider:
    return SupabaseIdentityProvider(
        admin_client=client,
        session_client_factory=lambda: create_session_client(app_settings),
    )


def get_verification_code_repository(db: AsyncSession = Depends(get_db)) -> VerificationCodeRepository:
    return VerificationCodeRepository(db)


def get_post_repository(client: AsyncClient = Depends(get_supabase)) -> PostRepository:
    return PostRepository(client)


def get_verification_service(
    codes: VerificationCodeRepository = Depends(get_verification_code_repository),
    notifier: EmailService = Depends(get_email_service),
    identity: SupabaseIdentityProvider = Depends(get_identity_provider),
    app_settings: Settings = Depends(get_settings),
) -> VerificationService:
    return VerificationService(
        codes=codes,
        notifier=notifier,
        identity=identity,
        ttl_minutes=app_settings.VERIFICATION_CODE_TTL_MINUTES,
    )


def get_wallet_service(
    identity: SupabaseIdentityProvider = Depends(get_identity_provider),
    app_settings: Settings = Depends(get_settings),
) -> WalletProvisioningService:
    return WalletProvisioningService(
        identity=identity,
        provider_name=app_settings.WALLET_PROVIDER_NAME,
        retry_on_duplicate=app_settings.WALLET_RETRY_ON_DUPLICATE,
    )
