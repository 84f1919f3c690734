from supabase import AsyncClient, AsyncClientOptions, acreate_client

from app.configs.settings import Settings


async def create_service_client(settings: Settings) -> AsyncClient:
    """Supabase client with SERVICE ROLE KEY (admin calls and table reads, bypasses RLS)"""
    if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError("SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is not configured in environment variables")
    return await acreate_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_SERVICE_ROLE_KEY,
        options=_stateless_options(),
    )


async def create_session_client(settings: Settings) -> AsyncClient:
    """
    Fresh client for a single sign in / sign up call.

    A signed-in client keeps the user's session in memory, so each end-user
    call gets its own client instead of sharing the service client.
    """
    return await acreate_client(
        settings.SUPABASE_URL,
        settings.supabase_public_key,
        options=_stateless_options(),
    )


def _stateless_options() -> AsyncClientOptions:
    return AsyncClientOptions(persist_session=False, auto_refresh_token=False)
