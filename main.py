from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.configs.settings import settings
from app.database.database import create_tables
# Ensure all models are imported so SQLAlchemy metadata is populated
import app.models  # noqa: F401
from app.middlewares.error_handler import ErrorHandlerMiddleware, request_validation_exception_handler
from app.services.email_service import EmailService
from app.utils.supabase_client import create_service_client

from app.api.v1 import content_router, registration_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Collaborators are built once and handed to requests through app.dependencies
    await create_tables()
    app.state.supabase = await create_service_client(settings)
    app.state.email_service = EmailService.from_settings(settings)
    logger.info("Server running on port %s", settings.PORT)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Email-verified and wallet account provisioning API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(ErrorHandlerMiddleware)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

# CORS stays outside the error handler
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Routers ---
app.include_router(registration_router.router, prefix="/api", tags=["Registration"])
app.include_router(content_router.router, prefix="/api", tags=["Content"])


@app.get("/")
def root():
    return {
        "app_name": settings.APP_NAME,
        "version": "1.0.0",
        "description": "Email-verified and wallet account provisioning API",
        "documentation": "/docs",
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT, reload=False)
