import logging

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from app.configs.settings import Settings
from app.exceptions.base_exception import DeliveryException

logger = logging.getLogger(__name__)


def build_mail_config(settings: Settings) -> ConnectionConfig:
    return ConnectionConfig(
        MAIL_USERNAME=settings.MAIL_USERNAME,
        MAIL_PASSWORD=settings.MAIL_PASSWORD,
        MAIL_FROM=settings.MAIL_FROM,
        MAIL_PORT=settings.MAIL_PORT,
        MAIL_SERVER=settings.MAIL_SERVER,
        MAIL_FROM_NAME=settings.MAIL_FROM_NAME,
        MAIL_STARTTLS=settings.MAIL_STARTTLS,
        MAIL_SSL_TLS=settings.MAIL_SSL_TLS,
        USE_CREDENTIALS=True,
        VALIDATE_CERTS=True
    )


class EmailService:
    """
    Delivers verification codes by email.
    """

    def __init__(self, conf: ConnectionConfig, subject: str, ttl_minutes: int = 10):
        self.mailer = FastMail(conf)
        self.subject = subject
        self.ttl_minutes = ttl_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailService":
        return cls(
            build_mail_config(settings),
            subject=settings.VERIFICATION_EMAIL_SUBJECT,
            ttl_minutes=settings.VERIFICATION_CODE_TTL_MINUTES,
        )

    def verification_body(self, code: str) -> str:
        return (
            f"Your 6-digit verification code is: {code}\n"
            f"This code expires in {self.ttl_minutes} minutes."
        )

    async def send_email(self, subject: str, recipient: str, body: str):
        message = MessageSchema(
            subject=subject,
            recipients=[recipient],
            body=body,
            subtype=MessageType.plain
        )
        await self.mailer.send_message(message)

    async def send_verification_code(self, email: str, code: str):
        """Raises ``DeliveryException`` when the transport fails."""
        try:
            await self.send_email(self.subject, email, self.verification_body(code))
        except Exception as e:
            logger.error("Email error for %s: %s", email, e)
            raise DeliveryException() from e
        logger.info("Email sent successfully to: %s", email)
