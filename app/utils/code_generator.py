import secrets
from datetime import datetime, timedelta
from typing import Optional, Tuple

from app.utils.time import get_utc_now

CODE_MIN = 100000
CODE_MAX = 999999
DEFAULT_TTL_MINUTES = 10

def generate_verification_code(
    ttl_minutes: int = DEFAULT_TTL_MINUTES,
    now: Optional[datetime] = None,
) -> Tuple[str, datetime]:
    """
    Returns a 6-digit numeric code without a leading zero and its expiry time.
    """
    code = str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))
    expires_at = (now or get_utc_now()) + timedelta(minutes=ttl_minutes)
    return code, expires_at
