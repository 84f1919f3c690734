from pydantic import BaseModel
from datetime import datetime

class VerificationCodeCreate(BaseModel):
    email: str
    code: str
    expires_at: datetime
