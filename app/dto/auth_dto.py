from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Fields are optional: missing values are reported as 400 by the services.

class CredentialsRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def numbers_as_strings(cls, value):
        # Clients sometimes post codes and passwords as JSON numbers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

class SignupRequest(CredentialsRequest):
    pass

class VerifyCodeRequest(CredentialsRequest):
    code: Optional[str] = None

class WalletSignupRequest(CredentialsRequest):
    model_config = ConfigDict(populate_by_name=True)

    public_key: Optional[str] = Field(default=None, alias="publicKey")

class MessageResponse(BaseModel):
    message: str

class UserResponse(BaseModel):
    user: Dict[str, Any]
