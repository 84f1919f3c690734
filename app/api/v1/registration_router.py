from typing import Optional

from fastapi import APIRouter, Body, Depends

from app.dependencies import get_verification_service, get_wallet_service
from app.dto.auth_dto import (
    MessageResponse,
    SignupRequest,
    UserResponse,
    VerifyCodeRequest,
    WalletSignupRequest,
)
from app.services.verification_service import VerificationService
from app.services.wallet_service import WalletProvisioningService

router = APIRouter()

# A missing or null body is read as an empty object, so the services report the missing fields

@router.post("/signup", response_model=MessageResponse)
async def request_verification_code(
    request: Optional[SignupRequest] = Body(default=None),
    service: VerificationService = Depends(get_verification_service),
):
    """Send a one-time verification code to the email."""
    request = request or SignupRequest()
    message = await service.request_code(request.email, request.password)
    return MessageResponse(message=message)

@router.post("/verify-code", response_model=UserResponse)
async def verify_code(
    request: Optional[VerifyCodeRequest] = Body(default=None),
    service: VerificationService = Depends(get_verification_service),
):
    """Check the code, then sign in or provision the account."""
    request = request or VerifyCodeRequest()
    user = await service.verify_and_provision(request.email, request.password, request.code)
    return UserResponse(user=user)

@router.post("/phantom-signup", response_model=UserResponse)
async def wallet_signup(
    request: Optional[WalletSignupRequest] = Body(default=None),
    service: WalletProvisioningService = Depends(get_wallet_service),
):
    request = request or WalletSignupRequest()
    user = await service.provision(request.email, request.password, request.public_key)
    return UserResponse(user=user)
