# Import every model so Base.metadata is complete
from app.models.verification_code import VerificationCode
