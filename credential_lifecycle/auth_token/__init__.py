"""Bearer token lifecycle: validation, issuance and rotation."""

from .client import IssuedToken, TokenClient
from .manager import CredentialManager
from .rotation import decide_rotation
from .token_generator import TokenGenerator
from .token_validator import TokenValidator
from .types import CredentialState, CredentialStatus, RotationOutcome, RotationResult

__all__ = [
    "CredentialManager",
    "CredentialState",
    "CredentialStatus",
    "IssuedToken",
    "RotationOutcome",
    "RotationResult",
    "TokenClient",
    "TokenGenerator",
    "TokenValidator",
    "decide_rotation",
]
