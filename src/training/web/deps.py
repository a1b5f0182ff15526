"""Request dependencies: platform access and bearer authentication."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from training.core.errors import MissingTokenError
from training.core.services import TrainingPlatform
from training.core.tokens import TokenClaims

# auto_error=False so a missing header reaches our 401 handler
bearer_scheme = HTTPBearer(auto_error=False)


def get_platform(request: Request) -> TrainingPlatform:
    """Get the platform attached to the app at creation."""
    return request.app.state.platform


def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    platform: TrainingPlatform = Depends(get_platform),
) -> TokenClaims:
    """Verify the bearer token of the current request.

    Raises:
        MissingTokenError: No bearer token (401)
        InvalidTokenError: Forged, malformed or expired token (403)
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()
    return platform.tokens.verify(credentials.credentials)
