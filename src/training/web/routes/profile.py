"""Profile endpoint."""

from fastapi import APIRouter, Depends

from training.core.services import TrainingPlatform
from training.core.tokens import TokenClaims
from training.web.deps import get_current_claims, get_platform
from training.web.schemas import UserSummary

router = APIRouter(prefix="/api", tags=["profile"])


@router.get("/profile", response_model=UserSummary)
async def get_profile(
    claims: TokenClaims = Depends(get_current_claims),
    platform: TrainingPlatform = Depends(get_platform),
) -> UserSummary:
    """Get the authenticated user's profile."""
    user = platform.identity.get(claims.user_id)
    return UserSummary(**user.summary())
