"""Training module catalog and media endpoints."""

from fastapi import APIRouter, Depends

from training.core.services import TrainingPlatform
from training.core.tokens import TokenClaims
from training.web.deps import get_current_claims, get_platform
from training.web.schemas import ModuleResponse, VideoResponse

router = APIRouter(prefix="/api", tags=["modules"])


@router.get("/modules/{module_id}", response_model=ModuleResponse)
async def get_module(
    module_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    platform: TrainingPlatform = Depends(get_platform),
) -> ModuleResponse:
    """Get catalog content for a module."""
    module = platform.catalog.get(module_id)
    return ModuleResponse.model_validate(module.to_dict())


@router.get("/videos/{filename}", response_model=VideoResponse)
async def get_video(
    filename: str,
    platform: TrainingPlatform = Depends(get_platform),
) -> VideoResponse:
    """Describe a video. No media is streamed."""
    return VideoResponse(**platform.video_descriptor(filename))
