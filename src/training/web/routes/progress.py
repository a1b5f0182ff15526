"""Progress endpoints."""

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from training.core.services import TrainingPlatform
from training.core.tokens import TokenClaims
from training.web.deps import get_current_claims, get_platform
from training.web.schemas import ProgressResponse, StepCompleteResponse

router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.get("", response_model=ProgressResponse)
async def get_progress(
    claims: TokenClaims = Depends(get_current_claims),
    platform: TrainingPlatform = Depends(get_platform),
) -> ProgressResponse:
    """Get the authenticated user's progress record."""
    record = platform.progress.get(claims.user_id)
    return ProgressResponse.model_validate(record.to_dict())


@router.post("/{course_id}/step/{step_id}", response_model=StepCompleteResponse)
async def complete_step(
    course_id: str,
    step_id: str,
    claims: TokenClaims = Depends(get_current_claims),
    platform: TrainingPlatform = Depends(get_platform),
) -> StepCompleteResponse:
    """Mark a step complete.

    step_id is taken as a raw string; a non-numeric id is a 404 like any
    other unknown step.
    """
    record = await run_in_threadpool(
        platform.engine.complete_step, claims.user_id, course_id, step_id
    )
    return StepCompleteResponse(
        message="Progress updated",
        progress=ProgressResponse.model_validate(record.to_dict()),
    )
