"""Registration and login endpoints.

Password hashing is CPU-bound, so both handlers run the platform call in
the threadpool and leave the event loop free for other requests.
"""

from fastapi import APIRouter, Depends, status
from starlette.concurrency import run_in_threadpool

from training.core.services import TrainingPlatform
from training.web.deps import get_platform
from training.web.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserSummary,
)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
async def register(
    request: RegisterRequest,
    platform: TrainingPlatform = Depends(get_platform),
) -> AuthResponse:
    """Create an account and return a bearer token."""
    user, token = await run_in_threadpool(
        platform.register, request.email, request.password, request.name
    )
    return AuthResponse(
        message="User created successfully",
        token=token,
        user=UserSummary(**user.summary()),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    platform: TrainingPlatform = Depends(get_platform),
) -> AuthResponse:
    """Check credentials and return a bearer token."""
    user, token = await run_in_threadpool(platform.login, request.email, request.password)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserSummary(**user.summary()),
    )
