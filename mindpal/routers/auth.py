"""
Sign-up and sign-in endpoints backed by Supabase Auth.
"""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, EmailStr, Field

from mindpal.core.deps import AuthClientDep, SupabaseDep
from mindpal.models.schemas import UserType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class SignUpRequest(BaseModel):
    """New account. Therapist fields are only read when user_type is therapist."""

    email: EmailStr
    password: str = Field(..., min_length=6)
    username: str | None = Field(None, max_length=50)
    user_type: UserType = "user"
    name: str | None = Field(None, max_length=100)
    specialization: str | None = None
    experience: str | None = None
    description: str | None = None
    languages: list[str] | None = None
    price: float | None = Field(None, ge=0)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    user_id: str
    user_type: UserType
    access_token: str | None = None
    refresh_token: str | None = None
    message: str


@router.post("/signup", response_model=AuthResponse)
async def sign_up(
    request: SignUpRequest,
    auth_client: AuthClientDep,
    supabase_service: SupabaseDep,
) -> AuthResponse:
    """
    Create a Supabase Auth account plus its profile row.

    Therapists also get a therapist listing so users can find them.
    """
    try:
        result = auth_client.auth.sign_up(
            {
                "email": request.email,
                "password": request.password,
                "options": {
                    "data": {"username": request.username, "user_type": request.user_type}
                },
            }
        )
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Sign up failed: {str(e)}")

    if not result.user:
        raise HTTPException(status_code=400, detail="Sign up failed")

    user_id = result.user.id

    try:
        await supabase_service.create_profile(
            user_id=user_id,
            email=request.email,
            username=request.username,
            user_type=request.user_type,
        )

        if request.user_type == "therapist":
            await supabase_service.save_therapist(
                user_id,
                {
                    "name": request.name or request.username or request.email,
                    "email": request.email,
                    "specialization": request.specialization,
                    "experience": request.experience,
                    "description": request.description,
                    "languages": request.languages,
                    "price": request.price,
                    "rating": 0,
                },
            )
    except Exception as e:
        logger.error(f"❌ Profile setup failed for {user_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Profile setup failed: {str(e)}")

    session = result.session
    return AuthResponse(
        user_id=user_id,
        user_type=request.user_type,
        access_token=session.access_token if session else None,
        refresh_token=session.refresh_token if session else None,
        message="Welcome to MindPal! 🐾" if session else "Check your email to confirm your account",
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    auth_client: AuthClientDep,
    supabase_service: SupabaseDep,
) -> AuthResponse:
    """Sign in with email and password."""
    try:
        result = auth_client.auth.sign_in_with_password(
            {"email": request.email, "password": request.password}
        )
    except Exception as e:
        logger.warning(f"⚠️  Login failed for {request.email}: {e}")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not result.user or not result.session:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    try:
        profile = await supabase_service.get_profile(result.user.id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Login failed: {str(e)}")

    return AuthResponse(
        user_id=result.user.id,
        user_type=profile.user_type if profile else "user",
        access_token=result.session.access_token,
        refresh_token=result.session.refresh_token,
        message="Welcome back! 🐾",
    )
