"""
Authentication Routes

POST /auth/signup - Register new user (Admin or Applicant)
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
"""

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy import text

from jobboard.db.postgres import get_db_session
from jobboard.core.auth import hash_password, verify_password, create_access_token, get_current_user
from jobboard.schemas.schemas import (
    SignUpRequest, LoginRequest, TokenResponse, UserResponse, MessageResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signup", response_model=MessageResponse, status_code=201)
async def signup(request: SignUpRequest):
    """
    Register a new user account.

    After registration, login to get an access token.
    """
    with get_db_session() as db:
        # Check email exists
        result = db.execute(
            text("SELECT user_id FROM users WHERE email = :email"),
            {"email": request.email}
        )
        if result.fetchone():
            raise HTTPException(status_code=400, detail="Email already exists")

        db.execute(
            text("""
                INSERT INTO users (name, email, address, user_type, password_hash, profile_headline)
                VALUES (:name, :email, :address, :user_type, :password_hash, :profile_headline)
            """),
            {
                "name": request.name,
                "email": request.email,
                "address": request.address,
                "user_type": request.user_type.value,
                "password_hash": hash_password(request.password),
                "profile_headline": request.profile_headline
            }
        )

    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    with get_db_session() as db:
        result = db.execute(
            text("SELECT user_id, password_hash, user_type, is_active FROM users WHERE email = :email"),
            {"email": request.email}
        )
        user = result.fetchone()

    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    user_id, password_hash, user_type, is_active = user

    if not is_active:
        raise HTTPException(status_code=403, detail="Account deactivated")

    if not verify_password(request.password, password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token(data={"sub": str(user_id), "user_type": user_type})

    return TokenResponse(access_token=token, user_id=user_id, user_type=user_type)


@router.get("/me", response_model=UserResponse)
async def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    with get_db_session() as db:
        result = db.execute(
            text("""
                SELECT user_id, name, email, user_type, address, profile_headline, is_active, created_at
                FROM users WHERE user_id = :id
            """),
            {"id": user["user_id"]}
        )
        row = result.mappings().fetchone()

    return UserResponse(**row)
