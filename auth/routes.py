"""
Auth API routes: signup, login and profile management.

Mounted at the application root.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth import service
from auth.dependencies import db_session, get_current_user_id
from utils.schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    UpdatePasswordRequest,
    UpdatePictureRequest,
    UpdateProfileRequest,
    UserOut,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Register a new user."""
    user, token = await service.signup(session, req)
    return {
        "message": "User created successfully",
        "user": UserOut.from_user(user),
        "token": token,
    }


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Login with email or username + password."""
    user, token = await service.login(session, req)
    return {
        "message": "Login successful",
        "user": UserOut.from_user(user),
        "token": token,
    }


@router.get("/profile", response_model=UserResponse)
async def get_profile(
    session: AsyncSession = Depends(db_session),
    user_id: str = Depends(get_current_user_id),
) -> Dict[str, Any]:
    user = await service.get_profile(session, user_id)
    return {"user": UserOut.from_user(user)}


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    req: UpdateProfileRequest,
    session: AsyncSession = Depends(db_session),
    user_id: str = Depends(get_current_user_id),
) -> Dict[str, Any]:
    user = await service.update_profile(session, user_id, req)
    return {"message": "Profile updated successfully", "user": UserOut.from_user(user)}


@router.put("/password", response_model=MessageResponse)
async def update_password(
    req: UpdatePasswordRequest,
    session: AsyncSession = Depends(db_session),
    user_id: str = Depends(get_current_user_id),
) -> Dict[str, Any]:
    await service.update_password(session, user_id, req)
    return {"message": "Password updated successfully"}


@router.put("/profile-picture", response_model=UserResponse)
async def update_profile_picture(
    req: UpdatePictureRequest,
    session: AsyncSession = Depends(db_session),
    user_id: str = Depends(get_current_user_id),
) -> Dict[str, Any]:
    user = await service.update_profile_picture(session, user_id, req)
    return {"message": "Profile picture updated successfully", "user": UserOut.from_user(user)}
