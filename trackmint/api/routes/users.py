"""
User API Routes
Registration and the caller's own profile
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from trackmint.api.deps import get_current_user_id
from trackmint.domain.errors import DomainError
from trackmint.domain.schemas.users import UserCreateRequest, UserResponse, UserUpdateRequest
from trackmint.infrastructure.db.database import get_db
from trackmint.services.profile_service import ProfileService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=UserResponse, status_code=201)
async def register_user(request: UserCreateRequest, db: AsyncSession = Depends(get_db)):
    """Create a profile; the email must be unused"""
    try:
        profile = await ProfileService(db).register(request)
        return UserResponse.model_validate(profile)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to register user: {e}")
        raise HTTPException(status_code=500, detail="Failed to register user")


@router.get("/me", response_model=UserResponse)
async def get_profile(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return UserResponse.model_validate(await ProfileService(db).get(user_id))
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to load profile {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load profile")


@router.put("/me", response_model=UserResponse)
async def update_profile(
    request: UserUpdateRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        profile = await ProfileService(db).update(user_id, request)
        return UserResponse.model_validate(profile)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.exception(f"Failed to update profile {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update profile")
