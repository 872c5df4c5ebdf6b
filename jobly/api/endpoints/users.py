"""
User endpoints.

Listing users and creating them on someone's behalf is for admins; everything
under /users/{username} is open to that user and to admins.
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import require
from jobly.core.permissions import Action
from jobly.core.security import create_access_token
from jobly.crud import user as user_crud
from jobly.schemas.user import (
    UserDetailResponse,
    UserListResponse,
    UserNew,
    UserResponse,
    UserTokenResponse,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserTokenResponse,
    dependencies=[Depends(require(Action.CREATE_USER))],
)
def create_user(request: UserNew, db: Session = Depends(get_db)):
    """Create a user, possibly an admin, and return a token for them. Admin only."""
    user = user_crud.register(db, request)
    logger.info(f"Admin created user {user.username} (admin: {user.is_admin})")
    return {"user": user, "token": create_access_token(user.username, user.is_admin)}


@router.get("", response_model=UserListResponse, dependencies=[Depends(require(Action.LIST_USERS))])
def list_users(db: Session = Depends(get_db)):
    """List all users. Admin only."""
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserDetailResponse, dependencies=[Depends(require(Action.READ_USER))])
def get_user(username: str, db: Session = Depends(get_db)):
    """User profile with applied job ids."""
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserResponse, dependencies=[Depends(require(Action.UPDATE_USER))])
def update_user(username: str, request: UserUpdate, db: Session = Depends(get_db)):
    """Partially update a profile; body may hold firstName, lastName, password, email."""
    user = user_crud.update(db, username, request.model_dump(exclude_unset=True, by_alias=True))
    logger.info(f"Updated user {username}")
    return {"user": user}


@router.delete("/{username}", dependencies=[Depends(require(Action.REMOVE_USER))])
def delete_user(username: str, db: Session = Depends(get_db)):
    user_crud.remove(db, username)
    logger.info(f"Deleted user {username}")
    return {"deleted": username}


@router.post("/{username}/jobs/{job_id}", dependencies=[Depends(require(Action.APPLY_TO_JOB))])
def apply_to_job(username: str, job_id: int, db: Session = Depends(get_db)):
    """Record an application of `username` to job `job_id`."""
    user_crud.apply_to_job(db, username, job_id)
    logger.info(f"User {username} applied to job {job_id}")
    return {"applied": job_id}
