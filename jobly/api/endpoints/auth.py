"""
Authentication endpoints.

- POST /auth/token: Exchange username/password for a JWT
- POST /auth/register: Create a (non-admin) account and receive a JWT
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.security import create_access_token
from jobly.crud import user as user_crud
from jobly.schemas.user import TokenResponse, UserLogin, UserRegister

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(request: UserLogin, db: Session = Depends(get_db)):
    """Authenticate and return a JWT carrying the username and admin flag."""
    user = user_crud.authenticate(db, request.username, request.password)
    logger.info(f"User logged in: {user.username}")
    return {"token": create_access_token(user.username, user.is_admin)}


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
def register(request: UserRegister, db: Session = Depends(get_db)):
    """Register a new user account; the token allows immediate login."""
    user = user_crud.register(db, request)
    logger.info(f"New user registered: {user.username}")
    return {"token": create_access_token(user.username, user.is_admin)}
