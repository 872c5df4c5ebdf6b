"""
CRUD operations for User model, plus login and job applications.
"""

from typing import Any, List, Mapping
from sqlalchemy import select, update as sql_update
from sqlalchemy.orm import Session, selectinload

from jobly.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password
from jobly.core.sql import sql_for_partial_update
from jobly.models.job import Job
from jobly.models.user import Application, User
from jobly.schemas.user import User as UserOut, UserDetail, UserNew, UserRegister

USER_FIELD_MAP = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}

UPDATABLE_FIELDS = frozenset({"firstName", "lastName", "password", "email", "isAdmin"})


def _get_row(db: Session, username: str) -> User:
    user = db.get(User, username)
    if user is None:
        raise NotFoundError(f"No user: {username}")
    return user


def authenticate(db: Session, username: str, password: str) -> UserOut:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: Unknown user or wrong password (indistinguishable)
    """
    user = db.get(User, username)
    if user is None or not verify_password(password, user.password):
        raise UnauthorizedError("Invalid username/password")
    return UserOut.model_validate(user)


def register(db: Session, user_data: UserRegister) -> UserOut:
    """
    Create a user with a hashed password.

    `UserNew` carries is_admin; plain `UserRegister` always creates a regular user.

    Raises:
        BadRequestError: If the username is taken
    """
    if db.get(User, user_data.username) is not None:
        raise BadRequestError(f"Duplicate username: {user_data.username}")

    db_user = User(
        username=user_data.username,
        password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        is_admin=user_data.is_admin if isinstance(user_data, UserNew) else False,
    )

    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    return UserOut.model_validate(db_user)


def find_all(db: Session) -> List[UserOut]:
    """All users, ordered by username."""
    return [UserOut.model_validate(user) for user in db.scalars(select(User).order_by(User.username))]


def get(db: Session, username: str) -> UserDetail:
    """
    User profile with applied-to job ids.

    Raises:
        NotFoundError: If no user has this username
    """
    stmt = select(User).where(User.username == username).options(selectinload(User.applications))
    user = db.scalar(stmt)
    if user is None:
        raise NotFoundError(f"No user: {username}")

    detail = UserDetail.model_validate(user)
    detail.jobs = [application.job_id for application in user.applications]
    return detail


def update(db: Session, username: str, data: Mapping[str, Any]) -> UserOut:
    """
    Apply a partial update keyed by external field names.

    A new password is hashed before it is stored.

    Raises:
        BadRequestError: Empty patch, or an attempt to change the username
        NotFoundError: If no user has this username
    """
    patch = sql_for_partial_update(data, USER_FIELD_MAP, UPDATABLE_FIELDS)
    values = dict(patch.values)
    if values.get("password") is not None:
        values["password"] = get_password_hash(values["password"])

    result = db.execute(
        sql_update(User).where(User.username == username).values(**values),
        execution_options={"synchronize_session": False},
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    return UserOut.model_validate(db.get(User, username))


def remove(db: Session, username: str) -> None:
    """
    Raises:
        NotFoundError: If no user has this username
    """
    db.delete(_get_row(db, username))
    db.commit()


def apply_to_job(db: Session, username: str, job_id: int) -> None:
    """
    Record that `username` applied to `job_id`. Applying twice is a no-op.

    Raises:
        NotFoundError: If the user or the job does not exist
    """
    _get_row(db, username)
    if db.get(Job, job_id) is None:
        raise NotFoundError(f"No job: {job_id}")

    if db.get(Application, (username, job_id)) is None:
        db.add(Application(username=username, job_id=job_id))
        db.commit()
