"""
Authorization policy.

Every protected route asks the same question, "may this caller perform this
action (on this user's resource)?", and `authorize` answers it in one place.
Denials raise UnauthorizedError, which the app maps to 401 for both missing
and insufficient credentials.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from jobly.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)


class Role(str, enum.Enum):
    ANONYMOUS = "anonymous"
    USER = "user"
    ADMIN = "admin"


class Action(str, enum.Enum):
    READ_JOB = "read_job"
    CREATE_JOB = "create_job"
    UPDATE_JOB = "update_job"
    REMOVE_JOB = "remove_job"

    READ_COMPANY = "read_company"
    CREATE_COMPANY = "create_company"
    UPDATE_COMPANY = "update_company"
    REMOVE_COMPANY = "remove_company"

    LIST_USERS = "list_users"
    CREATE_USER = "create_user"
    READ_USER = "read_user"
    UPDATE_USER = "update_user"
    REMOVE_USER = "remove_user"
    APPLY_TO_JOB = "apply_to_job"


@dataclass(frozen=True)
class Caller:
    """Who is making the request, as far as the bearer token says."""
    role: Role = Role.ANONYMOUS
    username: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


ANONYMOUS = Caller()

PUBLIC_ACTIONS = frozenset({Action.READ_JOB, Action.READ_COMPANY})

ADMIN_ACTIONS = frozenset({
    Action.CREATE_JOB,
    Action.UPDATE_JOB,
    Action.REMOVE_JOB,
    Action.CREATE_COMPANY,
    Action.UPDATE_COMPANY,
    Action.REMOVE_COMPANY,
    Action.LIST_USERS,
    Action.CREATE_USER,
})

# Allowed to the admin or to the user the resource belongs to
OWNER_ACTIONS = frozenset({
    Action.READ_USER,
    Action.UPDATE_USER,
    Action.REMOVE_USER,
    Action.APPLY_TO_JOB,
})


def is_allowed(caller: Caller, action: Action, owner: Optional[str] = None) -> bool:
    if action in PUBLIC_ACTIONS:
        return True
    if caller.is_admin:
        return True
    if action in OWNER_ACTIONS:
        return caller.role is Role.USER and owner is not None and caller.username == owner
    return False


def authorize(caller: Caller, action: Action, owner: Optional[str] = None) -> None:
    """Raise UnauthorizedError unless `caller` may perform `action`."""
    if not is_allowed(caller, action, owner):
        logger.warning(f"Denied {action.value} to {caller.role.value} caller {caller.username or '-'}")
        raise UnauthorizedError()
