from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from ..sync.trigger import NullSyncTrigger, SyncTrigger
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: employee management as far as attendance needs it."""

    def __init__(self, users: UserRepository, *, sync_trigger: SyncTrigger | None = None):
        self._users = users
        self._sync = sync_trigger or NullSyncTrigger()

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def get_user(self, user_id: str) -> Optional[User]:
        return self._users.get_by_id(user_id)

    def attendance_eligible_users(self) -> list[User]:
        return [u for u in self._users.list_all() if u.is_attendance_eligible]

    def add_user(self, user: User) -> User:
        self._validate(user)
        existing = self._users.list_all()
        if any(u.id == user.id for u in existing):
            raise ValidationError(f"User {user.id} already exists")
        if any(u.employee_id == user.employee_id for u in existing):
            raise ValidationError(f"Employee ID {user.employee_id} is already taken")

        self._users.add_user(user)
        logger.info("added user %s (%s)", user.id, user.employee_id)
        self._sync.trigger()
        return user

    def update_user(self, user: User) -> User:
        self._validate(user)
        existing = self._users.list_all()
        if not any(u.id == user.id for u in existing):
            raise ValidationError(f"User {user.id} does not exist")
        if any(u.employee_id == user.employee_id and u.id != user.id for u in existing):
            raise ValidationError(f"Employee ID {user.employee_id} is already taken")

        self._users.update_user(user)
        logger.info("updated user %s", user.id)
        self._sync.trigger()
        return user

    @staticmethod
    def _validate(user: User) -> None:
        require_non_empty(user.id, "id")
        require_non_empty(user.employee_id, "Employee ID")
        require_non_empty(user.name, "Name")

        types = [loc.type for loc in user.allowed_locations]
        if len(types) != len(set(types)):
            raise ValidationError("Only one location per type (OFFICE, HOME) is allowed")
