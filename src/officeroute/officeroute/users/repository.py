from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def locked(self) -> AbstractContextManager:
        """Keep other writers out while a read-merge-write is in progress."""

        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def add_user(self, user: User) -> None:
        raise NotImplementedError

    def update_user(self, user: User) -> None:
        raise NotImplementedError

    def replace_all(self, users: Sequence[User], *, mark_modified: bool = True) -> None:
        """Replace the whole collection (sync commit).

        ``mark_modified=False`` keeps the revision untouched.
        """

        raise NotImplementedError

    def revision(self) -> int:
        """0 while the collection is still the untouched bootstrap set."""

        raise NotImplementedError
