from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Identity lookups the approval side depends on (DIP: services see only this interface)."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def is_site_admin(self, user_id: int) -> bool:
        raise NotImplementedError
