"""
Per-request caller context.

Services never read ``request.user`` themselves; views build a
:class:`RequestContext` once per request and pass it down explicitly.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from .models import UserRole

GUEST_ROLE = 'GUEST'


@dataclass(frozen=True)
class RequestContext:
    """Authenticated identity and role of the caller."""

    user_id: Optional[UUID]
    role: str

    @classmethod
    def from_request(cls, request) -> 'RequestContext':
        user = getattr(request, 'user', None)
        if user is None or not user.is_authenticated:
            return cls.guest()
        return cls(user_id=user.id, role=user.role)

    @classmethod
    def guest(cls) -> 'RequestContext':
        return cls(user_id=None, role=GUEST_ROLE)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def can_manage_venue(self, venue) -> bool:
        """Admins manage every venue; managers only their own."""
        if not self.is_authenticated:
            return False
        return self.is_admin or venue.manager_id == self.user_id
