# accounts/authorization.py
"""
Authorization seam used by the API boundary.

Services never look at roles; views ask ``authorize`` before handing a
request to SaleRecorder or InventoryLedger.
"""

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class Principal:
    id: int
    email: str
    role: str
    is_superuser: bool = False

    @classmethod
    def from_user(cls, user) -> Optional["Principal"]:
        if user is None or not getattr(user, "is_authenticated", False):
            return None
        return cls(
            id=user.pk,
            email=user.email,
            role=getattr(user, "role", ""),
            is_superuser=user.is_superuser,
        )


def authorize(principal: Optional[Principal], required_roles: Iterable[str]) -> bool:
    if principal is None:
        return False

    if principal.is_superuser:
        return True

    required_roles = tuple(required_roles)

    # No declared roles: any authenticated principal
    if not required_roles:
        return True

    return principal.role in required_roles
