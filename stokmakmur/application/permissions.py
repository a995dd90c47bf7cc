"""Role checks for manager-only operations."""

from stokmakmur.core.entities.inventory import UserRole
from stokmakmur.core.exceptions import PermissionDeniedError


def require_manager(role: UserRole, operation: str) -> None:
    if role != UserRole.MANAGER:
        raise PermissionDeniedError(role.value, operation)
