"""
Roles and request context
"""
from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class UserRole(str, Enum):
    """User types in the marketplace"""
    PROVIDER = "provider"  # Lists services and publishes availability
    SEEKER = "seeker"      # Books services


@dataclass(frozen=True)
class RequestContext:
    """
    Identity of the authenticated actor for one request.

    Built once per request from the bearer token and passed explicitly
    into every booking and availability operation.
    """
    actor_id: UUID
    role: UserRole

    @property
    def is_provider(self) -> bool:
        return self.role == UserRole.PROVIDER
