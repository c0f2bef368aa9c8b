"""Claim compilation configuration - built once at startup, never mutated."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from nsacl.domain.exceptions import ConfigurationError
from nsacl.domain.value_objects.resource_type import ResourceType


@dataclass(frozen=True)
class ClaimConfig:
    """Role mappings, administrator group and managed clusters for claim compilation."""

    roles: Mapping[ResourceType, str]
    admin_roles: Mapping[ResourceType, str]
    admin_group: str
    group_label: str
    managed_clusters: tuple[str, ...]
    group_delimiter: str = field(default=",")

    def __post_init__(self) -> None:
        for attr in ("roles", "admin_roles"):
            mapping = getattr(self, attr)
            missing = [rt.value for rt in ResourceType if not mapping.get(rt)]
            if missing:
                raise ConfigurationError(
                    f"{attr} has no role for resource types: {', '.join(missing)}"
                )
            object.__setattr__(
                self, attr, MappingProxyType({rt: mapping[rt] for rt in ResourceType})
            )
        if not self.managed_clusters:
            raise ConfigurationError("managed_clusters must not be empty")
        if not self.admin_group.strip():
            raise ConfigurationError("admin_group must be configured")
        if not self.group_delimiter:
            raise ConfigurationError("group_delimiter must not be empty")
        object.__setattr__(self, "managed_clusters", tuple(self.managed_clusters))

    def role_order(self) -> list[str]:
        """Distinct roles in ResourceType declaration order."""
        order: list[str] = []
        for rt in ResourceType:
            if self.roles[rt] not in order:
                order.append(self.roles[rt])
        return order
