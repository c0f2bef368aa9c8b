"""Grant entity - a namespace sharing a permission over matched resources."""

from dataclasses import dataclass, field
from datetime import datetime

from nsacl.domain.value_objects import GrantPermission, PatternType, ResourceType

PUBLIC_GRANTEE = "*"


@dataclass(frozen=True)
class Grant:
    """Grant issued by `namespace` on `cluster` to `granted_to` (a namespace or "*").

    Identity is (cluster, namespace, name). The payload fields are immutable once
    stored; only labels may change.
    """

    name: str
    namespace: str
    cluster: str
    resource_type: ResourceType
    resource: str
    pattern_type: PatternType
    permission: GrantPermission
    granted_to: str
    labels: dict[str, str] = field(default_factory=dict, hash=False)
    created_at: datetime | None = field(default=None, compare=False)

    @property
    def identity(self) -> tuple[str, str, str]:
        return (self.cluster, self.namespace, self.name)

    @property
    def payload(self) -> tuple[str, str, str, str, str]:
        return (
            self.resource_type,
            self.resource,
            self.pattern_type,
            self.permission,
            self.granted_to,
        )

    @property
    def is_public(self) -> bool:
        return self.granted_to == PUBLIC_GRANTEE

    @property
    def is_self_assigned(self) -> bool:
        return self.granted_to == self.namespace
