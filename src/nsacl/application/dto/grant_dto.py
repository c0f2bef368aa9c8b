"""Grant DTOs."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from nsacl.domain.entities import Grant
from nsacl.domain.value_objects import GrantPermission, PatternType, ResourceType

_REQUIRED = ("name", "resource_type", "resource", "pattern_type", "permission", "granted_to")


def _coerce(enum_cls: type[StrEnum], value: str) -> StrEnum | str:
    """Enum member when known; the raw string otherwise so validators can report it."""
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass
class GrantInput:
    """Grant as submitted by a namespace; cluster and grantor are stamped server-side."""

    name: str
    resource_type: ResourceType | str
    resource: str
    pattern_type: PatternType | str
    permission: GrantPermission | str
    granted_to: str
    labels: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_media(cls, body: dict[str, Any]) -> "GrantInput":
        """Build from a JSON body. Raises ValueError on missing or mistyped fields."""
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")
        missing = [k for k in _REQUIRED if not body.get(k)]
        if missing:
            raise ValueError(f"Missing required field(s): {', '.join(missing)}")
        for key in _REQUIRED:
            if not isinstance(body[key], str):
                raise ValueError(f"Field {key} must be a string")
        labels = body.get("labels") or {}
        if not isinstance(labels, dict):
            raise ValueError("Field labels must be an object")
        return cls(
            name=body["name"],
            resource_type=_coerce(ResourceType, body["resource_type"]),
            resource=body["resource"],
            pattern_type=_coerce(PatternType, body["pattern_type"]),
            permission=_coerce(GrantPermission, body["permission"]),
            granted_to=body["granted_to"],
            labels={str(k): str(v) for k, v in labels.items()},
        )

    def to_grant(self, namespace: str, cluster: str) -> Grant:
        return Grant(
            name=self.name,
            namespace=namespace,
            cluster=cluster,
            resource_type=self.resource_type,
            resource=self.resource,
            pattern_type=self.pattern_type,
            permission=self.permission,
            granted_to=self.granted_to,
            labels=dict(self.labels),
        )


class ApplyStatus(StrEnum):
    """Outcome of applying a grant."""

    CREATED = "created"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


@dataclass
class ApplyResult:
    """Stored (or would-be stored, on dry run) grant and what happened to it."""

    grant: Grant
    status: ApplyStatus
    dry_run: bool = False
