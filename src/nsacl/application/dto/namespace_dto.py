"""Namespace DTOs."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class NamespaceInput:
    """Input for creating a namespace."""

    name: str
    cluster: str
    labels: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_media(cls, body: dict[str, Any]) -> "NamespaceInput":
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")
        try:
            name = body["name"]
            cluster = body["cluster"]
        except KeyError as e:
            raise ValueError(f"Missing required field: {e}") from e
        if not isinstance(name, str) or not name or not isinstance(cluster, str) or not cluster:
            raise ValueError("Fields name and cluster must be non-empty strings")
        labels = body.get("labels") or {}
        if not isinstance(labels, dict):
            raise ValueError("Field labels must be an object")
        return cls(name=name, cluster=cluster, labels={str(k): str(v) for k, v in labels.items()})
