"""Namespace entity - a tenant on one managed cluster."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Namespace:
    """Namespace - unique by name, bound to a single cluster."""

    name: str
    cluster: str
    labels: dict[str, str] = field(default_factory=dict, hash=False)
    created_at: datetime | None = field(default=None, compare=False)

    def groups(self, label_key: str, delimiter: str = ",") -> list[str]:
        """External group identities listed in the `label_key` label."""
        value = self.labels.get(label_key) or ""
        return [g.strip() for g in value.split(delimiter) if g.strip()]
