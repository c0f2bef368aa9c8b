"""Actor DTO - the authenticated caller of a use case."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Actor:
    """Caller identity as resolved by the auth layer."""

    user_id: str
    groups: tuple[str, ...] = field(default_factory=tuple)
    is_admin: bool = False

    def in_any(self, groups: list[str]) -> bool:
        return any(g in self.groups for g in groups)
