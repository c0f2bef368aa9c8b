"""Compiled claim - the external authorization payload."""

from dataclasses import dataclass, field


@dataclass
class CompiledClaimEntry:
    """One role bound to anchored resource patterns on anchored cluster selectors."""

    role: str
    patterns: list[str]
    clusters: list[str]


@dataclass
class Claim:
    """Ordered claim entries; `admin` marks the universal administrator claim."""

    entries: list[CompiledClaimEntry] = field(default_factory=list)
    admin: bool = False
