"""Resource pattern types."""

from enum import StrEnum


class PatternType(StrEnum):
    """How a grant's resource string is matched against resource names."""

    LITERAL = "LITERAL"
    PREFIXED = "PREFIXED"
