"""Which side of a grant a listing is about."""

from enum import StrEnum


class GrantScope(StrEnum):
    """Grant listing scope relative to a namespace."""

    ALL = "all"
    GRANTOR = "grantor"
    GRANTEE = "grantee"
