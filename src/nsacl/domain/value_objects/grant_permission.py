"""Permission levels carried by a grant."""

from enum import StrEnum


class GrantPermission(StrEnum):
    """OWNER is the only level that can be re-delegated."""

    OWNER = "OWNER"
    READ = "READ"
    WRITE = "WRITE"
