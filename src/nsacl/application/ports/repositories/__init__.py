"""Repository ports."""

from nsacl.application.ports.repositories.grant_repository import GrantRepository
from nsacl.application.ports.repositories.namespace_repository import (
    NamespaceRepository,
)

__all__ = [
    "GrantRepository",
    "NamespaceRepository",
]
