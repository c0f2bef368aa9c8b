"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from nsacl.application.ports.repositories.grant_repository import GrantRepository
from nsacl.application.ports.repositories.namespace_repository import (
    NamespaceRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def namespaces(self) -> NamespaceRepository: ...

    @property
    def grants(self) -> GrantRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
