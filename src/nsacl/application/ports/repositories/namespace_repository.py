"""Namespace repository port."""

from typing import Protocol

from nsacl.domain.entities import Namespace


class NamespaceRepository(Protocol):
    """Port for namespace persistence."""

    async def list_all(self) -> list[Namespace]: ...

    async def list_by_cluster(self, cluster: str) -> list[Namespace]: ...

    async def get_by_name(self, name: str) -> Namespace | None: ...

    async def create(self, namespace: Namespace) -> Namespace: ...
