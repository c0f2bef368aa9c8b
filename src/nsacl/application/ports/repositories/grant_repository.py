"""Grant repository port."""

from typing import Protocol

from nsacl.domain.entities import Grant
from nsacl.domain.value_objects import ResourceType


class GrantRepository(Protocol):
    """Port for grant persistence."""

    async def list_all(self) -> list[Grant]: ...

    async def list_by_cluster(self, cluster: str) -> list[Grant]: ...

    async def list_by_namespace(self, namespace: str) -> list[Grant]: ...

    async def get_by_name(self, cluster: str, namespace: str, name: str) -> Grant | None: ...

    async def create(self, grant: Grant) -> Grant: ...

    async def update_labels(self, grant: Grant) -> None: ...

    async def delete(self, grant: Grant) -> None: ...

    async def lock_cluster(self, cluster: str, resource_type: ResourceType) -> None:
        """Serialize writers of one (cluster, resource type) until the transaction ends."""
        ...
