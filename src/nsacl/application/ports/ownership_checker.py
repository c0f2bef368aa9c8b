"""Ownership checker port - per-request resource authorization."""

from typing import Protocol

from nsacl.domain.value_objects import ResourceType


class OwnershipChecker(Protocol):
    """Port for asking whether a namespace effectively owns a resource."""

    async def is_owner(self, namespace: str, resource_type: ResourceType, resource: str) -> bool: ...
