"""Ownership checker implementation - answers from the stored grant snapshot."""

from nsacl.domain.services.ownership import is_owner
from nsacl.domain.value_objects import ResourceType


class SnapshotOwnershipChecker:
    """Loads the namespace and its cluster's grants, then runs the ownership resolver."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def is_owner(self, namespace: str, resource_type: ResourceType, resource: str) -> bool:
        async with self._uow_factory() as uow:
            ns = await uow.namespaces.get_by_name(namespace)
            if ns is None:
                return False
            grants = await uow.grants.list_by_cluster(ns.cluster)
        return is_owner(ns, resource_type, resource, grants)
