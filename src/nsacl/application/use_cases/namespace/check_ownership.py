"""Check ownership use case."""

from nsacl.application.dto.actor import Actor
from nsacl.application.ports import OwnershipChecker
from nsacl.application.use_cases.access import get_managed_namespace
from nsacl.domain.value_objects import ClaimConfig, ResourceType


class CheckOwnershipUseCase:
    """Does a namespace the actor manages own a resource."""

    def __init__(
        self,
        unit_of_work_factory: type,
        ownership_checker: OwnershipChecker,
        claim_config: ClaimConfig,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._ownership_checker = ownership_checker
        self._config = claim_config

    async def execute(
        self, actor: Actor, namespace: str, resource_type: ResourceType, resource: str
    ) -> bool:
        async with self._uow_factory() as uow:
            await get_managed_namespace(uow, actor, namespace, self._config)
        return await self._ownership_checker.is_owner(namespace, resource_type, resource)
