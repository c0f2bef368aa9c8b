"""List namespaces use case."""

from nsacl.application.dto.actor import Actor
from nsacl.application.use_cases.access import can_manage
from nsacl.domain.entities import Namespace
from nsacl.domain.value_objects import ClaimConfig


class ListNamespacesUseCase:
    """Namespaces the actor may manage."""

    def __init__(self, unit_of_work_factory: type, claim_config: ClaimConfig) -> None:
        self._uow_factory = unit_of_work_factory
        self._config = claim_config

    async def execute(self, actor: Actor) -> list[Namespace]:
        async with self._uow_factory() as uow:
            namespaces = await uow.namespaces.list_all()
        visible = [ns for ns in namespaces if can_manage(actor, ns, self._config)]
        return sorted(visible, key=lambda ns: ns.name)
