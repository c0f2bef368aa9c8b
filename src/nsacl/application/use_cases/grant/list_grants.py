"""List grants use case."""

from nsacl.application.dto.actor import Actor
from nsacl.application.use_cases.access import get_managed_namespace
from nsacl.application.use_cases.grant.name_filter import compile_name_filter
from nsacl.domain.entities import Grant, Namespace
from nsacl.domain.value_objects import ClaimConfig, GrantScope


def in_scope(grant: Grant, namespace: Namespace, scope: GrantScope) -> bool:
    issued = grant.namespace == namespace.name and grant.granted_to != namespace.name
    received = grant.granted_to == namespace.name or grant.is_public
    if scope == GrantScope.GRANTOR:
        return issued
    if scope == GrantScope.GRANTEE:
        return received
    return issued or received


class ListGrantsUseCase:
    """Grants a namespace issued, received, or both."""

    def __init__(self, unit_of_work_factory: type, claim_config: ClaimConfig) -> None:
        self._uow_factory = unit_of_work_factory
        self._config = claim_config

    async def execute(
        self,
        actor: Actor,
        namespace: str,
        scope: GrantScope = GrantScope.ALL,
        name_filter: str | None = None,
    ) -> list[Grant]:
        """Grants on the namespace's cluster in `scope`, sorted by grantor then grantee."""
        pattern = compile_name_filter(name_filter)
        async with self._uow_factory() as uow:
            ns = await get_managed_namespace(uow, actor, namespace, self._config)
            grants = await uow.grants.list_by_cluster(ns.cluster)
        selected = [g for g in grants if in_scope(g, ns, scope) and pattern.match(g.name)]
        return sorted(selected, key=lambda g: (g.namespace, g.granted_to))
