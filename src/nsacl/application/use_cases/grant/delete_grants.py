"""Delete grants use case."""

import logging

from nsacl.application.dto.actor import Actor
from nsacl.application.use_cases.access import get_managed_namespace
from nsacl.application.use_cases.grant.name_filter import compile_name_filter
from nsacl.domain import violations
from nsacl.domain.entities import Grant
from nsacl.domain.exceptions import NotFound, ValidationError
from nsacl.domain.value_objects import ClaimConfig

logger = logging.getLogger(__name__)


class DeleteGrantsUseCase:
    """Delete grants issued by a namespace whose names match a wildcard filter."""

    def __init__(self, unit_of_work_factory: type, claim_config: ClaimConfig) -> None:
        self._uow_factory = unit_of_work_factory
        self._config = claim_config

    async def execute(
        self,
        actor: Actor,
        namespace: str,
        name_filter: str,
        dry_run: bool = False,
    ) -> list[Grant]:
        """Return the deleted (or, on dry run, matching) grants.

        Self-assigned grants carry ownership and only administrators may remove them.
        """
        pattern = compile_name_filter(name_filter)
        async with self._uow_factory() as uow:
            ns = await get_managed_namespace(uow, actor, namespace, self._config)
            matched = [
                g
                for g in await uow.grants.list_by_namespace(ns.name)
                if g.cluster == ns.cluster and pattern.match(g.name)
            ]
            if not matched:
                raise NotFound("Grant", name_filter)

            if not actor.is_admin:
                self_assigned = [g.name for g in matched if g.is_self_assigned]
                if self_assigned:
                    raise ValidationError(
                        [violations.self_assigned_delete(name_filter, self_assigned)]
                    )

            if dry_run:
                return matched

            for resource_type in sorted({g.resource_type for g in matched}):
                await uow.grants.lock_cluster(ns.cluster, resource_type)
            for grant in matched:
                await uow.grants.delete(grant)
                logger.info(
                    "grant.delete",
                    extra={
                        "grantor": ns.name,
                        "grant": grant.name,
                        "user_id": actor.user_id,
                    },
                )
            return matched
