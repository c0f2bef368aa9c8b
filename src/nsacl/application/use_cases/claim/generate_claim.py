"""Generate claim use case."""

import logging
from collections import defaultdict
from collections.abc import Sequence

from nsacl.domain.entities import Claim, Grant
from nsacl.domain.services.claim_compiler import admin_claim, compile_claim
from nsacl.domain.services.ownership import visible_grants
from nsacl.domain.value_objects import ClaimConfig

logger = logging.getLogger(__name__)


class GenerateClaimUseCase:
    """Compile the authorization claim for a set of external groups."""

    def __init__(self, unit_of_work_factory: type, claim_config: ClaimConfig) -> None:
        self._uow_factory = unit_of_work_factory
        self._config = claim_config

    async def execute(self, groups: Sequence[str]) -> Claim:
        groups = [g for g in groups if g]
        if self._config.admin_group in groups:
            logger.info("claim.compile.admin", extra={"groups": groups})
            return admin_claim(self._config)

        async with self._uow_factory() as uow:
            namespaces = await uow.namespaces.list_all()
            grants = await uow.grants.list_all()

        by_cluster: dict[str, list[Grant]] = defaultdict(list)
        for grant in grants:
            by_cluster[grant.cluster].append(grant)

        claim = compile_claim(
            groups,
            namespaces,
            lambda ns: visible_grants(ns, by_cluster.get(ns.cluster, [])),
            self._config,
        )
        logger.info(
            "claim.compile.done",
            extra={"groups": groups, "entries": len(claim.entries)},
        )
        return claim
