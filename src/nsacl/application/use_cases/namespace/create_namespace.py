"""Create namespace use case."""

import logging
from datetime import UTC, datetime

from nsacl.application.dto.actor import Actor
from nsacl.application.dto.namespace_dto import NamespaceInput
from nsacl.domain import violations
from nsacl.domain.entities import Namespace
from nsacl.domain.exceptions import PermissionDenied, ValidationError
from nsacl.domain.value_objects import ClaimConfig

logger = logging.getLogger(__name__)


class CreateNamespaceUseCase:
    """Create a namespace on a managed cluster. Administrators only."""

    def __init__(self, unit_of_work_factory: type, claim_config: ClaimConfig) -> None:
        self._uow_factory = unit_of_work_factory
        self._config = claim_config

    async def execute(self, actor: Actor, data: NamespaceInput) -> Namespace:
        if not actor.is_admin:
            raise PermissionDenied("Only administrators can create namespaces")

        errors: list[str] = []
        if data.cluster not in self._config.managed_clusters:
            errors.append(violations.cluster_not_managed(data.cluster, self._config.managed_clusters))

        async with self._uow_factory() as uow:
            if await uow.namespaces.get_by_name(data.name) is not None:
                errors.append(violations.namespace_exists(data.name))
            if errors:
                raise ValidationError(errors)

            namespace = Namespace(
                name=data.name,
                cluster=data.cluster,
                labels=dict(data.labels),
                created_at=datetime.now(UTC),
            )
            await uow.namespaces.create(namespace)

        logger.info(
            "namespace.create",
            extra={"namespace": namespace.name, "cluster": namespace.cluster},
        )
        return namespace
