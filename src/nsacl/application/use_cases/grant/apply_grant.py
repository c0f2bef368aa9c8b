"""Apply grant use case."""

import logging
from dataclasses import replace
from datetime import UTC, datetime

from nsacl.application.dto.actor import Actor
from nsacl.application.dto.grant_dto import ApplyResult, ApplyStatus, GrantInput
from nsacl.application.use_cases.access import get_managed_namespace
from nsacl.domain.entities import Grant, Namespace
from nsacl.domain.exceptions import ValidationError
from nsacl.domain.services.grant_validator import (
    validate_admin_grant,
    validate_grant,
    validate_immutable,
)
from nsacl.domain.value_objects import ClaimConfig

logger = logging.getLogger(__name__)


class ApplyGrantUseCase:
    """Create a grant or update its labels, after validating it against the cluster snapshot."""

    def __init__(self, unit_of_work_factory: type, claim_config: ClaimConfig) -> None:
        self._uow_factory = unit_of_work_factory
        self._config = claim_config

    async def execute(
        self,
        actor: Actor,
        namespace: str,
        grant_input: GrantInput,
        dry_run: bool = False,
    ) -> ApplyResult:
        """Apply `grant_input` as issued by `namespace`.

        Administrators writing a grant to the namespace itself confer ownership and
        only go through the enum and collision checks. Every other write goes through the
        self-service rules. Raises ValidationError carrying every violation.
        """
        async with self._uow_factory() as uow:
            grantor = await get_managed_namespace(uow, actor, namespace, self._config)
            candidate = grant_input.to_grant(grantor.name, grantor.cluster)

            await uow.grants.lock_cluster(grantor.cluster, candidate.resource_type)
            grants = await uow.grants.list_by_cluster(grantor.cluster)
            namespaces = await uow.namespaces.list_by_cluster(grantor.cluster)
            existing = next((g for g in grants if g.identity == candidate.identity), None)

            errors = self._validate(actor, candidate, grantor, namespaces, grants)
            errors.extend(validate_immutable(existing, candidate))
            if errors:
                logger.info(
                    "grant.apply.rejected",
                    extra={
                        "grantor": grantor.name,
                        "grant": candidate.name,
                        "violations": len(errors),
                    },
                )
                raise ValidationError(errors)

            if existing is None:
                status = ApplyStatus.CREATED
                stored = replace(candidate, created_at=datetime.now(UTC))
            elif existing.labels == candidate.labels:
                status = ApplyStatus.UNCHANGED
                stored = existing
            else:
                status = ApplyStatus.CHANGED
                stored = replace(existing, labels=dict(candidate.labels))

            if dry_run:
                return ApplyResult(grant=stored, status=status, dry_run=True)

            if status == ApplyStatus.CREATED:
                await uow.grants.create(stored)
            elif status == ApplyStatus.CHANGED:
                await uow.grants.update_labels(stored)
            else:
                return ApplyResult(grant=stored, status=status)

            logger.info(
                f"grant.apply.{status.value}",
                extra={
                    "grantor": grantor.name,
                    "grant": stored.name,
                    "granted_to": stored.granted_to,
                    "user_id": actor.user_id,
                },
            )
            return ApplyResult(grant=stored, status=status)

    def _validate(
        self,
        actor: Actor,
        candidate: Grant,
        grantor: Namespace,
        namespaces: list[Namespace],
        grants: list[Grant],
    ) -> list[str]:
        if actor.is_admin and candidate.is_self_assigned:
            return validate_admin_grant(candidate, grants)
        return validate_grant(candidate, grantor, namespaces, grants)
