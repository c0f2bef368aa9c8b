"""Grant validator - self-service and administrator grant rules, payload immutability."""

from collections.abc import Iterable

from nsacl.domain import violations
from nsacl.domain.entities import PUBLIC_GRANTEE, Grant, Namespace
from nsacl.domain.services.collision_validator import validate_no_collision
from nsacl.domain.services.ownership import can_delegate
from nsacl.domain.value_objects import GrantPermission, PatternType, ResourceType

# Only these resource types may be shared across namespaces without an administrator.
GRANTABLE_RESOURCE_TYPES = (ResourceType.TOPIC, ResourceType.CONNECT_CLUSTER)
# OWNER is administrator-only.
GRANTABLE_PERMISSIONS = (GrantPermission.READ, GrantPermission.WRITE)
SUPPORTED_PATTERN_TYPES = (PatternType.LITERAL, PatternType.PREFIXED)


def validate_grant(
    candidate: Grant,
    grantor: Namespace,
    namespaces: Iterable[Namespace],
    grants: Iterable[Grant],
) -> list[str]:
    """Validate a self-service grant issued by `grantor`.

    Every rule is evaluated; the returned list holds one violation per failed
    rule (empty means valid).
    """
    errors: list[str] = []

    if candidate.resource_type not in GRANTABLE_RESOURCE_TYPES:
        errors.append(
            violations.resource_type_not_grantable(
                candidate.resource_type, GRANTABLE_RESOURCE_TYPES
            )
        )

    if candidate.permission not in GRANTABLE_PERMISSIONS:
        errors.append(
            violations.permission_not_grantable(candidate.permission, GRANTABLE_PERMISSIONS)
        )

    if candidate.pattern_type not in SUPPORTED_PATTERN_TYPES:
        errors.append(
            violations.pattern_type_not_supported(
                candidate.pattern_type, SUPPORTED_PATTERN_TYPES
            )
        )

    grantee_exists = any(
        ns.name == candidate.granted_to and ns.cluster == grantor.cluster
        for ns in namespaces
    )
    if not grantee_exists and candidate.granted_to != PUBLIC_GRANTEE:
        errors.append(violations.grantee_not_found(candidate.granted_to))

    if candidate.granted_to == grantor.name:
        errors.append(violations.self_grant(candidate.granted_to))

    if not can_delegate(candidate, grantor, grants):
        errors.append(
            violations.not_top_level_owner(candidate.resource, candidate.pattern_type)
        )

    return errors


def validate_immutable(existing: Grant | None, candidate: Grant) -> list[str]:
    """An existing grant may only change its labels."""
    if existing is None or existing.payload == candidate.payload:
        return []
    return [violations.payload_immutable(candidate.name)]


def validate_admin_grant(candidate: Grant, grants: Iterable[Grant]) -> list[str]:
    """Validate a grant an administrator assigns to the issuing namespace itself.

    Self-service restrictions do not apply, but the grant must still use known
    enum values. OWNER grants are additionally checked for collisions, which only
    makes sense once the resource type and pattern type are known.
    """
    errors: list[str] = []

    if candidate.resource_type not in tuple(ResourceType):
        errors.append(
            violations.resource_type_not_grantable(candidate.resource_type, tuple(ResourceType))
        )

    if candidate.permission not in tuple(GrantPermission):
        errors.append(
            violations.permission_not_grantable(candidate.permission, tuple(GrantPermission))
        )

    if candidate.pattern_type not in SUPPORTED_PATTERN_TYPES:
        errors.append(
            violations.pattern_type_not_supported(
                candidate.pattern_type, SUPPORTED_PATTERN_TYPES
            )
        )

    if not errors and candidate.permission == GrantPermission.OWNER:
        errors.extend(validate_no_collision(candidate, grants))
    return errors
