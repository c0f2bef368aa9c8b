"""Human-readable violation messages returned by the grant validators."""

from collections.abc import Iterable

_INVALID_FIELD = 'Invalid value "{value}" for field "{field}": {reason}.'
_INVALID_FIELDS = 'Invalid value "{value}" for fields "{fields}": {reason}.'


def _one_of(field: str, value: object, allowed: Iterable[object]) -> str:
    allowed_str = ", ".join(str(a) for a in allowed)
    return _INVALID_FIELD.format(
        value=value, field=field, reason=f'value must be one of "{allowed_str}"'
    )


def resource_type_not_grantable(value: object, allowed: Iterable[object]) -> str:
    return _one_of("resourceType", value, allowed)


def permission_not_grantable(value: object, allowed: Iterable[object]) -> str:
    return _one_of("permission", value, allowed)


def pattern_type_not_supported(value: object, allowed: Iterable[object]) -> str:
    return _one_of("patternType", value, allowed)


def grantee_not_found(granted_to: str) -> str:
    return _INVALID_FIELD.format(value=granted_to, field="grantedTo", reason="resource not found")


def self_grant(granted_to: str) -> str:
    return _INVALID_FIELD.format(
        value=granted_to, field="grantedTo", reason="cannot grant to yourself"
    )


def not_top_level_owner(resource: str, pattern_type: object) -> str:
    return _INVALID_FIELDS.format(
        value=f"{resource}/{pattern_type}",
        fields="resource/patternType",
        reason="cannot grant because namespace is not owner of the top level resource",
    )


def collision(name: str, other_namespace: str, other_name: str, kind: str) -> str:
    return _INVALID_FIELD.format(
        value=name,
        field="name",
        reason=f'collision with existing grant "{other_namespace}/{other_name}" ({kind})',
    )


def payload_immutable(name: str) -> str:
    return _INVALID_FIELD.format(value=name, field="payload", reason="payload is immutable")


def self_assigned_delete(name_filter: str, names: Iterable[str]) -> str:
    return _INVALID_FIELD.format(
        value=name_filter,
        field="name",
        reason="only administrators can delete the following self-assigned grants: "
        + ", ".join(names),
    )


def cluster_not_managed(cluster: str, managed: Iterable[str]) -> str:
    return _one_of("cluster", cluster, managed)


def namespace_exists(name: str) -> str:
    return _INVALID_FIELD.format(value=name, field="name", reason="namespace already exists")
