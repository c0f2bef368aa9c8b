"""Ownership resolver - effective ownership and delegation rights."""

import logging
from collections.abc import Iterable

from nsacl.domain.entities import PUBLIC_GRANTEE, Grant, Namespace
from nsacl.domain.services.pattern_matcher import matches
from nsacl.domain.value_objects import GrantPermission, PatternType, ResourceType

logger = logging.getLogger(__name__)


def visible_grants(namespace: Namespace | None, grants: Iterable[Grant]) -> list[Grant]:
    """Grants on the namespace's cluster addressed to it by name or publicly."""
    if namespace is None:
        return []
    return [
        g
        for g in grants
        if g.cluster == namespace.cluster
        and g.granted_to in (namespace.name, PUBLIC_GRANTEE)
    ]


def is_owner(
    namespace: Namespace | None,
    resource_type: ResourceType,
    resource: str,
    grants: Iterable[Grant],
) -> bool:
    """Is `namespace` an effective OWNER of `resource`.

    Monotone OR over every visible OWNER grant of the resource type; there is no
    deny rule and no priority between matching grants. An unknown namespace owns
    nothing.
    """
    return any(
        g.permission == GrantPermission.OWNER
        and g.resource_type == resource_type
        and matches(g.pattern_type, g.resource, resource)
        for g in visible_grants(namespace, grants)
    )


def can_delegate(candidate: Grant, grantor: Namespace | None, grants: Iterable[Grant]) -> bool:
    """May `grantor` itself issue `candidate`.

    Requires an OWNER grant addressed to the grantor by name (public OWNER grants
    do not carry delegation rights) on the same resource type:
    - a PREFIXED owner grant whose prefix starts the candidate resource, whatever
      the candidate's pattern type;
    - a LITERAL owner grant, only for a LITERAL candidate on the exact same resource.
    """
    if grantor is None:
        return False
    for g in grants:
        if (
            g.cluster != grantor.cluster
            or g.granted_to != grantor.name
            or g.permission != GrantPermission.OWNER
            or g.resource_type != candidate.resource_type
        ):
            continue
        if g.pattern_type == PatternType.PREFIXED and candidate.resource.startswith(g.resource):
            return True
        if (
            g.pattern_type == PatternType.LITERAL
            and candidate.pattern_type == PatternType.LITERAL
            and candidate.resource == g.resource
        ):
            return True
    logger.debug(
        "ownership.delegate.denied",
        extra={"namespace": grantor.name, "resource": candidate.resource},
    )
    return False
