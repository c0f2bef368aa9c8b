"""Collision validator - at most one OWNER per resource on a cluster.

Existing owners and the kind of overlap a new OWNER grant would create:

    ns1 OWNER PREFIXED project1.
    ns2 OWNER LITERAL  project1.topic      child-overlap (inside ns1's prefix)
    ns2 OWNER PREFIXED project             parent-overlap (swallows ns1's prefix)
    ns2 OWNER PREFIXED project1_           same after "." / "_" folding (TOPIC only)
    ns2 OWNER LITERAL  project             no collision
"""

import logging
from collections.abc import Iterable

from nsacl.domain import violations
from nsacl.domain.entities import Grant
from nsacl.domain.services.pattern_matcher import normalized_equals, normalized_prefix_of
from nsacl.domain.value_objects import GrantPermission, PatternType, ResourceType

logger = logging.getLogger(__name__)


def collision_kind(candidate: Grant, existing: Grant) -> str | None:
    """Name the overlap between two grants of one resource type, or None."""
    topic = candidate.resource_type == ResourceType.TOPIC

    if candidate.resource == existing.resource or (
        topic and normalized_equals(candidate.resource, existing.resource)
    ):
        return "same"

    if candidate.pattern_type == PatternType.PREFIXED and (
        existing.resource.startswith(candidate.resource)
        or (topic and normalized_prefix_of(existing.resource, candidate.resource))
    ):
        return "parent-overlap"

    if existing.pattern_type == PatternType.PREFIXED and (
        candidate.resource.startswith(existing.resource)
        or (topic and normalized_prefix_of(candidate.resource, existing.resource))
    ):
        return "child-overlap"

    return None


def validate_no_collision(candidate: Grant, grants: Iterable[Grant]) -> list[str]:
    """Check an OWNER grant against every other OWNER grant of its type on the cluster.

    The grant being replaced (same identity) is ignored. One violation per
    colliding grant; callers must reject the write if any is returned.
    """
    errors: list[str] = []
    for existing in grants:
        if (
            existing.cluster != candidate.cluster
            or existing.identity == candidate.identity
            or existing.permission != GrantPermission.OWNER
            or existing.resource_type != candidate.resource_type
        ):
            continue
        kind = collision_kind(candidate, existing)
        if kind is None:
            continue
        errors.append(
            violations.collision(candidate.name, existing.namespace, existing.name, kind)
        )
    if errors:
        logger.debug(
            "collision.detected",
            extra={"grant": candidate.name, "collisions": len(errors)},
        )
    return errors
