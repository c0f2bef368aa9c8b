"""JSON shapes for API responses."""

from nsacl.domain.entities import Claim, Grant, Namespace


def _ts(value) -> str | None:
    return value.isoformat() if value else None


def grant_to_media(grant: Grant) -> dict:
    return {
        "name": grant.name,
        "namespace": grant.namespace,
        "cluster": grant.cluster,
        "resource_type": str(grant.resource_type),
        "resource": grant.resource,
        "pattern_type": str(grant.pattern_type),
        "permission": str(grant.permission),
        "granted_to": grant.granted_to,
        "labels": dict(grant.labels),
        "created_at": _ts(grant.created_at),
    }


def namespace_to_media(namespace: Namespace) -> dict:
    return {
        "name": namespace.name,
        "cluster": namespace.cluster,
        "labels": dict(namespace.labels),
        "created_at": _ts(namespace.created_at),
    }


def claim_to_media(claim: Claim) -> dict:
    """Claim in the shape the downstream console reads: {"groups": {"group": [...]}}."""
    return {
        "groups": {
            "group": [
                {"role": e.role, "patterns": list(e.patterns), "clusters": list(e.clusters)}
                for e in claim.entries
            ]
        }
    }
