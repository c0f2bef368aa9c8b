"""Claim compiler - translates visible grants into role / regex / cluster entries.

The external authorization system knows nothing about namespaces or grants; it
consumes a list of entries, each binding one role to anchored resource regexes on
anchored cluster selectors. Compilation steps:

1. resolve the namespaces whose group label intersects the requesting groups
   (the administrator group short-circuits to the universal claim);
2. collect the grants visible to those namespaces;
3. drop grants already covered by a PREFIXED grant of the same resource type on
   the same cluster;
4. bind each remaining (resource type, resource, pattern type) to its role and the
   clusters it was granted on, collapsing a full managed-cluster set to ``^.*$``;
5. derive SCHEMA bindings from TOPIC ones (subjects are ``<topic>-key`` and
   ``<topic>-value``);
6. merge bindings sharing a role and cluster set, add a match-nothing entry for
   each role left empty, and order entries by role declaration order.

Ordering is first-appearance throughout, so compiling the same input twice gives
the same output.
"""

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from nsacl.domain.entities import Claim, CompiledClaimEntry, Grant, Namespace
from nsacl.domain.value_objects import ClaimConfig, PatternType, ResourceType

UNIVERSAL_SELECTOR = "^.*$"
MATCH_NOTHING = "^(?!)$"
SCHEMA_SUFFIXES = ("key", "value")

GrantLookup = Callable[[Namespace], Iterable[Grant]]


@dataclass(frozen=True)
class _Pattern:
    resource_type: ResourceType
    resource: str
    pattern_type: PatternType
    derived: bool = False

    def regex(self) -> str:
        escaped = re.escape(self.resource)
        if self.pattern_type == PatternType.PREFIXED:
            return f"^{escaped}.*$"
        if self.derived:
            return f"^{escaped}-({'|'.join(SCHEMA_SUFFIXES)})$"
        return f"^{escaped}$"


@dataclass
class _Binding:
    role: str
    pattern: _Pattern
    clusters: list[str] = field(default_factory=list)


@dataclass
class _Entry:
    role: str
    clusters: list[str]
    patterns: list[_Pattern] = field(default_factory=list)


def cluster_selector(cluster: str) -> str:
    return f"^{re.escape(cluster)}$"


def admin_claim(config: ClaimConfig) -> Claim:
    """Universal claim: every administrator role on every resource and cluster."""
    roles: list[str] = []
    for rt in ResourceType:
        if config.admin_roles[rt] not in roles:
            roles.append(config.admin_roles[rt])
    return Claim(
        entries=[
            CompiledClaimEntry(
                role=role, patterns=[UNIVERSAL_SELECTOR], clusters=[UNIVERSAL_SELECTOR]
            )
            for role in roles
        ],
        admin=True,
    )


def compile_claim(
    groups: Sequence[str] | None,
    namespaces: Iterable[Namespace],
    grant_lookup: GrantLookup,
    config: ClaimConfig,
) -> Claim:
    """Compile the claim for a caller identified by its external `groups`.

    `grant_lookup` returns the grants visible to a namespace (granted to it by
    name or publicly, on its cluster).
    """
    requested = [g for g in (groups or []) if g]
    if config.admin_group in requested:
        return admin_claim(config)

    selected = [ns for ns in namespaces if _belongs(ns, requested, config)]
    grants = _collect(selected, grant_lookup)
    grants = [g for g in grants if not _subsumed(g, grants)]

    bindings = _bind(grants, config)
    bindings.extend(_derive_schema(bindings, config))

    entries = _merge(bindings)
    entries.extend(_sentinels(entries, config))
    rank = {role: i for i, role in enumerate(config.role_order())}
    entries.sort(key=lambda e: rank.get(e.role, len(rank)))
    return Claim(entries=[_render(e) for e in entries])


def _belongs(namespace: Namespace, groups: list[str], config: ClaimConfig) -> bool:
    labelled = namespace.groups(config.group_label, config.group_delimiter)
    return any(g in groups for g in labelled)


def _collect(namespaces: list[Namespace], grant_lookup: GrantLookup) -> list[Grant]:
    seen: set[tuple[str, str, str]] = set()
    collected: list[Grant] = []
    for ns in namespaces:
        for grant in grant_lookup(ns):
            if grant.identity in seen:
                continue
            if grant.pattern_type not in tuple(PatternType):
                raise ValueError(
                    f"Grant {grant.namespace}/{grant.name} has unknown pattern type "
                    f"{grant.pattern_type!r}"
                )
            seen.add(grant.identity)
            collected.append(grant)
    return collected


def _subsumed(grant: Grant, grants: list[Grant]) -> bool:
    # Covered by a PREFIXED grant of the same type and cluster: LITERALs by an
    # equal or shorter prefix, PREFIXEDs by a strictly shorter one.
    return any(
        other.pattern_type == PatternType.PREFIXED
        and other.resource_type == grant.resource_type
        and other.cluster == grant.cluster
        and grant.resource.startswith(other.resource)
        and (
            grant.pattern_type == PatternType.LITERAL
            or len(other.resource) < len(grant.resource)
        )
        for other in grants
    )


def _role(resource_type: ResourceType, config: ClaimConfig) -> str:
    role = config.roles.get(resource_type)
    if role is None:
        raise ValueError(f"No claim role for resource type {resource_type!r}")
    return role


def _bind(grants: list[Grant], config: ClaimConfig) -> list[_Binding]:
    # Insertion-ordered: keys keep the order grants were first seen in.
    by_key: dict[tuple[str, str, str], _Binding] = {}
    for grant in grants:
        key = (grant.resource_type, grant.resource, grant.pattern_type)
        binding = by_key.get(key)
        if binding is None:
            binding = _Binding(
                role=_role(grant.resource_type, config),
                pattern=_Pattern(grant.resource_type, grant.resource, grant.pattern_type),
            )
            by_key[key] = binding
        selector = cluster_selector(grant.cluster)
        if selector not in binding.clusters:
            binding.clusters.append(selector)

    managed = {cluster_selector(c) for c in config.managed_clusters}
    for binding in by_key.values():
        if set(binding.clusters) == managed:
            binding.clusters = [UNIVERSAL_SELECTOR]
    return list(by_key.values())


def _derive_schema(bindings: list[_Binding], config: ClaimConfig) -> list[_Binding]:
    role = _role(ResourceType.SCHEMA, config)
    return [
        _Binding(
            role=role,
            pattern=_Pattern(
                ResourceType.SCHEMA, b.pattern.resource, b.pattern.pattern_type, derived=True
            ),
            clusters=list(b.clusters),
        )
        for b in bindings
        if b.pattern.resource_type == ResourceType.TOPIC
    ]


def _merge(bindings: list[_Binding]) -> list[_Entry]:
    entries: list[_Entry] = []
    for binding in bindings:
        for entry in entries:
            if entry.role == binding.role and set(entry.clusters) == set(binding.clusters):
                entry.patterns.append(binding.pattern)
                break
        else:
            entries.append(
                _Entry(role=binding.role, clusters=list(binding.clusters), patterns=[binding.pattern])
            )
    return entries


def _sentinels(entries: list[_Entry], config: ClaimConfig) -> list[_Entry]:
    present = {e.role for e in entries}
    return [
        _Entry(role=role, clusters=[UNIVERSAL_SELECTOR])
        for role in config.role_order()
        if role not in present
    ]


def _render(entry: _Entry) -> CompiledClaimEntry:
    if not entry.patterns:
        return CompiledClaimEntry(
            role=entry.role, patterns=[MATCH_NOTHING], clusters=list(entry.clusters)
        )
    # Derived literal subjects go after prefix patterns.
    ordered = sorted(
        entry.patterns,
        key=lambda p: p.derived and p.pattern_type == PatternType.LITERAL,
    )
    patterns: list[str] = []
    for p in ordered:
        regex = p.regex()
        if regex not in patterns:
            patterns.append(regex)
    return CompiledClaimEntry(role=entry.role, patterns=patterns, clusters=list(entry.clusters))
