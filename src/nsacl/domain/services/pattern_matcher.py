"""Resource pattern matcher."""

from nsacl.domain.value_objects import PatternType


def matches(pattern_type: PatternType | str, pattern: str, resource: str) -> bool:
    """Check whether `resource` is covered by the (pattern_type, pattern) pair.

    LITERAL is exact equality, PREFIXED is starts-with. No wildcards, no regex,
    no case folding. Total: unknown pattern types and non-string inputs are a
    non-match rather than an error.
    """
    if not isinstance(pattern, str) or not isinstance(resource, str):
        return False
    if pattern_type == PatternType.LITERAL:
        return resource == pattern
    if pattern_type == PatternType.PREFIXED:
        return resource.startswith(pattern)
    return False


def normalize_topic(name: str) -> str:
    """Brokers fold "." and "_" together in topic names."""
    return name.replace(".", "_")


def normalized_equals(a: str, b: str) -> bool:
    return normalize_topic(a) == normalize_topic(b)


def normalized_prefix_of(resource: str, prefix: str) -> bool:
    """True if `resource` starts with `prefix` once both are normalized."""
    return normalize_topic(resource).startswith(normalize_topic(prefix))
