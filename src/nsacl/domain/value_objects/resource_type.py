"""Resource types a grant can target."""

from enum import StrEnum


class ResourceType(StrEnum):
    """Kinds of cluster resources owned and shared by namespaces.

    Declaration order is significant: compiled claims are ordered by it.
    """

    TOPIC = "TOPIC"
    CONSUMER_GROUP = "CONSUMER_GROUP"
    CONNECT = "CONNECT"
    CONNECT_CLUSTER = "CONNECT_CLUSTER"
    SCHEMA = "SCHEMA"
