"""Domain value objects."""

from nsacl.domain.value_objects.claim_config import ClaimConfig
from nsacl.domain.value_objects.grant_permission import GrantPermission
from nsacl.domain.value_objects.grant_scope import GrantScope
from nsacl.domain.value_objects.pattern_type import PatternType
from nsacl.domain.value_objects.resource_type import ResourceType

__all__ = [
    "ClaimConfig",
    "GrantPermission",
    "GrantScope",
    "PatternType",
    "ResourceType",
]
