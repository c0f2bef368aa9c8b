"""Domain entities."""

from nsacl.domain.entities.claim import Claim, CompiledClaimEntry
from nsacl.domain.entities.grant import PUBLIC_GRANTEE, Grant
from nsacl.domain.entities.namespace import Namespace

__all__ = [
    "Claim",
    "CompiledClaimEntry",
    "Grant",
    "Namespace",
    "PUBLIC_GRANTEE",
]
