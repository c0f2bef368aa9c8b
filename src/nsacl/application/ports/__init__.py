"""Application ports - interfaces for external adapters."""

from nsacl.application.ports.ownership_checker import OwnershipChecker
from nsacl.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "OwnershipChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
