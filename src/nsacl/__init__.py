"""nsacl - namespace grants, ownership and claim compilation for shared messaging clusters."""

__version__ = "0.1.0"
