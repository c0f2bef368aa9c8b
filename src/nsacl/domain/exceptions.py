"""Domain exceptions."""


class NsaclError(Exception):
    """Base exception for nsacl."""

    pass


class PermissionDenied(NsaclError):
    """Caller may not act on the requested namespace or operation."""

    pass


class NotFound(NsaclError):
    """Requested resource was not found."""

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} {key} not found")
        self.kind = kind
        self.key = key


class ValidationError(NsaclError):
    """Validation failed - carries every violation, not just the first."""

    def __init__(self, violations: list[str]) -> None:
        super().__init__("; ".join(violations))
        self.violations = list(violations)


class ConfigurationError(NsaclError):
    """Service configuration is unusable; raised at startup."""

    pass
