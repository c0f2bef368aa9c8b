"""Pure authorization core - pattern matching, ownership, validation, claims.

Every function here works on an in-memory snapshot passed in by the caller and
performs no I/O.
"""
