# daogen/errors.py
from __future__ import annotations


class DaoGenError(Exception):
    pass


class DeclarationError(DaoGenError):
    """Raised by builder calls whose precondition fails at the call site."""


class UnmappedTypeError(DaoGenError):
    """A property type has no entry in the type catalog."""


class ResolutionStateError(DaoGenError):
    """
    Declaration while the schema is resolving, or a derived field read
    before the whole schema has been resolved.
    """
