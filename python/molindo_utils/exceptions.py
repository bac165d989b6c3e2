"""Custom exceptions for molindo-utils.

This module provides the hierarchy of exceptions raised by the
reflection and collection helpers. Resource read failures are not
wrapped: they surface as the built-in ``OSError``.
"""

from __future__ import annotations


class MolindoUtilsError(Exception):
    """Base exception for all molindo-utils errors.

    Example:
        >>> try:
        ...     cls = for_name("no.such.Thing")
        ... except MolindoUtilsError as e:
        ...     print(f"Lookup failed: {e}")
    """

    pass


class TypeNotFoundError(MolindoUtilsError):
    """Raised when no class loader in the chain can locate a class.

    The underlying ``ImportError`` or ``AttributeError`` is chained as
    ``__cause__`` when there is one.

    Attributes:
        class_name: The dotted name that could not be resolved.

    Example:
        >>> try:
        ...     for_name("myapp.handlers.Missing")
        ... except TypeNotFoundError as e:
        ...     print(e.class_name)
        myapp.handlers.Missing
    """

    def __init__(self, class_name: str, message: str | None = None) -> None:
        self.class_name = class_name
        super().__init__(message or f"Class not found: '{class_name}'")


class UnsupportedOperationError(MolindoUtilsError):
    """Raised when a read-only view is asked to mutate.

    Example:
        >>> it = hierarchy(int)
        >>> it.remove()
        Traceback (most recent call last):
        ...
        UnsupportedOperationError: read-only
    """

    pass


__all__ = [
    "MolindoUtilsError",
    "TypeNotFoundError",
    "UnsupportedOperationError",
]
