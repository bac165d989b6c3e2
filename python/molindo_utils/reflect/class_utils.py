"""Class lookup, hierarchy and resource helpers.

Example:
    >>> from molindo_utils.reflect import class_utils
    >>>
    >>> # Load a class through the thread's context loader (or a fallback)
    >>> cls = class_utils.for_name("decimal.Decimal")
    >>>
    >>> # Read a resource that lives next to a class's module
    >>> with class_utils.get_classpath_resource_as_stream(MyModel, "schema.json") as f:
    ...     schema = f.read()
    >>>
    >>> # Walk the superclass chain
    >>> list(class_utils.hierarchy(bool))
    [<class 'bool'>, <class 'int'>, <class 'object'>]
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from types import ModuleType
from typing import IO, TYPE_CHECKING, Any

from ..exceptions import UnsupportedOperationError
from .generics import extract_class, resolve_type_arguments
from .loader_chain import LoaderChain

if TYPE_CHECKING:
    import threading
    from collections.abc import Collection

    from .class_loader import ClassLoader


def get_type_argument(cls: Any, generic_cls: type) -> type | None:
    """Return the first type argument of ``generic_cls`` in the hierarchy of ``cls``.

    Returns:
        The first resolved argument, or None if there is none.
    """
    arguments = get_type_arguments(cls, generic_cls)
    return arguments[0] if arguments else None


def get_type_arguments(cls: Any, generic_cls: type) -> tuple[type, ...]:
    """Return the type arguments of ``generic_cls`` in the hierarchy of ``cls``.

    Returns:
        Arguments in declaration order, or an empty tuple if ``cls`` does
        not derive from a parameterization of ``generic_cls``.
    """
    return resolve_type_arguments(cls, generic_cls)


def to_class(declaring_cls: type, type_: Any) -> type:
    """Reduce a type expression to a class, as seen from ``declaring_cls``."""
    return extract_class(declaring_cls, type_)


def is_assignable(cls: type | None, classes: Collection[type]) -> bool:
    """Return True if ``cls`` is a subclass of at least one of ``classes``.

    False for a None class or an empty collection.
    """
    if cls is None or not classes:
        return False
    return any(issubclass(cls, c) for c in classes)


def is_assignable_to_all(cls: type | None, classes: Collection[type]) -> bool:
    """Return True if ``cls`` is a subclass of every one of ``classes``.

    False for a None class; True for an empty collection.
    """
    if cls is None:
        return False
    return all(issubclass(cls, c) for c in classes)


def for_name(
    class_name: str,
    initialize: bool = False,
    thread: threading.Thread | None = None,
    fallback: type | None = None,
) -> type:
    """Load a class by fully qualified name.

    Args:
        class_name: Fully qualified name of the desired class.
        initialize: Whether the defining module must be fully initialized.
        thread: Thread to use for the context loader, or None for the
            current thread.
        fallback: Class whose loader is used if the thread has no context
            loader, or None for molindo_utils itself.

    Returns:
        The class object.

    Raises:
        TypeNotFoundError: If the class cannot be located by the selected
            loader or its parents.
    """
    return get_class_loader(thread, fallback).load_class(class_name, initialize)


def get_class_loader(
    thread: threading.Thread | None = None,
    fallback: type | None = None,
) -> ClassLoader:
    """Select a class loader; never returns None.

    Args:
        thread: Thread to use for the context loader, or None for the
            current thread.
        fallback: Class whose loader is used if the thread has no context
            loader, or None for molindo_utils itself.

    Returns:
        The thread's context loader, else the fallback's defining loader,
        else the system loader.
    """
    return LoaderChain.shared().resolve(thread, fallback)


def get_classpath_resource(scope: type, resource: str) -> str | None:
    """Find a resource in the same package as ``scope``.

    Returns:
        The resource URI, or None if it does not exist.
    """
    return get_class_loader(fallback=scope).get_resource(
        get_package_resource_path(scope, resource)
    )


def get_classpath_resource_as_stream(scope: type, resource: str) -> IO[bytes] | None:
    """Open a resource in the same package as ``scope``.

    Returns:
        An open binary stream the caller must close, or None if the
        resource does not exist.

    Raises:
        OSError: If the resource exists but cannot be read.
    """
    return get_class_loader(fallback=scope).get_resource_as_stream(
        get_package_resource_path(scope, resource)
    )


def get_classpath_resources(scope: type, resource: str) -> Iterator[str]:
    """Iterate over every resource in the same package as ``scope``.

    Returns:
        A lazy, single-pass iterator of URIs; empty when nothing matches.

    Raises:
        OSError: While iterating, if a class path archive cannot be read.
    """
    return get_class_loader(fallback=scope).get_resources(
        get_package_resource_path(scope, resource)
    )


def get_package_resource_path(scope: type | ModuleType, resource: str) -> str:
    """Return the class path of ``resource`` in the package of ``scope``.

    Example:
        >>> get_package_resource_path(json.JSONDecoder, "schema.json")
        'json/schema.json'
    """
    package = _package_name(scope)
    if not package:
        return resource
    return package.replace(".", "/") + "/" + resource


def hierarchy(cls: type | None) -> ClassHierarchyIterator:
    """Return an iterator over ``cls`` and its chain of primary bases.

    The chain follows ``__base__`` and ends with ``object``. With multiple
    inheritance ``__base__`` is the base that fixes the instance layout,
    so for ``class C(Mixin, dict)`` the chain is ``C, dict, object``.
    ``None`` gives an exhausted iterator.
    """
    if cls is None:
        return ClassHierarchyIterator._exhausted()
    return ClassHierarchyIterator(cls)


class ClassHierarchyIterator(Iterator[type]):
    """Single-use iterator over a class and its primary bases."""

    def __init__(self, cls: type) -> None:
        if cls is None:
            raise ValueError("cls")
        self._next: type | None = cls

    @classmethod
    def _exhausted(cls) -> ClassHierarchyIterator:
        iterator = cls.__new__(cls)
        iterator._next = None
        return iterator

    def has_next(self) -> bool:
        return self._next is not None

    def __next__(self) -> type:
        if self._next is None:
            raise StopIteration

        current = self._next
        self._next = current.__base__
        return current

    def remove(self) -> None:
        raise UnsupportedOperationError("read-only")


def _package_name(scope: type | ModuleType) -> str:
    if isinstance(scope, ModuleType):
        module_name = scope.__name__
        module: ModuleType | None = scope
    else:
        module_name = scope.__module__
        module = sys.modules.get(module_name)

    package = getattr(module, "__package__", None)
    if package is not None:
        return package
    return module_name.rpartition(".")[0]


__all__ = [
    "ClassHierarchyIterator",
    "for_name",
    "get_class_loader",
    "get_classpath_resource",
    "get_classpath_resource_as_stream",
    "get_classpath_resources",
    "get_package_resource_path",
    "get_type_argument",
    "get_type_arguments",
    "hierarchy",
    "is_assignable",
    "is_assignable_to_all",
    "to_class",
]
