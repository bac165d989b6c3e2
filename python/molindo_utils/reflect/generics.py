"""Generic type resolution over class hierarchies.

Given a class that (transitively) subclasses a parameterized generic,
find the concrete classes bound to the generic's type parameters:

    >>> class Box(Generic[T]): ...
    >>> class Labelled(Box[T]): ...
    >>> class IntBox(Labelled[int]): ...
    >>> resolve_type_arguments(IntBox, Box)
    (<class 'int'>,)

Resolution follows ``__orig_bases__`` depth-first in declaration order,
substituting type variables on the way down. Only declared inheritance
is considered; virtual subclasses registered on an ABC carry no type
arguments.
"""

from __future__ import annotations

from types import UnionType
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin


def resolve_type_arguments(cls: Any, generic_cls: type) -> tuple[type, ...]:
    """Resolve the type arguments bound to ``generic_cls`` in ``cls``'s hierarchy.

    Args:
        cls: A class, or a parameterized alias such as ``Box[int]``.
        generic_cls: The generic class whose parameters are resolved.

    Returns:
        One class per type parameter of ``generic_cls``, in declaration
        order. Unresolved type variables become their bound, or
        ``object``. Empty if ``cls`` does not derive from a
        parameterization of ``generic_cls`` or if no argument resolves.
    """
    origin = get_origin(cls)
    if isinstance(origin, type):
        args = get_args(cls)
        if origin is generic_cls:
            resolved: tuple[Any, ...] | None = args
        else:
            params = getattr(origin, "__parameters__", ())
            resolved = _resolve(origin, generic_cls, dict(zip(params, args)))
    elif isinstance(cls, type):
        resolved = _resolve(cls, generic_cls, {})
    else:
        return ()

    if not resolved or all(isinstance(arg, TypeVar) for arg in resolved):
        return ()
    return tuple(_extract(arg) for arg in resolved)


def extract_class(declaring_cls: type, type_: Any) -> type:
    """Reduce a type expression to a class, as seen from ``declaring_cls``.

    Type variables are looked up in the bindings of ``declaring_cls``'s
    hierarchy. Parameterized aliases become their origin
    (``list[int]`` -> ``list``), ``Annotated`` is unwrapped, ``None``
    becomes ``NoneType`` and anything else that is not a class becomes
    ``object``.

    Example:
        >>> class Repo(Generic[M]):
        ...     model: M
        >>> class UserRepo(Repo[User]): ...
        >>> extract_class(UserRepo, Repo.__annotations__["model"])
        <class 'User'>
    """
    return _extract(type_, _type_variable_map(declaring_cls))


def _resolve(
    cls: type,
    generic_cls: type,
    typevars: dict[Any, Any],
) -> tuple[Any, ...] | None:
    for base in _original_bases(cls):
        origin = get_origin(base) or base
        if not isinstance(origin, type):
            continue

        args = tuple(_substitute(arg, typevars) for arg in get_args(base))
        if origin is generic_cls:
            return args

        if generic_cls in origin.__mro__:
            params = getattr(origin, "__parameters__", ())
            result = _resolve(origin, generic_cls, dict(zip(params, args)))
            if result is not None:
                return result
    return None


def _type_variable_map(
    cls: type,
    typevars: dict[Any, Any] | None = None,
    result: dict[Any, Any] | None = None,
) -> dict[Any, Any]:
    """Collect every type variable binding in the hierarchy; nearest wins."""
    result = {} if result is None else result
    for base in _original_bases(cls):
        origin = get_origin(base) or base
        if not isinstance(origin, type):
            continue

        params = getattr(origin, "__parameters__", ())
        args = tuple(_substitute(arg, typevars or {}) for arg in get_args(base))
        bindings = dict(zip(params, args))
        for param, arg in bindings.items():
            result.setdefault(param, arg)
        _type_variable_map(origin, bindings, result)
    return result


def _original_bases(cls: type) -> tuple[Any, ...]:
    # __orig_bases__ is inherited as a class attribute; only the class's own counts
    return cls.__dict__.get("__orig_bases__", cls.__bases__)


def _substitute(arg: Any, typevars: dict[Any, Any]) -> Any:
    if isinstance(arg, TypeVar):
        return typevars.get(arg, arg)
    return arg


def _extract(arg: Any, typevars: dict[Any, Any] | None = None) -> type:
    if arg is None:
        return type(None)

    if isinstance(arg, TypeVar):
        resolved = (typevars or {}).get(arg, arg)
        if resolved is not arg:
            return _extract(resolved)
        bound = arg.__bound__
        return _extract(bound) if bound is not None else object

    origin = get_origin(arg)
    if origin is Annotated:
        return _extract(get_args(arg)[0], typevars)
    if origin is Union or origin is UnionType:
        return object
    if origin is not None:
        return origin if isinstance(origin, type) else object

    if isinstance(arg, type):
        return arg
    return object


__all__ = [
    "resolve_type_arguments",
    "extract_class",
]
