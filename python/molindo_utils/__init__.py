"""
molindo-utils

Reflection and collection helpers: class lookup with context/fallback
class loader selection, generic type-argument resolution, superclass
iteration, package-relative resources, and a multi-value map.

Example:
    >>> import molindo_utils
    >>>
    >>> # Load a class through the current thread's class loader
    >>> cls = molindo_utils.for_name("decimal.Decimal")
    >>>
    >>> # Resolve the type argument bound to a generic base
    >>> class IntBox(Box[int]): ...
    >>> molindo_utils.get_type_argument(IntBox, Box)
    <class 'int'>
    >>>
    >>> # Keep several values per key
    >>> tags = molindo_utils.SetMap.new_set_map()
    >>> tags.put_all("post-1", ["python", "typing"])
    True
"""

from __future__ import annotations

from molindo_utils.collections import SetMap
from molindo_utils.exceptions import (
    MolindoUtilsError,
    TypeNotFoundError,
    UnsupportedOperationError,
)
from molindo_utils.logging import (
    log_debug,
    log_error,
    log_info,
    log_trace,
    log_warn,
    set_log_level,
)
from molindo_utils.reflect import (
    ClassHierarchyIterator,
    ClassLoader,
    LoaderChain,
    PathClassLoader,
    SystemClassLoader,
    context_class_loader,
    for_name,
    get_class_loader,
    get_classpath_resource,
    get_classpath_resource_as_stream,
    get_classpath_resources,
    get_context_class_loader,
    get_package_resource_path,
    get_system_class_loader,
    get_type_argument,
    get_type_arguments,
    hierarchy,
    is_assignable,
    is_assignable_to_all,
    set_context_class_loader,
    to_class,
)
from molindo_utils.types import LoaderConfig, LogContext

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Exceptions
    "MolindoUtilsError",
    "TypeNotFoundError",
    "UnsupportedOperationError",
    # Logging
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
    "set_log_level",
    # Types
    "LoaderConfig",
    "LogContext",
    # Class loaders
    "ClassLoader",
    "SystemClassLoader",
    "PathClassLoader",
    "LoaderChain",
    "get_system_class_loader",
    "get_context_class_loader",
    "set_context_class_loader",
    "context_class_loader",
    # Class helpers
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
    # Collections
    "SetMap",
]
