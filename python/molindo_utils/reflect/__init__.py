r"""Reflection helpers: class loading, generics, hierarchy and resources.

Class lookups select a loader through a chain of suppliers, tried in
priority order until one returns a loader:

- ContextLoaderSupplier (priority 10): the thread's context loader
- DefiningLoaderSupplier (priority 50): loader of the fallback class
- SystemLoaderSupplier (priority 100): the system loader

Custom Suppliers:
Extend BaseLoaderSupplier and add it to a chain:

    from molindo_utils.reflect import BaseLoaderSupplier, LoaderChain

    class TenantLoaderSupplier(BaseLoaderSupplier):
        name = "tenant"
        priority = 20

        def supply(self, thread, fallback):
            return TENANT_LOADERS.get(current_tenant())

    LoaderChain.shared().add_supplier(TenantLoaderSupplier())
"""

from __future__ import annotations

from .base_supplier import BaseLoaderSupplier
from .class_loader import (
    ClassLoader,
    PathClassLoader,
    SystemClassLoader,
    context_class_loader,
    defining_class_loader,
    get_context_class_loader,
    get_system_class_loader,
    set_context_class_loader,
)
from .class_utils import (
    ClassHierarchyIterator,
    for_name,
    get_class_loader,
    get_classpath_resource,
    get_classpath_resource_as_stream,
    get_classpath_resources,
    get_package_resource_path,
    get_type_argument,
    get_type_arguments,
    hierarchy,
    is_assignable,
    is_assignable_to_all,
    to_class,
)
from .loader_chain import LoaderChain, LoaderNotFoundError
from .suppliers import (
    ContextLoaderSupplier,
    DefiningLoaderSupplier,
    SystemLoaderSupplier,
)

__all__ = [
    # Class loaders
    "ClassLoader",
    "SystemClassLoader",
    "PathClassLoader",
    "get_system_class_loader",
    "get_context_class_loader",
    "set_context_class_loader",
    "context_class_loader",
    "defining_class_loader",
    # Loader chain
    "LoaderChain",
    "LoaderNotFoundError",
    "BaseLoaderSupplier",
    "ContextLoaderSupplier",
    "DefiningLoaderSupplier",
    "SystemLoaderSupplier",
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
]
