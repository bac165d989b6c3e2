"""Loader Chain - Priority-Ordered Class Loader Selection.

The LoaderChain picks the class loader for a lookup by asking suppliers
in priority order until one returns a loader.

Default Chain (when using .default()):
- Priority 10:  ContextLoaderSupplier  - the thread's context loader
- Priority 50:  DefiningLoaderSupplier - loader of the fallback class
                                         (or of molindo_utils itself)
- Priority 100: SystemLoaderSupplier   - the system loader

Usage:
    chain = LoaderChain.default()
    loader = chain.resolve(fallback=MyPlugin)

    # Or build a custom chain
    chain = LoaderChain()
    chain.add_supplier(PluginLoaderSupplier())
    chain.add_supplier(SystemLoaderSupplier())
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from ..exceptions import MolindoUtilsError
from ..logging import log_debug, log_trace

if TYPE_CHECKING:
    from .base_supplier import BaseLoaderSupplier
    from .class_loader import ClassLoader


class LoaderNotFoundError(MolindoUtilsError):
    """Raised when no supplier in a chain returns a loader.

    The default chain ends with the system supplier and never raises this.
    """

    pass


class LoaderChain:
    """Priority-ordered chain of class loader suppliers.

    Attributes:
        suppliers: Suppliers in priority order.
    """

    _default: LoaderChain | None = None
    _default_lock = threading.Lock()

    def __init__(self) -> None:
        """Initialize an empty loader chain."""
        self._suppliers: list[BaseLoaderSupplier] = []
        self._suppliers_by_name: dict[str, BaseLoaderSupplier] = {}
        self._lock = threading.RLock()

    @classmethod
    def default(cls) -> LoaderChain:
        """Create a chain with the default suppliers.

        Returns:
            Chain with Context + Defining + System suppliers.
        """
        from .suppliers import (
            ContextLoaderSupplier,
            DefiningLoaderSupplier,
            SystemLoaderSupplier,
        )

        chain = cls()
        chain.add_supplier(ContextLoaderSupplier())
        chain.add_supplier(DefiningLoaderSupplier())
        chain.add_supplier(SystemLoaderSupplier())
        return chain

    @classmethod
    def shared(cls) -> LoaderChain:
        """Get the process-wide default chain used by the class helpers."""
        with cls._default_lock:
            if cls._default is None:
                cls._default = cls.default()
            return cls._default

    @classmethod
    def reset_shared(cls) -> None:
        """Drop the process-wide chain. This is primarily for testing."""
        with cls._default_lock:
            cls._default = None

    def add_supplier(self, supplier: BaseLoaderSupplier) -> LoaderChain:
        """Add a supplier to the chain.

        Suppliers are kept sorted by priority (lower = first). A supplier
        with the same name as an existing one replaces it.

        Returns:
            Self for method chaining.
        """
        with self._lock:
            existing = self._suppliers_by_name.pop(supplier.name, None)
            if existing is not None:
                self._suppliers.remove(existing)
            self._suppliers.append(supplier)
            self._suppliers.sort(key=lambda s: s.priority)
            self._suppliers_by_name[supplier.name] = supplier
        return self

    def remove_supplier(self, name: str) -> BaseLoaderSupplier | None:
        """Remove a supplier by name.

        Returns:
            Removed supplier or None if not found.
        """
        with self._lock:
            supplier = self._suppliers_by_name.pop(name, None)
            if supplier:
                self._suppliers.remove(supplier)
            return supplier

    def get_supplier(self, name: str) -> BaseLoaderSupplier | None:
        return self._suppliers_by_name.get(name)

    def resolve(
        self,
        thread: threading.Thread | None = None,
        fallback: type | None = None,
    ) -> ClassLoader:
        """Select the class loader for a lookup.

        Args:
            thread: Thread whose context loader is consulted, or None for
                the calling thread.
            fallback: Class whose defining loader is used when the thread
                has no context loader, or None for molindo_utils itself.

        Returns:
            The first loader supplied.

        Raises:
            LoaderNotFoundError: If every supplier declines.
        """
        thread = thread or threading.current_thread()

        with self._lock:
            suppliers = list(self._suppliers)

        for supplier in suppliers:
            loader = supplier.supply(thread, fallback)
            if loader is None:
                log_trace(f"LoaderChain: Supplier '{supplier.name}' declined")
                continue

            log_debug(
                f"LoaderChain: Selected {loader!r} via '{supplier.name}'",
                {"thread": thread.name, "fallback": _qualname(fallback)},
            )
            return loader

        raise LoaderNotFoundError(
            f"No supplier returned a class loader (tried {self.supplier_names})"
        )

    def __len__(self) -> int:
        """Return number of suppliers in chain."""
        return len(self._suppliers)

    @property
    def supplier_names(self) -> list[str]:
        """Names of suppliers in priority order."""
        return [s.name for s in self._suppliers]

    def chain_info(self) -> list[dict[str, Any]]:
        """Get chain info for debugging."""
        return [
            {"name": supplier.name, "priority": supplier.priority}
            for supplier in self._suppliers
        ]


def _qualname(cls: type | None) -> str:
    if cls is None:
        return "-"
    return f"{cls.__module__}.{cls.__qualname__}"


__all__ = [
    "LoaderChain",
    "LoaderNotFoundError",
]
