"""Abstract base class for class loader suppliers.

Suppliers are tried in priority order by the LoaderChain until one
returns a loader.

Supply Contract:
1. name - Human-readable identifier for logging/debugging
2. priority - Lower numbers = tried first
3. supply() - Return a loader, or None to defer to the next supplier

Example Implementation:
    class PluginLoaderSupplier(BaseLoaderSupplier):
        @property
        def name(self) -> str:
            return "plugins"

        @property
        def priority(self) -> int:
            return 30  # Between context (10) and defining (50)

        def supply(self, thread, fallback):
            return PLUGIN_LOADERS.get(thread.name)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import threading

    from .class_loader import ClassLoader


class BaseLoaderSupplier(ABC):
    """Abstract base class for class loader suppliers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this supplier (for logging/debugging)."""
        ...

    @property
    @abstractmethod
    def priority(self) -> int:
        """Supply priority (lower = tried first).

        Standard priorities:
        - 10: Thread context loader
        - 50: Defining loader of the fallback class
        - 100: System loader
        """
        ...

    @abstractmethod
    def supply(
        self,
        thread: threading.Thread,
        fallback: type | None,
    ) -> ClassLoader | None:
        """Return a loader for this request, or None.

        Args:
            thread: Thread whose context is being resolved (never None).
            fallback: Class whose loader may be used, or None.

        Returns:
            A class loader, or None to defer to the next supplier.
        """
        ...
