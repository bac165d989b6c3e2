"""Built-in class loader suppliers.

This module provides the default suppliers for the loader chain:
- ContextLoaderSupplier (priority 10): the thread's context loader
- DefiningLoaderSupplier (priority 50): the fallback class's defining loader
- SystemLoaderSupplier (priority 100): the system loader
"""

from __future__ import annotations

from .context_loader import ContextLoaderSupplier
from .defining_loader import DefiningLoaderSupplier
from .system_loader import SystemLoaderSupplier

__all__ = [
    "ContextLoaderSupplier",
    "DefiningLoaderSupplier",
    "SystemLoaderSupplier",
]
