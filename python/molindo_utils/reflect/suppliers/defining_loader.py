"""Defining loader supplier (priority 50).

Supplies the loader that defined the fallback class or, without a
fallback, the loader that defined molindo_utils itself.

Example:
    >>> supplier = DefiningLoaderSupplier()
    >>> supplier.supply(threading.current_thread(), MyPlugin)
    <PathClassLoader 'plugins'>
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from ..base_supplier import BaseLoaderSupplier
from ..class_loader import defining_class_loader

if TYPE_CHECKING:
    import threading

    from ..class_loader import ClassLoader


class DefiningLoaderSupplier(BaseLoaderSupplier):
    """Supplies the defining loader of the fallback class.

    Priority 50. Supplies nothing when the class comes from a built-in
    or frozen module, which have no defining loader.
    """

    @property
    def name(self) -> str:
        return "defining"

    @property
    def priority(self) -> int:
        return 50

    def supply(
        self,
        _thread: threading.Thread,
        fallback: type | None,
    ) -> ClassLoader | None:
        if fallback is not None:
            return defining_class_loader(fallback)
        return defining_class_loader(sys.modules[__name__])
