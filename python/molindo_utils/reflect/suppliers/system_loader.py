"""System loader supplier (priority 100).

Last resort of the default chain: always supplies the shared
SystemClassLoader, so a chain containing it never comes up empty.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..base_supplier import BaseLoaderSupplier
from ..class_loader import get_system_class_loader

if TYPE_CHECKING:
    import threading

    from ..class_loader import ClassLoader


class SystemLoaderSupplier(BaseLoaderSupplier):
    """Supplies the system loader. Priority 100 - checked last."""

    @property
    def name(self) -> str:
        return "system"

    @property
    def priority(self) -> int:
        return 100

    def supply(
        self,
        _thread: threading.Thread,
        _fallback: type | None,
    ) -> ClassLoader:
        return get_system_class_loader()
