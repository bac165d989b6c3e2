"""Thread context loader supplier (priority 10)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..base_supplier import BaseLoaderSupplier
from ..class_loader import get_context_class_loader

if TYPE_CHECKING:
    import threading

    from ..class_loader import ClassLoader


class ContextLoaderSupplier(BaseLoaderSupplier):
    """Supplies the context loader assigned to the thread.

    Priority 10 - checked first in the default chain. Supplies nothing
    for threads whose context slot was never set.
    """

    @property
    def name(self) -> str:
        return "context"

    @property
    def priority(self) -> int:
        return 10

    def supply(
        self,
        thread: threading.Thread,
        _fallback: type | None,
    ) -> ClassLoader | None:
        return get_context_class_loader(thread)
