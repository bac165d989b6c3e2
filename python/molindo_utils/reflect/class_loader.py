"""Class loaders: scopes that map dotted names to classes and resources.

A ClassLoader resolves ``package.module.ClassName`` strings to class
objects through importlib and looks up resources over a list of search
roots (directories or zip archives). Loaders form a parent chain and
delegate to their parent first.

Built-in Loaders:
- SystemClassLoader: process-wide, searches sys.path (singleton)
- PathClassLoader: searches an explicit list of roots, parent-first

Each thread has a context loader slot, unset until assigned:

    loader = PathClassLoader(["/opt/plugins"])
    with context_class_loader(loader):
        cls = for_name("plugins.audit.AuditHandler")

Initialization:
    Python runs a class's initialization when its module body executes.
    With ``initialize=True`` loading goes through importlib.import_module,
    which executes the module if needed and waits for a module another
    thread is still importing. With ``initialize=False`` an entry already
    present in sys.modules is used as it is.

    A PathClassLoader executes each module at most once. A thread asking
    for a module that another thread is still executing blocks until that
    execution finishes.
"""

from __future__ import annotations

import builtins
import importlib
import importlib.machinery
import importlib.util
import sys
import threading
import weakref
import zipfile
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from types import ModuleType
from typing import IO, TYPE_CHECKING, Any

from ..exceptions import TypeNotFoundError
from ..logging import log_debug, set_log_level
from ..types import LoaderConfig, LogContext

if TYPE_CHECKING:
    from collections.abc import Iterable

_MISSING = object()

# Modules whose code was executed by a PathClassLoader, weakly keyed.
_defining_loaders: weakref.WeakKeyDictionary[ModuleType, ClassLoader] = (
    weakref.WeakKeyDictionary()
)
_context_loaders: weakref.WeakKeyDictionary[threading.Thread, ClassLoader] = (
    weakref.WeakKeyDictionary()
)
_lock = threading.RLock()
_module_locks: dict[str, threading.RLock] = {}


class ClassLoader(ABC):
    """Abstract base class for class loaders.

    Subclasses provide ``find_class`` and ``search_roots``. Lookups are
    parent-first: ``load_class`` and the resource methods consult the
    parent before the loader's own scope.
    """

    def __init__(self, name: str, parent: ClassLoader | None = None) -> None:
        self._name = name
        self._parent = parent

    @property
    def name(self) -> str:
        """Human-readable name for this loader (for logging/debugging)."""
        return self._name

    @property
    def parent(self) -> ClassLoader | None:
        """Parent loader consulted before this one, or None."""
        return self._parent

    def load_class(self, name: str, initialize: bool = False) -> type:
        """Load a class by dotted name.

        Args:
            name: Fully qualified name, e.g. ``"myapp.models.Order"``.
                Nested classes use their qualified name
                (``"myapp.models.Order.Line"``). A name without a dot is
                looked up in ``builtins``.
            initialize: Whether the defining module must be fully
                initialized before returning.

        Returns:
            The class object.

        Raises:
            TypeNotFoundError: If neither the parent nor this loader can
                locate a class with that name.
        """
        if not name:
            raise TypeNotFoundError(name, "Class name must not be empty")

        parent_error: TypeNotFoundError | None = None
        if self._parent is not None:
            try:
                return self._parent.load_class(name, initialize)
            except TypeNotFoundError as e:
                # Not visible to the parent; try this loader's own scope
                parent_error = e

        try:
            return self.find_class(name, initialize)
        except TypeNotFoundError as e:
            if parent_error is None or e.__cause__ is not None:
                raise
            raise TypeNotFoundError(name, str(e)) from parent_error.__cause__

    @abstractmethod
    def find_class(self, name: str, initialize: bool = False) -> type:
        """Locate a class in this loader's own scope.

        Raises:
            TypeNotFoundError: If the class is not in this scope.
        """
        ...

    @abstractmethod
    def search_roots(self) -> list[Path]:
        """Directories and zip archives searched for resources."""
        ...

    def get_resource(self, path: str) -> str | None:
        """Find a resource and return its URI.

        Args:
            path: Slash-separated path relative to a search root.
                Paths with a ``..`` segment match nothing.

        Returns:
            ``file:`` URI for directory roots, ``zip:<archive>!/<member>``
            for archive roots, or None if no root holds the resource.
        """
        if self._parent is not None:
            url = self._parent.get_resource(path)
            if url is not None:
                return url
        return next(self.find_resources(path), None)

    def get_resource_as_stream(self, path: str) -> IO[bytes] | None:
        """Open a resource for binary reading.

        The caller owns the returned stream and must close it.

        Returns:
            Open binary stream, or None if no root holds the resource.

        Raises:
            OSError: If the resource exists but cannot be opened.
        """
        if self._parent is not None:
            stream = self._parent.get_resource_as_stream(path)
            if stream is not None:
                return stream

        for root in self.search_roots():
            stream = _open_in_root(root, path)
            if stream is not None:
                return stream
        return None

    def get_resources(self, path: str) -> Iterator[str]:
        """Iterate over the URIs of every resource with this path.

        The iterator is lazy and single-pass: parent matches first, then
        this loader's roots, duplicates dropped. It is empty (never None)
        when nothing matches.

        Raises:
            OSError: While iterating, if an archive root cannot be read.
        """
        sources: list[Iterator[str]] = []
        if self._parent is not None:
            sources.append(self._parent.get_resources(path))
        sources.append(self.find_resources(path))
        return _unique(sources)

    def find_resources(self, path: str) -> Iterator[str]:
        """Iterate over resource URIs in this loader's own roots only."""
        for root in self.search_roots():
            url = _locate_in_root(root, path)
            if url is not None:
                yield url

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self._name!r}>"


class SystemClassLoader(ClassLoader):
    """Process-wide loader over sys.path.

    Classes are imported with importlib; resources are searched in the
    sys.path entries followed by ``LoaderConfig.extra_class_path``.
    Prefer ``SystemClassLoader.instance()`` to get the shared loader.
    """

    _instance: SystemClassLoader | None = None
    _instance_lock = threading.Lock()

    def __init__(self, config: LoaderConfig | None = None) -> None:
        super().__init__("system")
        self._config = config or LoaderConfig()

    @classmethod
    def instance(cls) -> SystemClassLoader:
        """Get the shared system loader, built from the environment.

        Example:
            >>> loader = SystemClassLoader.instance()
            >>> assert loader is SystemClassLoader.instance()
        """
        with cls._instance_lock:
            if cls._instance is None:
                config = LoaderConfig.from_env()
                if "log_level" in config.model_fields_set:
                    set_log_level(config.log_level)
                cls._instance = cls(config)
            return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the shared loader so the next access rebuilds it.

        This is primarily for testing.
        """
        with cls._instance_lock:
            cls._instance = None

    @property
    def config(self) -> LoaderConfig:
        return self._config

    def find_class(self, name: str, initialize: bool = False) -> type:
        last_error: ModuleNotFoundError | None = None
        for module_name, attributes in _module_candidates(name):
            try:
                module = _import_module(module_name, initialize)
            except ModuleNotFoundError as e:
                if _is_missing(e, module_name):
                    last_error = e
                    continue
                raise

            cls = _walk_attributes(module, attributes)
            if cls is not None:
                return _checked_class(name, cls, self)

        log_debug("Class not found", LogContext(class_name=name, loader=self.name))
        raise TypeNotFoundError(name) from last_error

    def search_roots(self) -> list[Path]:
        roots: list[Path] = []
        if self._config.include_sys_path:
            roots.extend(Path(entry or ".") for entry in sys.path)
        roots.extend(Path(entry) for entry in self._config.extra_class_path)
        return roots


class PathClassLoader(ClassLoader):
    """Loader over an explicit list of directories and zip archives.

    Modules found in ``paths`` are executed by this loader and registered
    in sys.modules; ``defining_class_loader`` reports this loader for the
    classes they define.

    Example:
        >>> loader = PathClassLoader(["plugins"])
        >>> loader.load_class("audit.handlers.AuditHandler")
        <class 'audit.handlers.AuditHandler'>
    """

    def __init__(
        self,
        paths: Iterable[str | Path],
        parent: ClassLoader | None = None,
        name: str | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            paths: Search roots, in order.
            parent: Parent loader. Defaults to the system loader.
            name: Loader name. Defaults to ``"path"``.
        """
        super().__init__(name or "path", parent or SystemClassLoader.instance())
        self._paths = [Path(p) for p in paths]

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def find_class(self, name: str, initialize: bool = False) -> type:
        for module_name, attributes in _module_candidates(name):
            module = self._load_module(module_name, initialize)
            if module is None:
                continue

            cls = _walk_attributes(module, attributes)
            if cls is not None:
                return _checked_class(name, cls, self)

        log_debug("Class not found", LogContext(class_name=name, loader=self.name))
        raise TypeNotFoundError(name)

    def search_roots(self) -> list[Path]:
        return list(self._paths)

    def _load_module(self, module_name: str, initialize: bool) -> ModuleType | None:
        package_name = module_name.rpartition(".")[0]
        if package_name:
            package = self._load_module(package_name, initialize)
            search = getattr(package, "__path__", None)
        else:
            search = [str(p) for p in self._paths]

        # Packages are locked before their children, never the reverse
        with _module_lock(module_name):
            if module_name in sys.modules:
                return _import_module(module_name, initialize)
            if search is None:
                return None
            return self._exec_module(module_name, search)

    def _exec_module(self, module_name: str, search: Iterable[str]) -> ModuleType | None:
        """Find and execute a module; the caller holds its module lock."""
        package_name, _, child_name = module_name.rpartition(".")
        spec = importlib.machinery.PathFinder.find_spec(module_name, list(search))
        if spec is None or spec.loader is None:
            return None

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        with _lock:
            _defining_loaders[module] = self
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise

        if package_name:
            setattr(sys.modules[package_name], child_name, module)

        log_debug(
            "Loaded module",
            {"module": module_name, "loader": self.name, "origin": spec.origin},
        )
        return module


def get_system_class_loader() -> SystemClassLoader:
    """Return the shared system loader."""
    return SystemClassLoader.instance()


def get_context_class_loader(
    thread: threading.Thread | None = None,
) -> ClassLoader | None:
    """Return the context loader of a thread.

    Args:
        thread: Thread to inspect, or None for the calling thread.

    Returns:
        The loader assigned to the thread, or None if never set.
    """
    thread = thread or threading.current_thread()
    with _lock:
        return _context_loaders.get(thread)


def set_context_class_loader(
    loader: ClassLoader | None,
    thread: threading.Thread | None = None,
) -> ClassLoader | None:
    """Assign (or clear, with None) the context loader of a thread.

    Returns:
        The previously assigned loader, or None.
    """
    thread = thread or threading.current_thread()
    with _lock:
        previous = _context_loaders.get(thread)
        if loader is None:
            _context_loaders.pop(thread, None)
        else:
            _context_loaders[thread] = loader
        return previous


@contextmanager
def context_class_loader(
    loader: ClassLoader | None,
    thread: threading.Thread | None = None,
) -> Iterator[ClassLoader | None]:
    """Temporarily assign a thread's context loader."""
    previous = set_context_class_loader(loader, thread)
    try:
        yield loader
    finally:
        set_context_class_loader(previous, thread)


def defining_class_loader(obj: type | ModuleType) -> ClassLoader | None:
    """Return the loader that defined a class or module.

    Returns:
        The PathClassLoader that executed the module (or one of its
        enclosing packages), None for classes provided by the interpreter
        itself (built-in and frozen modules), otherwise the system loader.
    """
    if isinstance(obj, ModuleType):
        module_name = obj.__name__
    else:
        module_name = getattr(obj, "__module__", None) or "builtins"

    if module_name in sys.builtin_module_names:
        return None

    module = sys.modules.get(module_name)
    spec = getattr(module, "__spec__", None)
    if spec is not None and spec.origin in ("built-in", "frozen"):
        return None

    with _lock:
        prefix = module_name
        while prefix:
            candidate = sys.modules.get(prefix)
            if candidate is not None and candidate in _defining_loaders:
                return _defining_loaders[candidate]
            prefix = prefix.rpartition(".")[0]

    return get_system_class_loader()


def _module_lock(module_name: str) -> threading.RLock:
    """Return the lock serializing execution of one module name."""
    with _lock:
        lock = _module_locks.get(module_name)
        if lock is None:
            lock = _module_locks[module_name] = threading.RLock()
        return lock


def _module_candidates(name: str) -> Iterator[tuple[str, list[str]]]:
    """Yield (module, attribute path) splits, longest module first."""
    parts = name.split(".")
    if len(parts) == 1:
        yield builtins.__name__, parts
        return
    for i in range(len(parts) - 1, 0, -1):
        yield ".".join(parts[:i]), parts[i:]


def _import_module(module_name: str, initialize: bool) -> ModuleType:
    if not initialize:
        module = sys.modules.get(module_name)
        if module is not None:
            return module
    return importlib.import_module(module_name)


def _is_missing(error: ModuleNotFoundError, module_name: str) -> bool:
    """True if the error is about the candidate module (or a parent), not a dependency."""
    missing = error.name or ""
    return module_name == missing or module_name.startswith(f"{missing}.")


def _walk_attributes(obj: Any, attributes: list[str]) -> Any | None:
    for attribute in attributes:
        obj = getattr(obj, attribute, _MISSING)
        if obj is _MISSING:
            return None
    return obj


def _checked_class(name: str, obj: Any, loader: ClassLoader) -> type:
    if not isinstance(obj, type):
        raise TypeNotFoundError(name, f"'{name}' is not a class")
    log_debug("Loaded class", LogContext(class_name=name, loader=loader.name))
    return obj


def _relative(path: str) -> str | None:
    """Strip leading slashes; None if the path climbs out of its root."""
    relative = path.lstrip("/")
    if ".." in relative.split("/"):
        return None
    return relative


def _locate_in_root(root: Path, path: str) -> str | None:
    relative = _relative(path)
    if relative is None:
        return None
    if root.is_dir():
        candidate = root / relative
        if candidate.is_file():
            return candidate.absolute().as_uri()
        return None

    if root.is_file() and zipfile.is_zipfile(root):
        with _open_archive(root) as archive:
            if _has_member(archive, relative):
                return f"zip:{root.absolute().as_uri()}!/{relative}"
    return None


def _open_in_root(root: Path, path: str) -> IO[bytes] | None:
    relative = _relative(path)
    if relative is None:
        return None
    if root.is_dir():
        candidate = root / relative
        if candidate.is_file():
            return candidate.open("rb")
        return None

    if root.is_file() and zipfile.is_zipfile(root):
        with _open_archive(root) as archive:
            if _has_member(archive, relative):
                # The member stream keeps the archive file open until closed
                return archive.open(relative)
    return None


def _has_member(archive: zipfile.ZipFile, member: str) -> bool:
    try:
        archive.getinfo(member)
    except KeyError:
        return False
    return True


def _open_archive(root: Path) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(root)
    except zipfile.BadZipFile as e:
        raise OSError(f"Cannot read archive {root}: {e}") from e


def _unique(sources: list[Iterator[str]]) -> Iterator[str]:
    seen: set[str] = set()
    for source in sources:
        for url in source:
            if url not in seen:
                seen.add(url)
                yield url


__all__ = [
    "ClassLoader",
    "SystemClassLoader",
    "PathClassLoader",
    "get_system_class_loader",
    "get_context_class_loader",
    "set_context_class_loader",
    "context_class_loader",
    "defining_class_loader",
]
