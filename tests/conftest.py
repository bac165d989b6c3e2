"""pytest configuration and fixtures for molindo_utils tests.

This module provides shared fixtures for the class loader tests: the
fixture class path, a PathClassLoader over it, and an autouse fixture
that resets loader state and unloads fixture modules between tests.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Generator
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"
FIXTURE_PACKAGE = "acmeplugins"


def _reset_loader_state() -> None:
    from molindo_utils.reflect import LoaderChain, SystemClassLoader, set_context_class_loader

    set_context_class_loader(None)
    SystemClassLoader.reset_instance()
    LoaderChain.reset_shared()

    for name in list(sys.modules):
        if name == FIXTURE_PACKAGE or name.startswith(f"{FIXTURE_PACKAGE}."):
            del sys.modules[name]


@pytest.fixture(autouse=True)
def clean_loader_state() -> Generator[None, None, None]:
    """Reset shared loaders, context slots and fixture modules around each test."""
    logger = logging.getLogger("molindo_utils")
    level = logger.level

    _reset_loader_state()
    yield
    _reset_loader_state()

    logger.setLevel(level)


@pytest.fixture
def classpath_dir() -> Path:
    """Directory holding the ``acmeplugins`` fixture package."""
    return FIXTURES / "classpath"


@pytest.fixture
def overlay_dir() -> Path:
    """Second root with a resource shadowing one in ``classpath_dir``."""
    return FIXTURES / "overlay"


@pytest.fixture
def path_loader(classpath_dir: Path):
    """Provide a PathClassLoader over the fixture class path."""
    from molindo_utils.reflect import PathClassLoader

    return PathClassLoader([classpath_dir], name="fixtures")


@pytest.fixture
def shapes_module(path_loader):
    """Load and return the fixture ``shapes`` module through ``path_loader``."""
    path_loader.load_class("acmeplugins.widgets.shapes.Shape")
    return sys.modules["acmeplugins.widgets.shapes"]

