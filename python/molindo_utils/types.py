"""Pydantic models for molindo-utils.

This module provides the configuration model used to build the system
class loader and the context model accepted by the structured logging
functions.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

CLASSPATH_ENV = "MOLINDO_CLASSPATH"
LOG_LEVEL_ENV = "MOLINDO_LOG_LEVEL"


class LoaderConfig(BaseModel):
    """Configuration for the system class loader.

    Example:
        >>> config = LoaderConfig(extra_class_path=["/opt/app/resources"])
        >>> loader = SystemClassLoader(config)
    """

    extra_class_path: list[str] = Field(
        default_factory=list,
        description="Additional directories or zip archives searched for resources.",
    )
    include_sys_path: bool = Field(
        default=True,
        description="Whether sys.path entries are searched for resources.",
    )
    log_level: str = Field(
        default="info",
        pattern="^(trace|debug|info|warn|error)$",
        description="Log level for the molindo_utils logger (trace, debug, info, warn, error).",
    )

    model_config = {"extra": "forbid"}

    @field_validator("extra_class_path")
    @classmethod
    def _drop_empty_entries(cls, value: list[str]) -> list[str]:
        return [entry for entry in value if entry]

    @classmethod
    def from_env(cls) -> LoaderConfig:
        """Build a config from the process environment.

        Reads ``MOLINDO_CLASSPATH`` (``os.pathsep``-separated roots) and
        ``MOLINDO_LOG_LEVEL``.

        Returns:
            LoaderConfig populated from the environment, defaults otherwise.
        """
        data: dict[str, object] = {}

        class_path = os.environ.get(CLASSPATH_ENV)
        if class_path:
            data["extra_class_path"] = class_path.split(os.pathsep)

        log_level = os.environ.get(LOG_LEVEL_ENV)
        if log_level:
            data["log_level"] = log_level.strip().lower()

        return cls.model_validate(data)


class LogContext(BaseModel):
    """Context fields for structured logging.

    Example:
        >>> context = LogContext(operation="for_name", class_name="a.b.C")
        >>> log_debug("Loading class", context)
    """

    operation: str | None = Field(
        default=None,
        description="Helper operation being performed.",
    )
    class_name: str | None = Field(
        default=None,
        description="Dotted class name being resolved.",
    )
    resource: str | None = Field(
        default=None,
        description="Resource path being looked up.",
    )
    loader: str | None = Field(
        default=None,
        description="Name of the class loader involved.",
    )


__all__ = [
    "CLASSPATH_ENV",
    "LOG_LEVEL_ENV",
    "LoaderConfig",
    "LogContext",
]
