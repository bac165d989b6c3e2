"""Exception hierarchy and logging tests.

These tests verify:
- MolindoUtilsError is the base exception class
- TypeNotFoundError carries the class name
- Logging functions accept dict and LogContext fields
- set_log_level() maps level names, including TRACE
"""

from __future__ import annotations

import logging

import pytest


class TestExceptionHierarchy:
    """Test exception class hierarchy."""

    def test_base_class(self):
        from molindo_utils import (
            MolindoUtilsError,
            TypeNotFoundError,
            UnsupportedOperationError,
        )
        from molindo_utils.reflect import LoaderNotFoundError

        assert issubclass(TypeNotFoundError, MolindoUtilsError)
        assert issubclass(UnsupportedOperationError, MolindoUtilsError)
        assert issubclass(LoaderNotFoundError, MolindoUtilsError)
        assert issubclass(MolindoUtilsError, Exception)

    def test_type_not_found_message(self):
        from molindo_utils import TypeNotFoundError

        error = TypeNotFoundError("a.b.C")

        assert error.class_name == "a.b.C"
        assert str(error) == "Class not found: 'a.b.C'"

    def test_type_not_found_custom_message(self):
        from molindo_utils import TypeNotFoundError

        error = TypeNotFoundError("a.b.c", "'a.b.c' is not a class")
        assert str(error) == "'a.b.c' is not a class"

    def test_can_catch_by_base_class(self):
        from molindo_utils import MolindoUtilsError, for_name

        with pytest.raises(MolindoUtilsError):
            for_name("molindo_no_such_module.Thing")


class TestLogging:
    """Test logging functions."""

    def test_log_functions_callable(self):
        from molindo_utils import log_debug, log_error, log_info, log_trace, log_warn

        log_error("Error message")
        log_warn("Warning message", {"attempt": 3})
        log_info("Info message")
        log_debug("Debug message")
        log_trace("Trace message")

    def test_fields_attached(self, caplog):
        from molindo_utils import log_info

        caplog.set_level(logging.INFO, logger="molindo_utils")
        log_info("Resolved", {"loader": "system", "count": 2})

        record = caplog.records[-1]
        assert record.fields == {"loader": "system", "count": "2"}
        assert record.getMessage() == "Resolved [loader=system count=2]"

    def test_log_context_drops_unset_fields(self, caplog):
        from molindo_utils import LogContext, log_warn

        caplog.set_level(logging.WARNING, logger="molindo_utils")
        log_warn("Lookup", LogContext(operation="for_name", class_name="a.B"))

        assert caplog.records[-1].fields == {"operation": "for_name", "class_name": "a.B"}

    def test_class_loading_logs_debug(self, caplog):
        from molindo_utils import for_name

        caplog.set_level(logging.DEBUG, logger="molindo_utils")
        for_name("json.JSONDecoder")

        messages = [record.getMessage() for record in caplog.records]
        assert any(message.startswith("Loaded class") for message in messages)
        assert any(message.startswith("LoaderChain: Selected") for message in messages)

    def test_disabled_level_emits_nothing(self, caplog):
        from molindo_utils import log_debug

        caplog.set_level(logging.INFO, logger="molindo_utils")
        log_debug("Hidden")

        assert caplog.records == []

    def test_set_log_level_trace(self, caplog):
        from molindo_utils import log_trace, set_log_level
        from molindo_utils.logging import TRACE

        set_log_level("trace")
        caplog.set_level(TRACE)
        log_trace("Very verbose")

        assert logging.getLogger("molindo_utils").level == TRACE
        assert caplog.records[-1].levelname == "TRACE"

    def test_set_log_level_warn(self):
        from molindo_utils import set_log_level

        set_log_level("WARN")
        assert logging.getLogger("molindo_utils").level == logging.WARNING

    def test_set_log_level_unknown(self):
        from molindo_utils import set_log_level

        with pytest.raises(ValueError, match="verbose"):
            set_log_level("verbose")
