"""Tests for the built-in lookup observers."""
from __future__ import annotations

import logging

import pytest

from whisker.core.config.rendering import RenderingConfig
from whisker.core.exceptions import KeyNotFoundError, WhiskerError
from whisker.core.rendering.engine import RenderEngine
from whisker.core.rendering.nodes import Literal, Placeholder, Section, sequence
from whisker.core.rendering.observers import LoggingObserver, RenderReport, StrictKeysObserver
from whisker.core.rendering.scope import KeyScope


@pytest.fixture
def tree():
    return sequence(
        Placeholder("title"),
        Section("items", body=[Placeholder("name"), Placeholder("price")]),
        Literal("."),
    )


@pytest.fixture
def data():
    return {"title": "Menu", "items": [{"name": "tea"}, {"name": "cake", "price": 3}]}


class TestRenderReport:
    def test_records_found_and_missing(self, tree, data) -> None:
        scope = KeyScope(data)
        report = RenderReport().attach(scope)
        RenderEngine().render_to_string(tree, scope)
        assert report.found == ["title", "items", "name", "name", "price"]
        assert report.missing == ["price"]
        assert report.lookups == 6
        assert report.has_issues

    def test_to_dict(self) -> None:
        report = RenderReport(found=["a"], missing=["b"])
        assert report.to_dict() == {"found": ["a"], "missing": ["b"], "lookups": 2}

    def test_reset(self) -> None:
        report = RenderReport(found=["a"], missing=["b"])
        report.reset()
        assert report.lookups == 0
        assert not report.has_issues


class TestStrictKeysObserver:
    def test_raises_on_missing(self, tree, data) -> None:
        scope = KeyScope(data)
        StrictKeysObserver().attach(scope)
        with pytest.raises(KeyNotFoundError) as excinfo:
            RenderEngine().render_to_string(tree, scope)
        err = excinfo.value
        assert err.key == "price"
        assert isinstance(err, KeyError)
        assert isinstance(err, WhiskerError)
        assert str(err) == "Key not found: price"
        assert err.to_json_error()["context"] == {"missing_member": "price", "key": "price"}

    def test_silent_when_all_found(self) -> None:
        scope = KeyScope({"a": 1})
        StrictKeysObserver().attach(scope)
        assert RenderEngine().render_to_string(Placeholder("a"), scope) == "1"

    def test_inverted_section_on_missing_key_also_raises(self) -> None:
        scope = KeyScope({})
        StrictKeysObserver().attach(scope)
        with pytest.raises(KeyNotFoundError):
            RenderEngine().render_to_string(Section("flag", invert=True, body=[Literal("x")]), scope)


class TestLoggingObserver:
    def test_logs_missing_at_configured_level(self, tree, data, caplog: pytest.LogCaptureFixture) -> None:
        scope = KeyScope(data)
        LoggingObserver(missing_level=logging.WARNING).attach(scope)
        with caplog.at_level(logging.DEBUG, logger="whisker.core.rendering.observers"):
            RenderEngine().render_to_string(tree, scope)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "price" in warnings[0].getMessage()
        debug_messages = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
        assert "Key found: title" in debug_messages

    def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        log = logging.getLogger("whisker.tests.custom")
        scope = KeyScope({})
        LoggingObserver(missing_level=logging.INFO, log=log).attach(scope)
        with caplog.at_level(logging.INFO, logger="whisker.tests.custom"):
            scope.lookup("gone")
        assert [r.name for r in caplog.records] == ["whisker.tests.custom"]

    def test_level_from_settings(self) -> None:
        settings = RenderingConfig(config={"rendering": {"missing_key_log_level": "error"}})
        assert LoggingObserver.from_settings(settings).missing_level == logging.ERROR
