import logging

import pytest

from docassist.logging.logger import Log


class TestLogRendering:
    def test_message_without_context(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="docassist"):
            Log.info("Shell started")
        assert caplog.records[-1].getMessage() == "Shell started"

    def test_context_appended_in_call_order(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="docassist"):
            Log.info("Document uploaded", id="abc", name="cv.pdf")
        assert caplog.records[-1].getMessage() == "Document uploaded id=abc name=cv.pdf"

    def test_levels(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="docassist"):
            Log.debug("d")
            Log.warning("w")
            Log.error("e")
        assert [r.levelname for r in caplog.records[-3:]] == ["DEBUG", "WARNING", "ERROR"]

    def test_debug_suppressed_above_level(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="docassist"):
            Log.debug("hidden", key="value")
        assert not [r for r in caplog.records if r.getMessage().startswith("hidden")]


class TestLogConfigure:
    def test_configure_adds_single_handler(self) -> None:
        logger = logging.getLogger("docassist")
        before = list(logger.handlers)
        try:
            Log.configure("warning")
            Log.configure("warning")
            added = [h for h in logger.handlers if h not in before]
            assert len(added) <= 1
            assert logger.level == logging.WARNING
        finally:
            for handler in list(logger.handlers):
                if handler not in before:
                    logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)
