import logging

import pytest
import structlog

from src.core.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging():  # type: ignore[no-untyped-def]
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers, root.level = handlers, level
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_sets_root_level(self) -> None:
        configure_logging("warning")
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging("verbose")
        assert logging.getLogger().level == logging.INFO

    def test_json_output_has_timestamp(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("info")
        structlog.get_logger("test").info("image_hash_updated", key="en")
        err = capsys.readouterr().err
        assert '"event": "image_hash_updated"' in err
        assert '"key": "en"' in err
        assert '"timestamp"' in err
