"""
Shared fixtures for the govaudit test suite.
"""
import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from govaudit.config import get_settings


@pytest.fixture(autouse=True)
def reset_govaudit_state():
    """Undo CLI logging setup and cached settings between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    package_logger = logging.getLogger("govaudit")
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document under tmp_path and return its path."""
    import json

    def _write(name, document):
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write
