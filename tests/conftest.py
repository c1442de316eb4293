import logging

import pytest


@pytest.fixture
def fallback_logs(caplog):
    """Capture the fallback_images log records."""
    caplog.set_level(logging.DEBUG, logger="fallback_images")
    return caplog
