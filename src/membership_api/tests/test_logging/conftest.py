import logging

import pytest

from membership_api.config import get_settings
from membership_api.core.logging.builder import setup_logging, stop_queue_logging


@pytest.fixture(autouse=True)
def restore_logging(request):
    """These tests reconfigure the root logger; put the suite-wide configuration back afterwards."""
    yield
    stop_queue_logging()
    setup_logging(get_settings())
    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)
