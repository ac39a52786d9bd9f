import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_srw_build_logger():
    """Drop handlers installed by ``setup_logging`` so tests stay isolated."""
    yield
    logger = logging.getLogger("srw_build")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
