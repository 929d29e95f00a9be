import pytest
import structlog

from shared.logging import configure_structlog

configure_structlog()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Operations bind game and player context; drop it between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
