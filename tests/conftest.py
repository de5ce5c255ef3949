import pytest
import structlog


@pytest.fixture(autouse=True)
def quiet_logs():
    """Keep structlog output out of captured CLI output."""
    structlog.configure(logger_factory=structlog.ReturnLoggerFactory())
    yield
    structlog.reset_defaults()
