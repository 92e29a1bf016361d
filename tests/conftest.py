import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI invocations bind structlog to the runner's stderr; undo that after each test."""
    yield
    structlog.reset_defaults()
