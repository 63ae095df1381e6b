import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """The CLI points structlog at the runner's stderr; undo that between tests."""
    yield
    structlog.reset_defaults()
