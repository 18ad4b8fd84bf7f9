"""Root conftest: configure structlog for tests."""

import pytest
import structlog

# Configure structlog to route through stdlib logging so caplog works in tests.
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Prevent context leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def _isolate_scoreboard_env(monkeypatch):
    """Keep SCOREBOARD_* variables from the developer's shell out of settings tests."""
    for name in (
        "SCOREBOARD_DB_PATH",
        "SCOREBOARD_LOG_DIR",
        "SCOREBOARD_DISABLED_SPORTS",
        "SCOREBOARD_GAME_CODE_ATTEMPTS",
        "SCOREBOARD_LOG_LEVEL",
        "SCOREBOARD_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
