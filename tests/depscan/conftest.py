"""Shared fixtures for depscan tests."""

import logging

import pytest
import structlog


def configure_test_logging() -> None:
    """Route structlog through stdlib logging so ``caplog`` sees events."""
    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    logging.getLogger("depscan").setLevel(logging.DEBUG)


@pytest.fixture(autouse=True)
def _structlog_to_stdlib():
    configure_test_logging()
    yield
