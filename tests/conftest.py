"""
Pytest configuration and shared fixtures for allocation engine tests.

Testing Standards:
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
- Services are exercised over the in-memory stubs; nothing needs a network
"""

import pytest
from prometheus_client import CollectorRegistry

from keyworker.bootstrap.allocation import AllocationEngine, build_in_memory_engine
from keyworker.config.engine_config import DEFAULT_ENGINE_CONFIG
from keyworker.infrastructure.monitoring.allocation_metrics import (
    AllocationMetricsCollector,
)


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from keyworker import __version__

    return __version__


@pytest.fixture
def metrics() -> AllocationMetricsCollector:
    """Metrics collector on an isolated registry."""
    return AllocationMetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def engine(metrics: AllocationMetricsCollector) -> AllocationEngine:
    """A fully wired engine over fresh in-memory stubs."""
    return build_in_memory_engine(config=DEFAULT_ENGINE_CONFIG, metrics=metrics)
