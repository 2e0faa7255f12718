"""Monitoring infrastructure: Prometheus collectors."""

from keyworker.infrastructure.monitoring.allocation_metrics import (
    AllocationMetricsCollector,
    get_allocation_metrics_collector,
    reset_allocation_metrics_collector,
)

__all__ = [
    "AllocationMetricsCollector",
    "get_allocation_metrics_collector",
    "reset_allocation_metrics_collector",
]
