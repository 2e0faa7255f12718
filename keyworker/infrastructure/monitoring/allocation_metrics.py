"""Allocation metrics for Prometheus exposition.

This module provides Prometheus counters for assignment changes and
recommendation outcomes, labelled by policy so key worker and personal
officer activity can be read separately.
"""

from __future__ import annotations

import os
import threading

from prometheus_client import CollectorRegistry, Counter

# Thread lock for singleton initialization
_metrics_lock = threading.Lock()

RECOMMENDATION_OUTCOMES = ("RECOMMENDED", "NO_AVAILABLE_STAFF")


class AllocationMetricsCollector:
    """Collects allocation metrics for Prometheus.

    This collector tracks:
    - Assignments created, by policy and allocation type
    - Assignments deallocated, by policy and deallocation reason
    - People considered by the recommender, by policy and outcome

    Attributes:
        assignments_created_total: Counter for new active assignments.
        assignments_deallocated_total: Counter for closed assignments.
        allocation_recommendations_total: Counter for recommendation outcomes.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize allocation metrics collector.

        Args:
            registry: Optional custom registry for testing isolation.
        """
        self._registry = registry or CollectorRegistry()
        self._environment = os.environ.get("ENVIRONMENT", "development")
        self._service_name = os.environ.get("SERVICE_NAME", "keyworker-allocations")

        self.assignments_created_total = Counter(
            name="assignments_created_total",
            documentation="Total assignments created by policy and allocation type",
            labelnames=["policy", "allocation_type", "service", "environment"],
            registry=self._registry,
        )

        self.assignments_deallocated_total = Counter(
            name="assignments_deallocated_total",
            documentation="Total assignments deallocated by policy and reason",
            labelnames=["policy", "reason", "service", "environment"],
            registry=self._registry,
        )

        self.allocation_recommendations_total = Counter(
            name="allocation_recommendations_total",
            documentation="People considered by the recommender by outcome",
            labelnames=["policy", "outcome", "service", "environment"],
            registry=self._registry,
        )

    def record_created(self, policy: str, allocation_type: str) -> None:
        self.assignments_created_total.labels(
            policy=policy,
            allocation_type=allocation_type,
            service=self._service_name,
            environment=self._environment,
        ).inc()

    def record_deallocated(self, policy: str, reason: str) -> None:
        self.assignments_deallocated_total.labels(
            policy=policy,
            reason=reason,
            service=self._service_name,
            environment=self._environment,
        ).inc()

    def record_recommendations(self, policy: str, outcome: str, count: int) -> None:
        """Record ``count`` people reaching a recommendation outcome.

        Raises:
            ValueError: If outcome is not a known recommendation outcome.
        """
        if outcome not in RECOMMENDATION_OUTCOMES:
            raise ValueError(
                f"Invalid outcome '{outcome}'. Must be one of {RECOMMENDATION_OUTCOMES}."
            )
        if count <= 0:
            return
        self.allocation_recommendations_total.labels(
            policy=policy,
            outcome=outcome,
            service=self._service_name,
            environment=self._environment,
        ).inc(count)

    def get_registry(self) -> CollectorRegistry:
        return self._registry


# Singleton instance
_allocation_metrics_collector: AllocationMetricsCollector | None = None


def get_allocation_metrics_collector() -> AllocationMetricsCollector:
    """Get the singleton AllocationMetricsCollector instance (thread-safe).

    Uses double-checked locking for lazy initialization.
    """
    global _allocation_metrics_collector
    if _allocation_metrics_collector is None:
        with _metrics_lock:
            if _allocation_metrics_collector is None:
                _allocation_metrics_collector = AllocationMetricsCollector()
    return _allocation_metrics_collector


def reset_allocation_metrics_collector() -> None:
    """Reset the singleton collector (for testing only)."""
    global _allocation_metrics_collector
    with _metrics_lock:
        _allocation_metrics_collector = None
