"""Unit tests for correlation ID management."""

import re
from contextvars import copy_context

from keyworker.infrastructure.observability.correlation import (
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)


class TestGenerateCorrelationId:
    def test_uuid4_format(self) -> None:
        uuid_pattern = re.compile(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
        )
        assert uuid_pattern.match(generate_correlation_id()) is not None

    def test_unique(self) -> None:
        assert len({generate_correlation_id() for _ in range(100)}) == 100


class TestCorrelationIdContext:
    """Tests for correlation ID context management."""

    def test_set_and_get(self) -> None:
        def run() -> str:
            set_correlation_id("event-123")
            return get_correlation_id()

        assert copy_context().run(run) == "event-123"

    def test_isolated_between_contexts(self) -> None:
        def run() -> str:
            set_correlation_id("inner")
            return get_correlation_id()

        set_correlation_id("")
        copy_context().run(run)
        assert get_correlation_id() == ""


class TestCorrelationIdProcessor:
    def test_adds_id_when_set(self) -> None:
        def run() -> dict[str, object]:
            set_correlation_id("abc")
            return correlation_id_processor(None, "info", {"event": "x"})

        assert copy_context().run(run) == {"event": "x", "correlation_id": "abc"}

    def test_omits_id_when_unset(self) -> None:
        def run() -> dict[str, object]:
            set_correlation_id("")
            return correlation_id_processor(None, "info", {"event": "x"})

        assert copy_context().run(run) == {"event": "x"}
