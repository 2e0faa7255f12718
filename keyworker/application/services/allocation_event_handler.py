"""Routes inbound person events to the deallocation triggers.

Supported event types:
- EXTERNAL_MOVEMENT_RECORD-INSERTED: release, transfer or admission
- prison-offender-events.prisoner.merged: two identifiers merged
- complexity-of-need.level.changed: complexity-of-need reassessed

Movements that are neither a release nor a move into a prison are
ignored, as are unknown event types. Each event is handled under its own
correlation id.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from keyworker.application.dtos.events import (
    ComplexityOfNeedChangedEvent,
    ExternalMovementEvent,
    PrisonerMergedEvent,
)
from keyworker.application.ports.prison_register import PrisonRegisterProtocol
from keyworker.application.services.base import LoggingMixin
from keyworker.application.services.deallocation_service import DeallocationService
from keyworker.application.services.merge_service import MergeService
from keyworker.domain.models.allocation_context import AllocationContext
from keyworker.domain.models.assignment import Assignment
from keyworker.domain.models.policy import AllocationPolicy
from keyworker.infrastructure.observability.correlation import (
    generate_correlation_id,
    set_correlation_id,
)

EXTERNAL_MOVEMENT = "EXTERNAL_MOVEMENT_RECORD-INSERTED"
PRISONER_MERGED = "prison-offender-events.prisoner.merged"
COMPLEXITY_OF_NEED_CHANGED = "complexity-of-need.level.changed"


def _as_utc(moment: datetime | None) -> datetime | None:
    if moment is None or moment.tzinfo is not None:
        return moment
    return moment.replace(tzinfo=timezone.utc)


class AllocationEventHandler(LoggingMixin):
    """Parses inbound events and applies the matching trigger."""

    def __init__(
        self,
        deallocations: DeallocationService,
        merges: MergeService,
        prison_register: PrisonRegisterProtocol,
    ) -> None:
        self._deallocations = deallocations
        self._merges = merges
        self._prison_register = prison_register
        self._init_logger(component="events")

    def handle(
        self,
        event_type: str,
        payload: Mapping[str, Any],
        correlation_id: str | None = None,
    ) -> list[Assignment]:
        """Parse ``payload`` as ``event_type`` and apply it.

        Args:
            event_type: Domain event name.
            payload: Event body as received.
            correlation_id: Id carried by the inbound message; generated
                when absent. Every log line written while handling the
                event carries it.

        Returns:
            The assignments changed; empty when the event needed nothing.

        Raises:
            pydantic.ValidationError: If the payload does not parse.
        """
        set_correlation_id(correlation_id or generate_correlation_id())
        log = self._log_operation("handle", event_type=event_type)
        log.info("event_received")
        try:
            changed = self._dispatch(event_type, payload)
        except Exception:
            log.exception("event_failed")
            raise
        log.info("event_handled", changed=len(changed))
        return changed

    def _dispatch(
        self, event_type: str, payload: Mapping[str, Any]
    ) -> list[Assignment]:
        if event_type == EXTERNAL_MOVEMENT:
            return self.on_movement(ExternalMovementEvent.model_validate(payload))
        if event_type == PRISONER_MERGED:
            return self.on_merge(PrisonerMergedEvent.model_validate(payload))
        if event_type == COMPLEXITY_OF_NEED_CHANGED:
            return self.on_complexity_of_need_changed(
                ComplexityOfNeedChangedEvent.model_validate(payload)
            )
        self._log_operation("handle", event_type=event_type).debug("event_ignored")
        return []

    def on_movement(self, event: ExternalMovementEvent) -> list[Assignment]:
        context = AllocationContext.system(
            AllocationPolicy.KEY_WORKER, _as_utc(event.movement_date_time)
        )
        log = self._log_operation(
            "on_movement",
            person_identifier=event.person_identifier,
            movement_type=event.movement_type,
            direction=event.direction_code.value,
        )
        if event.is_release():
            return self._deallocations.on_release(event.person_identifier, context)
        destination = event.to_agency_location_id
        if (
            event.is_transfer_or_admission()
            and destination
            and self._prison_register.is_prison(destination)
        ):
            return self._deallocations.on_transfer(
                event.person_identifier, destination, context
            )
        log.debug("movement_ignored", to_agency_location_id=destination)
        return []

    def on_merge(self, event: PrisonerMergedEvent) -> list[Assignment]:
        context = AllocationContext.system(AllocationPolicy.KEY_WORKER)
        return self._merges.merge(
            event.person_identifier, event.removed_person_identifier, context
        )

    def on_complexity_of_need_changed(
        self, event: ComplexityOfNeedChangedEvent
    ) -> list[Assignment]:
        if not event.is_newly_high():
            return []
        context = AllocationContext.system(AllocationPolicy.KEY_WORKER)
        return self._deallocations.on_complexity_of_need_high(
            event.person_identifier, context
        )
