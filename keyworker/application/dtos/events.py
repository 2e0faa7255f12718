"""Inbound domain event payloads.

Events arrive from other systems as JSON with camelCase fields. These
models parse them; AllocationEventHandler decides what each means.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _EventModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class MovementDirection(str, Enum):
    IN = "IN"
    OUT = "OUT"


class MovementType(str, Enum):
    """External movement types that can affect allocations."""

    ADMISSION = "ADM"
    RELEASE = "REL"
    TRANSFER = "TRN"
    COURT = "CRT"
    TEMPORARY_ABSENCE = "TAP"


class ExternalMovementEvent(_EventModel):
    """A person moved into or out of an establishment."""

    person_identifier: str = Field(..., alias="offenderIdNo", min_length=1)
    movement_type: str = Field(..., alias="movementType")
    direction_code: MovementDirection = Field(..., alias="directionCode")
    from_agency_location_id: str | None = Field(
        default=None, alias="fromAgencyLocationId"
    )
    to_agency_location_id: str | None = Field(default=None, alias="toAgencyLocationId")
    movement_date_time: datetime | None = Field(default=None, alias="movementDateTime")

    def is_release(self) -> bool:
        return (
            self.direction_code is MovementDirection.OUT
            and self.movement_type == MovementType.RELEASE.value
        )

    def is_transfer_or_admission(self) -> bool:
        return (self.direction_code, self.movement_type) in {
            (MovementDirection.OUT, MovementType.TRANSFER.value),
            (MovementDirection.IN, MovementType.ADMISSION.value),
        }


class PrisonerMergedEvent(_EventModel):
    """Two person identifiers were found to be the same person."""

    person_identifier: str = Field(..., alias="nomsNumber", min_length=1)
    removed_person_identifier: str = Field(
        ..., alias="removedNomsNumber", min_length=1
    )


class ComplexityOfNeedLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ComplexityOfNeedChangedEvent(_EventModel):
    """A person's complexity-of-need assessment changed."""

    person_identifier: str = Field(..., alias="offenderNo", min_length=1)
    level: ComplexityOfNeedLevel
    active: bool | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _normalise_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    def is_newly_high(self) -> bool:
        return self.active is True and self.level is ComplexityOfNeedLevel.HIGH
