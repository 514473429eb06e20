from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Field / expression schemas
# ---------------------------------------------------------------------------


class ErrorKind(str, Enum):
    STRUCTURAL = "structural"
    RANGE = "range"
    ORDER = "order"
    STEP = "step"
    TOKEN = "token"


class FieldDefinition(BaseModel):
    """Static description of one of the five cron fields."""

    model_config = ConfigDict(frozen=True)

    name: str
    min: int
    max: int
    # Symbolic token at index i stands for the value min + i
    symbolic_names: Optional[tuple[str, ...]] = None

    @property
    def size(self) -> int:
        return self.max - self.min + 1


class ParsedField(BaseModel):
    name: str
    expression: str
    values: list[int]
    valid: bool
    min: int
    max: int
    description: str = ""
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None


class CronParseResult(BaseModel):
    expression: str
    is_valid: bool
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    fields: list[ParsedField]
    description: str
    next_occurrences: list[datetime]
    reference: datetime


class CronParseRequest(BaseModel):
    expression: str
    count: int = Field(default=5, ge=1, le=100)
    now: Optional[datetime] = None


class CronExample(BaseModel):
    expression: str
    label: str
    description: str


# ---------------------------------------------------------------------------
# Occurrence / aggregation schemas
# ---------------------------------------------------------------------------


class OccurrenceRequest(BaseModel):
    from_dt: Optional[datetime] = None
    to_dt: Optional[datetime] = None
    limit: int = Field(default=500, ge=1, le=5000)


class ExpressionOccurrenceRequest(OccurrenceRequest):
    expression: str


class OccurrencesResponse(BaseModel):
    expression: str
    from_dt: datetime
    to_dt: datetime
    occurrences: list[datetime]


class HeatmapCell(BaseModel):
    hour: int  # 0-23
    day: int   # 0=Sunday … 6=Saturday (cron numbering)
    count: int


class HeatmapRequest(BaseModel):
    from_dt: Optional[datetime] = None
    to_dt: Optional[datetime] = None


class ExpressionHeatmapRequest(HeatmapRequest):
    expression: str


class HeatmapResponse(BaseModel):
    expression: str
    from_dt: datetime
    to_dt: datetime
    data: list[HeatmapCell]
    max_count: int
