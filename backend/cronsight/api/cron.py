from fastapi import APIRouter, HTTPException

from cronsight.schemas import (
    CronExample,
    CronParseRequest,
    CronParseResult,
    ExpressionHeatmapRequest,
    ExpressionOccurrenceRequest,
    HeatmapCell,
    HeatmapResponse,
    OccurrencesResponse,
)
from cronsight.services.cron import parse
from cronsight.services.examples import CRON_EXAMPLES
from cronsight.services.occurrences import heatmap_for_window, occurrences_between

router = APIRouter(prefix="/api/cron", tags=["cron"])


def value_sets_or_400(expression: str) -> list[list[int]]:
    """Parse *expression* for a window query; an unusable one is a client error."""
    result = parse(expression, count=0)
    if not result.is_valid:
        raise HTTPException(status_code=400, detail=result.error)
    return [f.values for f in result.fields]


# ---------------------------------------------------------------------------
# Parse (stateless)
# ---------------------------------------------------------------------------


@router.post("/parse", response_model=CronParseResult)
def parse_expression(payload: CronParseRequest) -> CronParseResult:
    return parse(payload.expression, count=payload.count, now=payload.now)


@router.get("/examples", response_model=list[CronExample])
def list_examples() -> list[CronExample]:
    return list(CRON_EXAMPLES)


# ---------------------------------------------------------------------------
# Occurrences over a window
# ---------------------------------------------------------------------------


@router.post("/occurrences", response_model=OccurrencesResponse)
def get_occurrences(payload: ExpressionOccurrenceRequest) -> OccurrencesResponse:
    value_sets = value_sets_or_400(payload.expression)
    from_dt, to_dt, items = occurrences_between(
        value_sets,
        from_dt=payload.from_dt,
        to_dt=payload.to_dt,
        limit=payload.limit,
    )
    return OccurrencesResponse(
        expression=payload.expression,
        from_dt=from_dt,
        to_dt=to_dt,
        occurrences=items,
    )


@router.post("/heatmap", response_model=HeatmapResponse)
def get_heatmap(payload: ExpressionHeatmapRequest) -> HeatmapResponse:
    value_sets = value_sets_or_400(payload.expression)
    from_dt, to_dt, cells, max_count = heatmap_for_window(
        value_sets, from_dt=payload.from_dt, to_dt=payload.to_dt
    )
    return HeatmapResponse(
        expression=payload.expression,
        from_dt=from_dt,
        to_dt=to_dt,
        data=[HeatmapCell(**cell) for cell in cells],
        max_count=max_count,
    )
