"""Totals calculation endpoints."""

from fastapi import APIRouter, Depends

from tallybook.api.dependencies import get_calculate_totals_use_case
from tallybook.application.dto.requests import CalculateLineRequest, CalculateTotalsRequest
from tallybook.application.dto.responses import (
    DocumentTotalsResponse,
    ErrorResponse,
    LineCalculationResponse,
)
from tallybook.application.use_cases.calculate_totals import CalculateTotalsUseCase

router = APIRouter(prefix="/api/totals", tags=["totals"])


@router.post(
    "",
    response_model=DocumentTotalsResponse,
    responses={400: {"model": ErrorResponse}},
)
async def calculate_totals(
    request: CalculateTotalsRequest,
    use_case: CalculateTotalsUseCase = Depends(get_calculate_totals_use_case),
) -> DocumentTotalsResponse:
    """
    Calculate document totals.

    Returns subtotal, discounts, tax breakdown by group, total, deposit
    and balance, all in integer cents.
    """
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/line",
    response_model=LineCalculationResponse,
    responses={400: {"model": ErrorResponse}},
)
async def calculate_line(
    request: CalculateLineRequest,
    use_case: CalculateTotalsUseCase = Depends(get_calculate_totals_use_case),
) -> LineCalculationResponse:
    """Calculate base, discount, net, tax and total for a single line."""
    calc = await use_case.calculate_line(request)
    return use_case.to_line_response(calc)
