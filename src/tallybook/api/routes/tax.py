"""Tax resolution endpoints."""

from fastapi import APIRouter, Depends

from tallybook.api.dependencies import get_resolve_tax_use_case
from tallybook.application.dto.requests import ResolveTaxRequest
from tallybook.application.dto.responses import ErrorResponse, TaxResolutionResponse
from tallybook.application.use_cases.resolve_tax import ResolveTaxUseCase

router = APIRouter(prefix="/api/tax", tags=["tax"])


@router.post(
    "/resolve",
    response_model=TaxResolutionResponse,
    responses={400: {"model": ErrorResponse}},
)
async def resolve_tax(
    request: ResolveTaxRequest,
    use_case: ResolveTaxUseCase = Depends(get_resolve_tax_use_case),
) -> TaxResolutionResponse:
    """Resolve the tax treatment to snapshot onto a new line."""
    result = await use_case.execute(request)
    return use_case.to_response(result)
