"""Resolve Tax Use Case - picks the tax treatment for a new line."""

from dataclasses import dataclass

from tallybook.application.dto.requests import ResolveTaxRequest
from tallybook.application.dto.responses import TaxResolutionResponse
from tallybook.config import get_logger
from tallybook.core.entities import CompanyTaxSettings, TaxApplication
from tallybook.core.services import TaxResolverService

logger = get_logger(__name__)


@dataclass
class ResolveTaxResult:
    """Result of tax resolution."""

    application: TaxApplication


class ResolveTaxUseCase:
    """Resolve a catalogue category against the company's active tax scheme."""

    def __init__(
        self,
        resolver: TaxResolverService | None = None,
        company: CompanyTaxSettings | None = None,
    ):
        self._resolver = resolver
        self._company = company

    def _get_resolver(self) -> TaxResolverService:
        if self._resolver is None:
            from tallybook.application.services import get_tax_resolver_service

            self._resolver = get_tax_resolver_service()
        return self._resolver

    def _get_company(self) -> CompanyTaxSettings:
        if self._company is None:
            from tallybook.application.services import get_company_tax_settings

            self._company = get_company_tax_settings()
        return self._company

    async def execute(self, request: ResolveTaxRequest) -> ResolveTaxResult:
        """Execute tax resolution."""
        customer = request.customer.to_entity() if request.customer else None

        application = self._get_resolver().resolve_for_line(
            request.category,
            self._get_company(),
            customer=customer,
            on_date=request.on_date,
        )

        logger.info(
            "tax_resolved",
            category=request.category.value,
            tax_name=application.treatment.name,
            rate_percent=str(application.treatment.rate_percent),
        )

        return ResolveTaxResult(application=application)

    def to_response(self, result: ResolveTaxResult) -> TaxResolutionResponse:
        """Convert result to API response."""
        return TaxResolutionResponse.from_entity(result.application)
