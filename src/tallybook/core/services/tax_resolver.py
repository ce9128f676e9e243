"""
Tax resolution service.

Turns a catalogue item's tax category into the TaxTreatment snapshotted onto
a new line, given the company's active scheme and, optionally, the
customer's tax profile.
"""

from datetime import date
from decimal import Decimal

from tallybook.config import get_logger
from tallybook.core.entities.tax import (
    EU_COUNTRIES,
    CompanyTaxSettings,
    CustomerTaxProfile,
    CustomerType,
    TaxApplication,
    TaxCategory,
    TaxRate,
    TaxScheme,
    TaxTreatment,
    TaxType,
)

logger = get_logger(__name__)

REVERSE_CHARGE_NOTE = "VAT reverse charge applies - customer to account for VAT"

# Fallback when a scheme has neither a matching nor a default rate
FALLBACK_RATES: dict[TaxType, Decimal] = {
    TaxType.GST: Decimal("10"),
    TaxType.VAT: Decimal("20"),
}


class TaxResolverService:
    """
    Resolves tax treatments for catalogue categories.

    Order of precedence:
    - no active scheme: out of scope, 0%
    - foreign customer with export zero-rating supported:
      EU cross-border B2B reverse charge, else non-EU zero-rated export
    - customer exemption
    - scheme rate for the category
    """

    def resolve_for_line(
        self,
        category: TaxCategory,
        company: CompanyTaxSettings,
        customer: CustomerTaxProfile | None = None,
        on_date: date | None = None,
    ) -> TaxApplication:
        scheme = company.active_scheme
        if scheme is None:
            return TaxApplication(
                treatment=TaxTreatment(
                    rate_percent=Decimal("0"),
                    name="No Tax",
                    category=TaxCategory.OUT_OF_SCOPE,
                ),
                explanation="No active tax scheme configured",
            )

        rate = self.find_applicable_rate(scheme, category, on_date or date.today())

        if customer is not None:
            application = self._special_treatment(scheme, rate, category, company, customer)
            if application is not None:
                logger.debug(
                    "tax_special_treatment",
                    category=category.value,
                    tax_name=application.treatment.name,
                    reverse_charge=application.treatment.is_reverse_charge,
                )
                return application

        return TaxApplication(
            treatment=TaxTreatment(
                rate_percent=rate.rate_percent,
                name=rate.name,
                category=category,
            ),
            explanation=f"Standard {rate.name} rate",
        )

    def _special_treatment(
        self,
        scheme: TaxScheme,
        rate: TaxRate,
        category: TaxCategory,
        company: CompanyTaxSettings,
        customer: CustomerTaxProfile,
    ) -> TaxApplication | None:
        is_foreign = customer.country_code != company.country_code

        if scheme.export_zero_rated_supported and is_foreign:
            if scheme.reverse_charge_supported and self.is_eu_cross_border_b2b(
                company.country_code, customer
            ):
                return TaxApplication(
                    treatment=TaxTreatment(
                        rate_percent=rate.rate_percent,
                        name=f"{rate.name} (Reverse Charge)",
                        is_reverse_charge=True,
                        category=category,
                    ),
                    explanation="EU B2B cross-border transaction with valid VAT ID",
                    reverse_charge_note=REVERSE_CHARGE_NOTE,
                )

            if customer.country_code not in EU_COUNTRIES:
                return TaxApplication(
                    treatment=TaxTreatment(
                        rate_percent=Decimal("0"),
                        name=f"{scheme.tax_type.value} Zero-rated Export",
                        category=TaxCategory.ZERO,
                    ),
                    explanation="Export to non-EU country",
                )

        if customer.exemption_reason:
            return TaxApplication(
                treatment=TaxTreatment(
                    rate_percent=Decimal("0"),
                    name=f"{scheme.tax_type.value} Exempt",
                    category=TaxCategory.EXEMPT,
                ),
                explanation=f"Exemption: {customer.exemption_reason}",
            )

        return None

    @staticmethod
    def find_applicable_rate(
        scheme: TaxScheme, category: TaxCategory, on_date: date
    ) -> TaxRate:
        """Rate for ``category`` effective on ``on_date``, else the default, else a fallback."""
        for rate in scheme.rates:
            if rate.category is category and rate.is_effective_on(on_date):
                return rate

        for rate in scheme.rates:
            if rate.is_default:
                return rate

        return TaxRate(
            id="fallback",
            name=f"{scheme.tax_type.value} Standard",
            rate_percent=FALLBACK_RATES.get(scheme.tax_type, Decimal("0")),
            category=TaxCategory.STANDARD,
            is_default=True,
        )

    @staticmethod
    def is_eu_cross_border_b2b(company_country: str, customer: CustomerTaxProfile) -> bool:
        return (
            customer.customer_type is CustomerType.BUSINESS
            and customer.tax_id_validated
            and company_country in EU_COUNTRIES
            and customer.country_code in EU_COUNTRIES
            and company_country != customer.country_code
        )
