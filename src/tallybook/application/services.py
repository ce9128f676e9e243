"""
Service factory functions for dependency injection.

This module wires settings to core services. Use cases should import
from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from tallybook.config import get_settings
from tallybook.core.entities import (
    CompanyTaxSettings,
    PricingMode,
    default_gst_scheme,
)
from tallybook.core.exceptions import ConfigurationError
from tallybook.core.services import (
    DocumentValidator,
    TaxResolverService,
    TotalsEngine,
)

# Singleton service instances
_totals_engine: TotalsEngine | None = None
_document_validator: DocumentValidator | None = None
_tax_resolver_service: TaxResolverService | None = None
_company_tax_settings: CompanyTaxSettings | None = None


def get_totals_engine() -> TotalsEngine:
    """
    Get or create the TotalsEngine.

    The default pricing mode and cache size come from ``settings.totals``.
    """
    global _totals_engine

    if _totals_engine is None:
        settings = get_settings().totals
        _totals_engine = TotalsEngine(
            pricing_mode=PricingMode(settings.pricing_mode),
            cache_size=settings.cache_size,
        )
    return _totals_engine


def get_document_validator() -> DocumentValidator:
    """Get or create the DocumentValidator for the default currency."""
    global _document_validator

    if _document_validator is None:
        _document_validator = DocumentValidator(
            currency=get_settings().totals.default_currency
        )
    return _document_validator


def get_tax_resolver_service() -> TaxResolverService:
    """Get or create the TaxResolverService."""
    global _tax_resolver_service

    if _tax_resolver_service is None:
        _tax_resolver_service = TaxResolverService()
    return _tax_resolver_service


def get_company_tax_settings() -> CompanyTaxSettings:
    """
    Build the issuing company's tax registration from ``settings.tax``.

    With ``use_default_gst_scheme`` the Australian GST scheme is registered
    and active; otherwise the company has no active scheme and every
    category resolves to "No Tax".

    Raises:
        ConfigurationError: The GST scheme is requested for a company
            registered outside Australia
    """
    global _company_tax_settings

    if _company_tax_settings is None:
        settings = get_settings().tax
        if settings.use_default_gst_scheme:
            scheme = default_gst_scheme()
            if settings.country_code != scheme.country_code:
                raise ConfigurationError(
                    f"The default GST scheme applies to {scheme.country_code}, "
                    f"not {settings.country_code}; set TAX_USE_DEFAULT_GST_SCHEME=false",
                    details={"country_code": settings.country_code},
                )
            _company_tax_settings = CompanyTaxSettings(
                country_code=settings.country_code,
                schemes=[scheme],
                active_scheme_id=scheme.id,
            )
        else:
            _company_tax_settings = CompanyTaxSettings(country_code=settings.country_code)
    return _company_tax_settings


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _totals_engine
    global _document_validator
    global _tax_resolver_service
    global _company_tax_settings

    _totals_engine = None
    _document_validator = None
    _tax_resolver_service = None
    _company_tax_settings = None


__all__ = [
    # Factory functions
    "get_totals_engine",
    "get_document_validator",
    "get_tax_resolver_service",
    "get_company_tax_settings",
    # Reset
    "reset_services",
]
