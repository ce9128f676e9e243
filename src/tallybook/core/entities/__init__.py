"""Core domain entities."""

from tallybook.core.entities.document import (
    AdjustmentType,
    DepositRequest,
    DiscountType,
    DocumentDiscount,
    DocumentKind,
    DocumentTotals,
    IssuedDocument,
    LineCalculation,
    LineDiscount,
    LineItem,
    PricingMode,
    TaxGroup,
)
from tallybook.core.entities.tax import (
    EU_COUNTRIES,
    CompanyTaxSettings,
    CustomerTaxProfile,
    CustomerType,
    TaxApplication,
    TaxCategory,
    TaxCode,
    TaxRate,
    TaxScheme,
    TaxTreatment,
    TaxType,
    default_gst_scheme,
)

__all__ = [
    # Document entities
    "LineItem",
    "LineDiscount",
    "LineCalculation",
    "DiscountType",
    "DocumentDiscount",
    "DepositRequest",
    "AdjustmentType",
    "DocumentTotals",
    "TaxGroup",
    "PricingMode",
    "DocumentKind",
    "IssuedDocument",
    # Tax entities
    "TaxTreatment",
    "TaxCode",
    "TaxCategory",
    "TaxType",
    "TaxRate",
    "TaxScheme",
    "CustomerType",
    "CustomerTaxProfile",
    "CompanyTaxSettings",
    "TaxApplication",
    "EU_COUNTRIES",
    "default_gst_scheme",
]
