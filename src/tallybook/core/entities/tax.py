"""
Tax domain entities.

A line carries one resolved TaxTreatment snapshot. Legacy GST codes and the
jurisdiction model (schemes, rates, customer profiles) only exist at the
boundary where a treatment is produced.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaxCode(str, Enum):
    """Legacy Australian GST codes."""

    GST = "GST"
    GST_FREE = "GST_FREE"
    NONE = "NONE"


class TaxType(str, Enum):
    """Kind of consumption tax a scheme levies."""

    VAT = "VAT"
    GST = "GST"
    SALES_TAX = "SALES_TAX"
    NONE = "NONE"


class TaxCategory(str, Enum):
    """Tax category of a catalogue item."""

    STANDARD = "STANDARD"
    REDUCED = "REDUCED"
    ZERO = "ZERO"
    EXEMPT = "EXEMPT"
    OUT_OF_SCOPE = "OUT_OF_SCOPE"
    DIGITAL_SERVICE = "DIGITAL_SERVICE"
    PHYSICAL_GOODS = "PHYSICAL_GOODS"
    LABOR_SERVICE = "LABOR_SERVICE"
    SHIPPING = "SHIPPING"

    @property
    def label(self) -> str:
        return TAX_CATEGORY_LABELS[self]

    @property
    def is_taxable(self) -> bool:
        return self not in (TaxCategory.ZERO, TaxCategory.EXEMPT, TaxCategory.OUT_OF_SCOPE)


TAX_CATEGORY_LABELS: dict[TaxCategory, str] = {
    TaxCategory.STANDARD: "Standard Rate",
    TaxCategory.REDUCED: "Reduced Rate",
    TaxCategory.ZERO: "Zero Rated",
    TaxCategory.EXEMPT: "Exempt",
    TaxCategory.OUT_OF_SCOPE: "Out of Scope",
    TaxCategory.DIGITAL_SERVICE: "Digital Service",
    TaxCategory.PHYSICAL_GOODS: "Physical Goods",
    TaxCategory.LABOR_SERVICE: "Labor/Service",
    TaxCategory.SHIPPING: "Shipping",
}

TAX_CODE_LABELS: dict[TaxCode, str] = {
    TaxCode.GST: "GST (10%)",
    TaxCode.GST_FREE: "GST Free",
    TaxCode.NONE: "No Tax",
}

TAX_CODE_RATES: dict[TaxCode, Decimal] = {
    TaxCode.GST: Decimal("10"),
    TaxCode.GST_FREE: Decimal("0"),
    TaxCode.NONE: Decimal("0"),
}

TAX_CODE_CATEGORIES: dict[TaxCode, TaxCategory] = {
    TaxCode.GST: TaxCategory.STANDARD,
    TaxCode.GST_FREE: TaxCategory.ZERO,
    TaxCode.NONE: TaxCategory.OUT_OF_SCOPE,
}

EU_COUNTRIES: frozenset[str] = frozenset(
    {
        "AT", "BE", "BG", "HR", "CY", "CZ", "DK", "EE", "FI", "FR",
        "DE", "GR", "HU", "IE", "IT", "LV", "LT", "LU", "MT", "NL",
        "PL", "PT", "RO", "SK", "SI", "ES", "SE",
    }
)


def to_decimal(v: Any) -> Any:
    """Coerce floats through their repr so 0.1 stays Decimal('0.1')."""
    if isinstance(v, float):
        return Decimal(str(v))
    return v


class TaxTreatment(BaseModel):
    """
    Resolved tax attributes of a line at snapshot time.

    Reverse-charged lines keep their nominal rate so they are reported in
    their own group; the engine applies an effective rate of zero.
    """

    model_config = ConfigDict(frozen=True)

    rate_percent: Decimal = Decimal("0")
    name: str = "No Tax"
    is_reverse_charge: bool = False
    category: TaxCategory = TaxCategory.STANDARD

    @field_validator("rate_percent", mode="before")
    @classmethod
    def coerce_rate(cls, v: Any) -> Any:
        if v is None or v == "":
            return Decimal("0")
        return to_decimal(v)

    @property
    def effective_rate_percent(self) -> Decimal:
        return Decimal("0") if self.is_reverse_charge else self.rate_percent

    @property
    def display_rate(self) -> str:
        """Rate label as printed on a document, e.g. '10%' or 'RC 0%'."""
        if self.is_reverse_charge:
            return "RC 0%"
        return f"{self.rate_percent.normalize():f}%"

    @classmethod
    def from_legacy_code(cls, code: TaxCode | str) -> "TaxTreatment":
        """Translate a legacy GST/GST_FREE/NONE code."""
        code = TaxCode(code)
        return cls(
            rate_percent=TAX_CODE_RATES[code],
            name=TAX_CODE_LABELS[code],
            category=TAX_CODE_CATEGORIES[code],
        )


# --- Jurisdiction model ---


class TaxRate(BaseModel):
    """A named rate within a scheme, valid over a date range."""

    id: str
    name: str
    rate_percent: Decimal
    category: TaxCategory = TaxCategory.STANDARD
    effective_from: date = date(2000, 1, 1)
    effective_to: date | None = None
    is_default: bool = False

    @field_validator("rate_percent", mode="before")
    @classmethod
    def coerce_rate(cls, v: Any) -> Any:
        return to_decimal(v)

    def is_effective_on(self, on_date: date) -> bool:
        if self.effective_from > on_date:
            return False
        if self.effective_to is not None and self.effective_to < on_date:
            return False
        return True


class TaxScheme(BaseModel):
    """A jurisdiction's tax scheme (e.g. Australian GST, EU VAT)."""

    id: str
    name: str
    tax_type: TaxType
    country_code: str
    rates: list[TaxRate] = Field(default_factory=list)
    reverse_charge_supported: bool = False
    export_zero_rated_supported: bool = False
    is_active: bool = True


class CustomerType(str, Enum):
    BUSINESS = "BUSINESS"
    INDIVIDUAL = "INDIVIDUAL"


class CustomerTaxProfile(BaseModel):
    """Tax-relevant facts about the billed customer."""

    customer_type: CustomerType = CustomerType.INDIVIDUAL
    country_code: str
    tax_id: str | None = None
    tax_id_validated: bool = False
    exemption_reason: str | None = None

    @field_validator("country_code", mode="before")
    @classmethod
    def upper_country(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v


class CompanyTaxSettings(BaseModel):
    """The issuing company's tax registration."""

    country_code: str
    schemes: list[TaxScheme] = Field(default_factory=list)
    active_scheme_id: str | None = None

    @property
    def active_scheme(self) -> TaxScheme | None:
        for scheme in self.schemes:
            if scheme.id == self.active_scheme_id and scheme.is_active:
                return scheme
        return None


class TaxApplication(BaseModel):
    """Outcome of resolving a category against company and customer."""

    treatment: TaxTreatment
    explanation: str
    reverse_charge_note: str | None = None


def default_gst_scheme() -> TaxScheme:
    """Australian GST: 10% standard, GST-free zero rate."""
    return TaxScheme(
        id="gst_au_default",
        name="Australian GST",
        tax_type=TaxType.GST,
        country_code="AU",
        reverse_charge_supported=False,
        export_zero_rated_supported=True,
        rates=[
            TaxRate(
                id="gst_standard",
                name="GST",
                rate_percent=Decimal("10"),
                category=TaxCategory.STANDARD,
                effective_from=date(2000, 7, 1),
                is_default=True,
            ),
            TaxRate(
                id="gst_free",
                name="GST Free",
                rate_percent=Decimal("0"),
                category=TaxCategory.ZERO,
                effective_from=date(2000, 7, 1),
            ),
        ],
    )
