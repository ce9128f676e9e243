"""
Document totals engine.

Layer-pure: depends only on core entities and the money helpers. The engine
performs no validation and never raises on out-of-range business values;
it clamps where a safe default exists (net never below zero) and otherwise
returns a mathematically consistent result, possibly negative, for the
caller to interpret.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from functools import lru_cache

from tallybook.config import get_logger
from tallybook.core.entities.document import (
    AdjustmentType,
    DepositRequest,
    DocumentDiscount,
    DocumentTotals,
    LineCalculation,
    LineItem,
    PricingMode,
    TaxGroup,
)
from tallybook.core.money import dollars_to_cents, round_half_up
from tallybook.core.services.line_calculator import calculate_line

logger = get_logger(__name__)

_HUNDRED = Decimal("100")


def calculate_document_discount(
    net_subtotal_cents: int, discount: DocumentDiscount | None
) -> int:
    """
    Document discount in cents.

    Applied to the subtotal after line discounts. Tax is not recomputed
    afterwards: it stays on the pre-discount net.
    """
    if discount is None:
        return 0
    if discount.type is AdjustmentType.PERCENT:
        return round_half_up(net_subtotal_cents * discount.value / _HUNDRED)
    return dollars_to_cents(discount.value)


def calculate_deposit_amount(total_cents: int, deposit: DepositRequest | None) -> int | None:
    """Deposit claim in cents, or None when no deposit was requested."""
    if deposit is None:
        return None
    if deposit.type is AdjustmentType.PERCENT:
        return round_half_up(total_cents * deposit.value / _HUNDRED)
    return dollars_to_cents(deposit.value)


def group_taxes(
    lines: Sequence[LineItem], calculations: Sequence[LineCalculation]
) -> list[TaxGroup]:
    """Bucket lines by (tax name, nominal rate, reverse charge), first-seen order."""
    first_seen: dict[tuple[str, Decimal, bool], LineItem] = {}
    sums: dict[tuple[str, Decimal, bool], list[int]] = {}
    for line, calc in zip(lines, calculations):
        key = (line.tax.name, line.tax.rate_percent, line.tax.is_reverse_charge)
        if key not in sums:
            first_seen[key] = line
            sums[key] = [0, 0]
        sums[key][0] += calc.net_cents
        sums[key][1] += calc.tax_cents

    return [
        TaxGroup(
            name=name,
            rate_percent=rate,
            category=first_seen[(name, rate, reverse_charge)].tax.category,
            taxable_cents=taxable,
            tax_cents=tax,
            is_reverse_charge=reverse_charge,
        )
        for (name, rate, reverse_charge), (taxable, tax) in sums.items()
    ]


def calculate_document_totals(
    lines: Iterable[LineItem],
    document_discount: DocumentDiscount | None = None,
    deposit_request: DepositRequest | None = None,
    paid_cents: int = 0,
    pricing_mode: PricingMode = PricingMode.EXCLUSIVE,
) -> DocumentTotals:
    """
    Aggregate line calculations into document totals.

    Args:
        lines: Ordered line items
        document_discount: Optional discount on the post-line-discount subtotal
        deposit_request: Optional deposit claim against the total
        paid_cents: General payments already received
        pricing_mode: Whether unit prices exclude or include tax

    Returns:
        DocumentTotals including tax breakdown, deposit and balance
    """
    lines = list(lines)
    calculations = [calculate_line(line, pricing_mode) for line in lines]

    subtotal_cents = sum(c.base_cents for c in calculations)
    line_discount_cents = sum(c.discount_cents for c in calculations)
    tax_cents = sum(c.tax_cents for c in calculations)

    breakdown = group_taxes(lines, calculations)
    distinct_rates = {g.rate_percent for g in breakdown}

    document_discount_cents = calculate_document_discount(
        subtotal_cents - line_discount_cents, document_discount
    )

    total_cents = subtotal_cents - line_discount_cents - document_discount_cents
    if pricing_mode is PricingMode.EXCLUSIVE:
        total_cents += tax_cents

    deposit_amount_cents = calculate_deposit_amount(total_cents, deposit_request)
    deposit_paid_cents = deposit_request.amount_paid_cents if deposit_request else 0
    balance_cents = total_cents - paid_cents - deposit_paid_cents

    totals = DocumentTotals(
        subtotal_cents=subtotal_cents,
        line_discount_cents=line_discount_cents,
        document_discount_cents=document_discount_cents,
        tax_cents=tax_cents,
        total_cents=total_cents,
        tax_breakdown=tuple(breakdown),
        has_mixed_rates=len(distinct_rates) > 1,
        has_reverse_charge=any(g.is_reverse_charge for g in breakdown),
        pricing_mode=pricing_mode,
        deposit_amount_cents=deposit_amount_cents,
        paid_cents=paid_cents,
        deposit_paid_cents=deposit_paid_cents,
        balance_cents=balance_cents,
    )

    logger.debug(
        "document_totals_calculated",
        lines=len(lines),
        tax_groups=len(breakdown),
        total_cents=total_cents,
        balance_cents=balance_cents,
    )

    return totals


class TotalsEngine:
    """
    Stateless totals service.

    Wraps the module functions with a default pricing mode and an optional
    memo cache. Cache keys are the JSON dumps of the inputs, so two inputs
    that compare equal but serialize differently (``Decimal("10")`` and
    ``Decimal("10.0")``) never share an entry.
    """

    def __init__(
        self,
        pricing_mode: PricingMode = PricingMode.EXCLUSIVE,
        cache_size: int = 0,
    ):
        self._pricing_mode = pricing_mode
        self._cache_size = cache_size
        self._cached = (
            lru_cache(maxsize=cache_size)(self._compute_from_json)
            if cache_size > 0
            else None
        )

    @property
    def pricing_mode(self) -> PricingMode:
        return self._pricing_mode

    def calculate_line(
        self, line: LineItem, pricing_mode: PricingMode | None = None
    ) -> LineCalculation:
        return calculate_line(line, pricing_mode or self._pricing_mode)

    def calculate(
        self,
        lines: Iterable[LineItem],
        document_discount: DocumentDiscount | None = None,
        deposit_request: DepositRequest | None = None,
        paid_cents: int = 0,
        pricing_mode: PricingMode | None = None,
    ) -> DocumentTotals:
        """Compute document totals (see ``calculate_document_totals``)."""
        mode = pricing_mode or self._pricing_mode
        if self._cached is None:
            return calculate_document_totals(
                tuple(lines),
                document_discount=document_discount,
                deposit_request=deposit_request,
                paid_cents=paid_cents,
                pricing_mode=mode,
            )

        return self._cached(
            tuple(line.model_dump_json() for line in lines),
            document_discount.model_dump_json() if document_discount else None,
            deposit_request.model_dump_json() if deposit_request else None,
            paid_cents,
            mode.value,
        )

    def cache_info(self):
        """lru_cache statistics, or None when caching is disabled."""
        if self._cached is None:
            return None
        return self._cached.cache_info()

    @staticmethod
    def _compute_from_json(
        lines_json: tuple[str, ...],
        document_discount_json: str | None,
        deposit_request_json: str | None,
        paid_cents: int,
        pricing_mode: str,
    ) -> DocumentTotals:
        return calculate_document_totals(
            tuple(LineItem.model_validate_json(line) for line in lines_json),
            document_discount=(
                DocumentDiscount.model_validate_json(document_discount_json)
                if document_discount_json
                else None
            ),
            deposit_request=(
                DepositRequest.model_validate_json(deposit_request_json)
                if deposit_request_json
                else None
            ),
            paid_cents=paid_cents,
            pricing_mode=PricingMode(pricing_mode),
        )
