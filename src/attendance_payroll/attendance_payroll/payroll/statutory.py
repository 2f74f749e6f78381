"""Statutory contribution and income-tax tables.

Percentages are of the monthly salary. Amounts are whole currency units.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContributionRate:
    name: str
    employee_percent: Decimal
    employer_percent: Decimal


@dataclass(frozen=True)
class TaxBracket:
    upper_bound: Optional[Decimal]
    rate: Decimal


DEFAULT_CONTRIBUTIONS: Sequence[ContributionRate] = (
    ContributionRate("health", Decimal("1"), Decimal("4")),
    ContributionRate("old_age", Decimal("2"), Decimal("3.7")),
    ContributionRate("pension", Decimal("1"), Decimal("2")),
)

CONTRIBUTION_SCHEMES: Mapping[str, Sequence[ContributionRate]] = {
    "default": DEFAULT_CONTRIBUTIONS,
}

# Annual non-taxable income by marital/dependent status.
NON_TAXABLE_INCOME: Mapping[str, Decimal] = {
    "TK/0": Decimal(54_000_000),
    "TK/1": Decimal(58_500_000),
    "TK/2": Decimal(63_000_000),
    "TK/3": Decimal(67_500_000),
    "K/0": Decimal(58_500_000),
    "K/1": Decimal(63_000_000),
    "K/2": Decimal(67_500_000),
    "K/3": Decimal(72_000_000),
}
DEFAULT_TAX_STATUS = "TK/0"

PROGRESSIVE_BRACKETS: Sequence[TaxBracket] = (
    TaxBracket(Decimal(60_000_000), Decimal("0.05")),
    TaxBracket(Decimal(250_000_000), Decimal("0.15")),
    TaxBracket(Decimal(500_000_000), Decimal("0.25")),
    TaxBracket(Decimal(5_000_000_000), Decimal("0.30")),
    TaxBracket(None, Decimal("0.35")),
)

TAX_TABLES: Mapping[str, Sequence[TaxBracket]] = {
    "progressive": PROGRESSIVE_BRACKETS,
}


def to_whole(value: Decimal) -> int:
    """Round half-up to a whole currency unit."""
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def contribution_rates(scheme: str) -> Sequence[ContributionRate]:
    rates = CONTRIBUTION_SCHEMES.get(scheme)
    if rates is None:
        logger.warning("Unknown contribution scheme %r, using default rates", scheme)
        return DEFAULT_CONTRIBUTIONS
    return rates


def non_taxable_income(tax_status: str) -> Decimal:
    status = (tax_status or "").strip().upper()
    if status not in NON_TAXABLE_INCOME:
        logger.warning("Unknown tax status %r, using %s", tax_status, DEFAULT_TAX_STATUS)
        status = DEFAULT_TAX_STATUS
    return NON_TAXABLE_INCOME[status]


def progressive_tax(taxable: Decimal, brackets: Sequence[TaxBracket]) -> Decimal:
    """Tax ``taxable`` through ascending brackets (each rate applies to its slice)."""
    tax = Decimal(0)
    lower = Decimal(0)
    for bracket in brackets:
        if taxable <= lower:
            break
        upper = taxable if bracket.upper_bound is None else min(taxable, bracket.upper_bound)
        tax += (upper - lower) * bracket.rate
        if bracket.upper_bound is None:
            break
        lower = bracket.upper_bound
    return tax


def monthly_income_tax(monthly_salary: int, tax_status: str, table: str = "progressive") -> int:
    """Annualize, subtract the non-taxable threshold, tax, and divide by 12."""
    brackets = TAX_TABLES.get(table)
    if brackets is None:
        logger.warning("Unknown tax table %r, using progressive", table)
        brackets = PROGRESSIVE_BRACKETS

    annual = Decimal(int(monthly_salary)) * 12
    taxable = max(Decimal(0), annual - non_taxable_income(tax_status))
    return to_whole(progressive_tax(taxable, brackets) / 12)
