"""
Formatting, filtering and sorting helpers for candidate rows
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from config.constants import SortOption
from core.catalog import normalize_extension

Row = Dict[str, Any]


def to_decimal(value: Any) -> Optional[Decimal]:
    """Parse a stored price, returning None when it is missing or malformed"""
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def format_price(amount: Union[Decimal, float, str, None], currency: str = 'USD') -> str:
    """Format a price for display

    Args:
        amount: Amount
        currency: Currency code

    Returns:
        Formatted price string, or "N/A" when the amount is unknown
    """
    value = to_decimal(amount)
    if value is None:
        return 'N/A'

    if currency == 'USD':
        return f'${value:,.2f}'
    return f'{currency} {value:,.2f}'


def build_description(keywords: Sequence[str]) -> str:
    return f"Perfect for {' '.join(keywords)} related businesses"


def _price_key(row: Row) -> Decimal:
    price = to_decimal(row.get('price'))
    return price if price is not None else Decimal('Infinity')


def sort_candidates(rows: Iterable[Row], sort_by: Optional[Union[SortOption, str]] = None) -> List[Row]:
    """Return candidates in presentation order

    Pure and stable: the input is not modified and equal keys keep their
    relative order. "relevance" (or no sort) keeps generation order.

    Args:
        rows: Candidate rows
        sort_by: One of the SortOption values

    Returns:
        New sorted list
    """
    rows = list(rows)
    if not sort_by:
        return rows

    option = SortOption(sort_by)

    if option == SortOption.PRICE_ASC:
        return sorted(rows, key=_price_key)
    if option == SortOption.PRICE_DESC:
        # reverse=True keeps equal elements in their original order
        return sorted(rows, key=_price_key, reverse=True)
    if option == SortOption.LENGTH:
        return sorted(rows, key=lambda row: row.get('length') or len(row.get('name', '')))
    if option == SortOption.ALPHABETICAL:
        return sorted(rows, key=lambda row: row.get('name', '').lower())

    return rows


def _matches_text(row: Row, term: str) -> bool:
    if term in row.get('name', '').lower():
        return True
    if any(term in str(tag).lower() for tag in row.get('tags') or []):
        return True
    return term in (row.get('description') or '').lower()


def filter_candidates(
    rows: Iterable[Row],
    query: Optional[str] = None,
    extensions: Optional[Sequence[str]] = None,
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
    available_only: bool = False,
    max_length: Optional[int] = None
) -> List[Row]:
    """Filter stored candidate rows

    Args:
        rows: Candidate rows
        query: Substring matched against name, tags and description
        extensions: Allowed extensions
        min_price: Inclusive lower price bound
        max_price: Inclusive upper price bound
        available_only: Drop rows not marked available
        max_length: Maximum full name length

    Returns:
        Matching rows in input order
    """
    allowed = {normalize_extension(ext) for ext in extensions} if extensions else None
    term = query.strip().lower() if query else ''
    results = []

    for row in rows:
        if available_only and not row.get('is_available'):
            continue
        if allowed is not None and row.get('extension') not in allowed:
            continue

        price = to_decimal(row.get('price'))
        if min_price is not None and (price is None or price < min_price):
            continue
        if max_price is not None and (price is None or price > max_price):
            continue

        if max_length is not None and (row.get('length') or 0) > max_length:
            continue
        if term and not _matches_text(row, term):
            continue

        results.append(row)

    return results
