# salesy/core/csv_parser.py
"""Turn uploaded sales CSV text into SaleRecord objects.

Lines are split on plain commas. Quoted fields are not understood, so a
comma inside a product name shifts every later column of that row.
"""
import re
from typing import List, Optional

from salesy.exceptions import ValidationError
from salesy.models import SaleRecord

REQUIRED_COLUMNS = ('date', 'product_name', 'quantity_sold')
OPTIONAL_COLUMNS = ('brand', 'festival')

_WHITESPACE = re.compile(r'\s+')
_INTEGER = re.compile(r'^-?[0-9]+$')


def normalize_header(header: str) -> str:
    """Trim, lower-case and turn whitespace runs into single underscores.

    Args:
        header: Raw header cell

    Returns:
        Normalized header, e.g. 'Product  Name ' -> 'product_name'
    """
    return _WHITESPACE.sub('_', header.strip().lower())


def find_column(headers: List[str], target: str) -> Optional[int]:
    """Locate a logical column among normalized headers.

    A header matches when it equals the target, or when it contains the
    target with its underscore removed ('productname' for 'product_name',
    'sale_date' for 'date'). The first matching index wins.

    Args:
        headers: Normalized header names
        target: Logical column name

    Returns:
        Index of the matching header, or None
    """
    compact = target.replace('_', '')
    for index, header in enumerate(headers):
        if header == target or compact in header:
            return index
    return None


def _parse_int(value: str) -> Optional[int]:
    # ASCII digits with an optional leading minus only
    if not _INTEGER.match(value):
        return None
    return int(value)


def parse(text: str) -> List[SaleRecord]:
    """Parse sales CSV text.

    Rows are silently dropped when every field is empty, when the date or
    product name is empty, or when the quantity is not an integer.

    Args:
        text: Full CSV content, header line first

    Returns:
        Parsed records in input order

    Raises:
        ValidationError: If a required column cannot be found
    """
    lines = text.strip().split('\n')
    raw_headers = [header.strip() for header in lines[0].split(',')]
    headers = [normalize_header(header) for header in raw_headers]

    columns = {name: find_column(headers, name) for name in REQUIRED_COLUMNS + OPTIONAL_COLUMNS}

    missing = [name for name in REQUIRED_COLUMNS if columns[name] is None]
    if missing:
        raise ValidationError(
            f"CSV must contain Date, Product Name, and Quantity Sold columns. "
            f"Found headers: {', '.join(raw_headers)}",
            code='MISSING_COLUMNS',
            details={'missing': missing, 'headers': raw_headers}
        )

    records = []
    for line in lines[1:]:
        values = [value.strip() for value in line.split(',')]
        if not any(values):
            continue

        def field(name):
            index = columns[name]
            if index is None or index >= len(values):
                return ''
            return values[index]

        sale_date = field('date')
        product_name = field('product_name')
        quantity = _parse_int(field('quantity_sold'))

        if not sale_date or not product_name or quantity is None:
            continue

        records.append(SaleRecord(
            sale_date=sale_date,
            product_name=product_name,
            quantity_sold=quantity,
            brand=field('brand'),
            festival=field('festival') or None
        ))

    return records
