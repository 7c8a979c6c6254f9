"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "150000"
    - "150000.50"
    - "Rp150000" / "Rp 150.000" (dots as thousands separators)
    - "1,500,000" / "1_500_000"

    Signs are not accepted: amounts are entered as magnitudes and the
    category decides the direction.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency markers
    amount_str = re.sub(r"^(rp\.?|idr|\$)", "", amount_str, flags=re.IGNORECASE).strip()

    # "150.000" and "1.500.000" use dots for thousands
    if re.fullmatch(r"\d{1,3}(\.\d{3})+", amount_str):
        amount_str = amount_str.replace(".", "")

    amount_str = amount_str.replace(",", "").replace("_", "").strip()

    if amount_str.startswith(("-", "+")):
        raise ValueError(f"Amount '{amount_str}' must not carry a sign")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount
