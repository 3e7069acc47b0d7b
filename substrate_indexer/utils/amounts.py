# substrate_indexer/utils/amounts.py
"""
Utility functions for handling string amounts returned by the node
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union, Optional


def amount_to_int(amount: Union[str, int, None]) -> int:
    """Convert amount to int with robust type handling"""
    if amount is None:
        return 0
    if isinstance(amount, str):
        if amount.strip() == "":
            return 0
        return int(amount, 16) if amount.startswith("0x") else int(amount)
    return int(amount)


def round_fee(fee: Union[str, int, None], decimals: int = 18, precision: int = 2) -> Optional[float]:
    """
    Scale a fee given in the chain's smallest unit down to whole tokens.

    The result is rounded half-up to ``precision`` fractional digits. Empty or
    unparsable fees give None.
    """
    if fee is None or (isinstance(fee, str) and fee.strip() == ""):
        return None
    try:
        value = Decimal(amount_to_int(fee)).scaleb(-decimals)
    except (ValueError, InvalidOperation):
        return None
    quantum = Decimal(1).scaleb(-precision)
    return float(value.quantize(quantum, rounding=ROUND_HALF_UP))
