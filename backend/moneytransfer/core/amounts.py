from __future__ import annotations

import re

from moneytransfer.core.errors import AmountParseError

# Largest amount a signed 64-bit BIGINT column can hold.
MAX_AMOUNT_CENTS = 2**63 - 1

_INTEGER_PART = re.compile(r"[+-]?[0-9]*")
_FRACTION_PART = re.compile(r"[0-9]{1,2}")
# Digits a signed 64-bit amount can have before the cents are appended.
_MAX_INTEGER_DIGITS = len(str(MAX_AMOUNT_CENTS // 100))


def parse_amount(amount: str) -> int:
    """Convert a decimal string such as "100.5" into minor units (10050).

    At most one "." separator and at most two fractional digits are allowed.
    """

    if not amount:
        raise AmountParseError("amount cannot be empty", amount)

    parts = amount.split(".")
    if len(parts) > 2:
        raise AmountParseError("invalid amount format", amount)

    int_part = parts[0]
    dec_part = parts[1] if len(parts) == 2 else "00"
    if len(dec_part) not in (1, 2):
        raise AmountParseError("invalid decimal places", amount)
    if not _INTEGER_PART.fullmatch(int_part) or not _FRACTION_PART.fullmatch(dec_part):
        raise AmountParseError("error parsing amount", amount)
    sign = int_part[:1] if int_part[:1] in "+-" else ""
    digits = int_part[len(sign):].lstrip("0")
    if len(digits) > _MAX_INTEGER_DIGITS:
        raise AmountParseError("amount out of range", amount)

    cents = int(sign + digits + dec_part.ljust(2, "0"))
    if cents < 0:
        raise AmountParseError("amount cannot be negative", amount)
    if cents > MAX_AMOUNT_CENTS:
        raise AmountParseError("amount out of range", amount)
    return cents


def format_amount(cents: int) -> str:
    if cents < 0:
        raise ValueError("cents must be non-negative")
    units, rest = divmod(cents, 100)
    return f"{units}.{rest:02d}"
