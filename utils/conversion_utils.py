"""
Amount conversion utilities for token amounts.

All conversions work on decimal strings and Python integers so that no
floating point value ever takes part in the arithmetic.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Union

DEFAULT_DECIMALS = 18

# Token amounts are uint256 on chain
MAX_UINT256 = 2 ** 256 - 1
_MAX_UINT256_DIGITS = len(str(MAX_UINT256))

_DECIMAL_PATTERN = re.compile(r'([0-9]*)(?:\.([0-9]*))?')
_INTEGER_PATTERN = re.compile(r'[0-9]+')


class AmountConversionError(ValueError):
    """Raised when an amount cannot be converted exactly."""

    def __init__(
        self,
        message: str,
        value=None,
        address: Optional[str] = None,
        index: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.value = value
        self.address = address
        self.index = index

    def with_record(self, address, index: Optional[int] = None) -> 'AmountConversionError':
        """Return a copy of this error tagged with the offending record."""
        return type(self)(self.message, value=self.value, address=address, index=index)

    def __str__(self):
        context = []
        if self.index is not None:
            context.append(f"record #{self.index}")
        if self.address is not None:
            context.append(f"address {self.address!r}")
        if self.value is not None:
            context.append(f"value {self.value!r}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"


class InvalidFormat(AmountConversionError):
    """Amount is not a well-formed non-negative decimal numeral."""


class PrecisionOverflow(AmountConversionError):
    """Amount has more fractional digits than the token supports."""


@dataclass(frozen=True)
class ConversionContext:
    """Token settings shared by every conversion in a batch."""

    decimals: int = DEFAULT_DECIMALS

    def __post_init__(self):
        _check_decimals(self.decimals)

    def to_smallest_unit(self, amount) -> str:
        return convert_amount_to_smallest_unit(amount, self.decimals)

    def from_smallest_unit(self, amount_smallest) -> str:
        return convert_amount_from_smallest_unit(amount_smallest, self.decimals)


def _check_decimals(decimals) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise ValueError(f"decimals must be a non-negative integer, got {decimals!r}")


def _amount_to_text(amount) -> str:
    """Render a str/int/float/Decimal amount as plain positional decimal text."""
    if isinstance(amount, str):
        return amount
    if isinstance(amount, bool):
        raise InvalidFormat("Amount must be a decimal numeral, not a boolean", value=amount)
    if isinstance(amount, int):
        return str(amount)
    if isinstance(amount, float):
        # repr() is the shortest string that reads back to the same float
        amount = Decimal(repr(amount))
    if isinstance(amount, Decimal):
        if not amount.is_finite():
            raise InvalidFormat("Amount must be a finite number", value=amount)
        return format(amount, 'f')
    raise InvalidFormat(
        f"Unsupported amount type {type(amount).__name__}",
        value=amount
    )


def convert_amount_to_smallest_unit(amount: Union[str, int, float, Decimal], decimals: int) -> str:
    """
    Convert human-readable amount to token's smallest unit.

    Args:
        amount: Amount in human-readable units, e.g. "100.0" or 250
        decimals: Number of decimals for the token

    Returns:
        Amount in smallest unit (wei/smallest denomination) as a digit string

    Raises:
        InvalidFormat: amount is not a non-negative decimal numeral, or does not fit in uint256
        PrecisionOverflow: amount has more fractional digits than decimals
    """
    _check_decimals(decimals)
    text = _amount_to_text(amount)

    match = _DECIMAL_PATTERN.fullmatch(text)
    if match is None:
        raise InvalidFormat("Amount is not a non-negative decimal numeral", value=amount)
    whole, fraction = match.group(1), match.group(2) or ''
    if not whole and not fraction:
        raise InvalidFormat("Amount has no digits", value=amount)

    # Trailing zeros do not change the value
    fraction = fraction.rstrip('0')
    if len(fraction) > decimals:
        raise PrecisionOverflow(
            f"Amount has {len(fraction)} fractional digits, token supports {decimals}",
            value=amount
        )

    digits = (whole + fraction.ljust(decimals, '0')).lstrip('0') or '0'
    _check_uint256(digits, amount)
    return digits


def _check_uint256(digits: str, amount) -> None:
    # Length first, so oversized numerals never reach int()
    if len(digits) > _MAX_UINT256_DIGITS or int(digits) > MAX_UINT256:
        raise InvalidFormat("Amount does not fit in uint256", value=amount)


def _smallest_unit_to_text(amount_smallest) -> str:
    if isinstance(amount_smallest, bool):
        raise InvalidFormat("Smallest-unit amount must be an integer", value=amount_smallest)
    if isinstance(amount_smallest, int):
        if amount_smallest < 0:
            raise InvalidFormat("Smallest-unit amount must not be negative", value=amount_smallest)
        return str(amount_smallest)
    if isinstance(amount_smallest, str) and _INTEGER_PATTERN.fullmatch(amount_smallest):
        return amount_smallest.lstrip('0') or '0'
    raise InvalidFormat("Smallest-unit amount must be a digit string", value=amount_smallest)


def convert_amount_from_smallest_unit(amount_smallest: Union[str, int], decimals: int) -> str:
    """
    Convert amount from token's smallest unit to human-readable format.

    Args:
        amount_smallest: Amount in smallest unit (int or digit string)
        decimals: Number of decimals for the token

    Returns:
        Amount in human-readable units, e.g. "100.000001"
    """
    _check_decimals(decimals)
    digits = _smallest_unit_to_text(amount_smallest)
    if decimals == 0:
        return digits

    digits = digits.rjust(decimals + 1, '0')
    whole = digits[:-decimals]
    fraction = digits[-decimals:].rstrip('0') or '0'
    return f"{whole}.{fraction}"


def parse_smallest_unit(amount_smallest: Union[str, int]) -> int:
    """Validate a uint256 smallest-unit amount and return it as an int."""
    if isinstance(amount_smallest, int) and not isinstance(amount_smallest, bool) and amount_smallest > MAX_UINT256:
        raise InvalidFormat("Amount does not fit in uint256", value=amount_smallest)
    digits = _smallest_unit_to_text(amount_smallest)
    _check_uint256(digits, amount_smallest)
    return int(digits)


def sum_smallest_units(amounts: Iterable[Union[str, int]]) -> str:
    """
    Add up smallest-unit amounts with integer arithmetic.

    Args:
        amounts: Smallest-unit amounts (ints or digit strings)

    Returns:
        Total as a digit string ("0" for no amounts)
    """
    total = 0
    for amount in amounts:
        total += parse_smallest_unit(amount)
    return str(total)
