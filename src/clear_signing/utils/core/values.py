"""Display formatting for decoded values (amounts, addresses, dates)."""

import logging
import math
import time
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, getcontext, localcontext
from typing import Any, Callable, Dict, Optional

from eth_utils import is_address, to_checksum_address

from ..clear_signing_pydantic_classes import FormatDefinition
from ..constants import (
    KNOWN_ADDRESSES,
    LONG_AMOUNT_DECIMALS,
    NOT_AVAILABLE,
    RELATIVE_DATE_WINDOW_MINUTES,
    SHORT_AMOUNT_DECIMALS,
    SHORT_AMOUNT_DIGITS,
)

logger = logging.getLogger(__name__)

AMOUNT = "amount"
ADDRESS = "address"
DATE = "date"


def _parse_integer(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value).strip()
    if text.lower().startswith("0x"):
        return int(text, 16)
    return int(text)


def _round(number: Decimal, places: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + places + 2)
        return number.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _fixed(number: Decimal, places: int) -> str:
    return f"{_round(number, places):f}"


def amount_precision(raw: int) -> int:
    """Context precision that keeps every digit of a 256-bit integer exact."""
    return max(getcontext().prec, len(str(abs(raw))) + 10)


def detect_decimals(raw: int) -> int:
    """Guess token decimals from magnitude: up to 12 digits means a 6-decimal stablecoin."""
    return SHORT_AMOUNT_DECIMALS if len(str(abs(raw))) <= SHORT_AMOUNT_DIGITS else LONG_AMOUNT_DECIMALS


def shorten_address(address: str) -> str:
    return f"{address[:6]}...{address[-4:]}"


class ValueFormatter:
    """
    Converts raw decoded values into display strings.

    Every public method is total: on any failure the value is rendered with
    str() instead of raising.
    """

    def __init__(
        self,
        known_addresses: Optional[Dict[str, str]] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            known_addresses: Checksummed address -> display name (defaults to well-known tokens)
            clock: Returns the current Unix time in seconds; used for relative dates
        """
        self.known_addresses = dict(KNOWN_ADDRESSES if known_addresses is None else known_addresses)
        self.clock = clock

    def format_value(
        self,
        value: Any,
        kind: Optional[str] = None,
        definition: Optional[FormatDefinition] = None,
        decimals: Optional[int] = None,
    ) -> str:
        """
        Format a value as one of the semantic kinds.

        Args:
            value: Raw decoded value
            kind: amount, address, date or raw; anything else renders raw
            definition: Named format definition supplying a prefix for addresses
            decimals: Explicit token decimals for amounts, overriding detection

        Returns:
            Display string ("N/A" for missing values)
        """
        if value is None:
            return NOT_AVAILABLE

        if not kind:
            return str(value)

        try:
            if kind == AMOUNT:
                return self.format_amount(value, decimals)
            if kind == ADDRESS:
                prefix = definition.prefix if definition is not None else None
                return self.format_address(value, prefix)
            if kind == DATE:
                return self.format_date(value)
        except Exception as e:
            logger.debug(f"Falling back to raw rendering for {value!r} as {kind}: {e}")

        return str(value)

    def format_amount(self, value: Any, decimals: Optional[int] = None) -> str:
        try:
            raw = _parse_integer(value)
            if raw < 0:
                raise ValueError("amounts are unsigned")

            if decimals is None:
                decimals = detect_decimals(raw)

            with localcontext() as ctx:
                ctx.prec = amount_precision(raw)
                amount = Decimal(raw).scaleb(-decimals)

                if amount == 0:
                    return "0"
                if amount < Decimal("0.000001"):
                    return f"{amount:.2e}"
                if amount < 1:
                    return _fixed(amount, 6)
                if amount < 1_000:
                    return self.format_grouped(amount)
                # 999999.999 rounds to 1000.00K, so it belongs in the M bucket
                thousands = _round(amount / 1_000, 2)
                if thousands < 1_000:
                    return f"{thousands:f}K"
                return _fixed(amount / 1_000_000, 2) + "M"
        except Exception as e:
            logger.debug(f"Could not format amount {value!r}: {e}")
            return str(value)

    @staticmethod
    def format_grouped(amount: Decimal, max_fraction_digits: int = 2) -> str:
        """Thousands-separated number with at most max_fraction_digits decimals, trailing zeros dropped."""
        rounded = _round(amount, max_fraction_digits)
        text = f"{rounded:,f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text

    def format_address(self, value: Any, prefix: Optional[str] = None) -> str:
        try:
            address = str(value)
            if not is_address(address):
                return address

            checksummed = to_checksum_address(address)
            name = self.known_addresses.get(checksummed)
            return f"{prefix or ''}{name or shorten_address(checksummed)}"
        except Exception as e:
            logger.debug(f"Could not format address {value!r}: {e}")
            return str(value)

    def format_date(self, value: Any) -> str:
        try:
            timestamp = float(value) if isinstance(value, (int, float)) else float(str(value))
            if math.isnan(timestamp):
                return str(value)

            diff_seconds = timestamp - self.clock()
            diff_minutes = math.floor(diff_seconds / 60)

            if diff_seconds > 0 and diff_minutes < RELATIVE_DATE_WINDOW_MINUTES:
                if diff_minutes < 60:
                    return f"in {diff_minutes} minutes"
                if diff_minutes < 24 * 60:
                    return f"in {diff_minutes // 60} hours"
                return f"in {diff_minutes // (24 * 60)} days"

            moment = datetime.fromtimestamp(timestamp)
            return f"{moment:%b} {moment.day}, {moment.year}, {moment:%I:%M %p}"
        except Exception as e:
            logger.debug(f"Could not format date {value!r}: {e}")
            return str(value)
