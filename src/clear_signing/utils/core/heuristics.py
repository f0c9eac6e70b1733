"""Descriptor-free formatting used when no display rule matches a function."""

import logging
import re
from collections.abc import Mapping
from decimal import Decimal, localcontext
from typing import Any, Dict, List, Optional, Sequence

from ..clear_signing_pydantic_classes import FormattedField
from ..constants import (
    MAX_PLAUSIBLE_TIMESTAMP,
    MIN_PLAUSIBLE_TIMESTAMP,
    NOT_AVAILABLE,
    TIME_NAME_HINTS,
)
from .values import ValueFormatter, amount_precision, detect_decimals

logger = logging.getLogger(__name__)

ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")


def camel_case_label(name: str) -> str:
    """Label from a camelCase name, e.g. amountIn -> Amount In."""
    return name[:1].upper() + re.sub(r"([A-Z])", r" \1", name[1:])


def _is_plausible_timestamp(number: float) -> bool:
    return MIN_PLAUSIBLE_TIMESTAMP < number < MAX_PLAUSIBLE_TIMESTAMP


def _has_time_hint(name: Optional[str]) -> bool:
    lowered = (name or "").lower()
    return any(hint in lowered for hint in TIME_NAME_HINTS)


def _heuristic_amount(value: int) -> str:
    with localcontext() as ctx:
        ctx.prec = amount_precision(value)
        amount = Decimal(value).scaleb(-detect_decimals(value))
        if amount == 0:
            return "0"
        if amount < 1:
            return f"{amount:.6f}"
        return ValueFormatter.format_grouped(amount)


def infer_display_value(value: Any, name: Optional[str], values: ValueFormatter) -> str:
    """
    Render a value by its runtime shape alone.

    Integers are ambiguous between token amounts and Unix timestamps; an
    integer in the plausible timestamp range is shown as a date only when
    its parameter name suggests a point in time.
    """
    if value is None:
        return NOT_AVAILABLE

    try:
        if isinstance(value, str) and ADDRESS_PATTERN.match(value):
            return values.format_address(value.lower())

        if isinstance(value, bool):
            return str(value)

        if isinstance(value, int):
            if _is_plausible_timestamp(value) and _has_time_hint(name):
                return values.format_date(value)
            return _heuristic_amount(value)

        if isinstance(value, float) and _is_plausible_timestamp(value):
            return values.format_date(value)
    except Exception as e:
        logger.debug(f"Heuristic formatting failed for {name}: {e}")

    return str(value)


def format_arguments_heuristically(
    args: Sequence[Any],
    function_abi: Optional[Dict[str, Any]] = None,
    values: Optional[ValueFormatter] = None,
) -> List[FormattedField]:
    """
    Build display fields for a call without any descriptor rule.

    Args:
        args: Ordered decoded arguments
        function_abi: ABI entry of the function, used for parameter names
        values: Value formatter (default known addresses and clock when omitted)

    Returns:
        One FormattedField per struct member (single struct argument) or per argument
    """
    values = values or ValueFormatter()
    fields: List[FormattedField] = []

    if len(args) == 1 and isinstance(args[0], Mapping):
        for key, value in args[0].items():
            if str(key).isdigit():
                continue
            fields.append(FormattedField(
                label=camel_case_label(str(key)),
                value=infer_display_value(value, str(key), values),
                raw_value=value,
            ))
        return fields

    inputs = (function_abi or {}).get("inputs") or []

    for index, arg in enumerate(args):
        name = inputs[index].get("name") if index < len(inputs) else None
        label = name or f"Param {index}"
        fields.append(FormattedField(
            label=label[:1].upper() + label[1:],
            value=infer_display_value(arg, name, values),
            raw_value=arg,
        ))

    return fields


class FormatterHeuristicMixin:
    def format_arguments_heuristically(
        self,
        args: Sequence[Any],
        function_abi: Optional[Dict[str, Any]] = None,
    ) -> List[FormattedField]:
        return format_arguments_heuristically(args, function_abi, self.values)
