"""Public formatter engine composed from focused mixins."""

from .base import FormatterBase
from .descriptor import FormatterDescriptorMixin
from .heuristics import FormatterHeuristicMixin
from .transactions import FormatterTransactionMixin


class ERC7730Formatter(
    FormatterBase,
    FormatterDescriptorMixin,
    FormatterTransactionMixin,
    FormatterHeuristicMixin,
):
    """ERC-7730 formatter with descriptor-driven and heuristic formatting."""

    pass
