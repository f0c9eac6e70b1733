"""Base formatter state shared by the formatting mixins."""

import time
from typing import Any, Callable, Dict, Optional, Union

from ..clear_signing_pydantic_classes import Descriptor
from .values import ValueFormatter


class FormatterBase:
    """Holds the descriptor and the value formatter for one formatting session."""

    def __init__(
        self,
        descriptor: Union[Descriptor, Dict[str, Any]],
        value_formatter: Optional[ValueFormatter] = None,
        known_addresses: Optional[Dict[str, str]] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the formatter.

        Args:
            descriptor: Parsed ERC-7730 descriptor, or its raw JSON dictionary
            value_formatter: Value formatter to use; built from known_addresses and clock when omitted
            known_addresses: Checksummed address -> display name overrides
            clock: Current Unix time provider used for relative dates
        """
        if not isinstance(descriptor, Descriptor):
            descriptor = Descriptor.model_validate(descriptor)
        self.descriptor = descriptor
        self.values = value_formatter or ValueFormatter(known_addresses, clock)
