"""Calldata -> human-readable preview, with heuristic fallback."""

import logging
import time
from typing import Any, Callable, Dict, Optional, Union

from .clear_signing_pydantic_classes import Descriptor, FormattedTransaction
from .core import ERC7730Formatter
from .decoding import CalldataDecoder, DecodedCall

logger = logging.getLogger(__name__)


class TransactionPreviewer:
    """
    Decodes calldata with the descriptor's ABI and formats it for review.

    Functions covered by a display rule use it; any other function gets a
    best-effort heuristic preview with the intent "Execute <name>".
    """

    def __init__(
        self,
        descriptor: Union[Descriptor, Dict[str, Any]],
        formatter: Optional[ERC7730Formatter] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.formatter = formatter or ERC7730Formatter(descriptor, clock=clock)
        self.decoder = CalldataDecoder(self.formatter.descriptor.abi)

    def preview(self, calldata: str) -> FormattedTransaction:
        """
        Decode and format calldata.

        Raises:
            CalldataDecodingError: If the calldata cannot be decoded with the descriptor ABI
        """
        return self.preview_decoded(self.decoder.decode(calldata))

    def preview_decoded(self, call: DecodedCall) -> FormattedTransaction:
        formatted = self.formatter.format_transaction(call.function_name, call.args)
        if formatted is not None:
            return formatted

        logger.info(f"Using heuristic formatting for {call.signature}")
        return FormattedTransaction(
            intent=f"Execute {call.function_name}",
            function_name=call.function_name,
            fields=self.formatter.format_arguments_heuristically(call.args, call.function_abi),
        )
