"""Message, format definition and nested definition lookup in a descriptor."""

import logging
from typing import Optional

from ..clear_signing_pydantic_classes import FormatDefinition, Message, NestedDefinition

logger = logging.getLogger(__name__)


class FormatterDescriptorMixin:
    def find_message(self, function_name: str) -> Optional[Message]:
        """
        Find the display message for a decoded function name.

        Modern descriptors key `messages` by function name. Legacy descriptors
        key `display.formats` by function signature, so those keys are matched
        textually, in document order.

        Args:
            function_name: Decoded function name (e.g. "swapExactTokensForTokens")

        Returns:
            The message, or None when the descriptor has no rule for the function
        """
        if not function_name:
            return None

        message = self.descriptor.messages.get(function_name)
        if message is not None:
            return message

        formats = self.descriptor.display.formats
        exact = formats.get(function_name)
        if isinstance(exact, Message):
            return exact

        for key, entry in formats.items():
            if not isinstance(entry, Message):
                continue
            if key.startswith(function_name) or function_name in key:
                logger.debug(f"Matched legacy format '{key}' for {function_name}")
                return entry

        logger.info(f"No display rule for function {function_name}")
        return None

    def find_format_definition(self, name: str) -> Optional[FormatDefinition]:
        entry = self.descriptor.display.formats.get(name)
        return entry if isinstance(entry, FormatDefinition) else None

    def find_nested_definition(self, name: str) -> Optional[NestedDefinition]:
        return self.descriptor.display.definitions.get(name)
