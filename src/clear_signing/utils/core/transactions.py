"""Descriptor-driven formatting of a decoded function call."""

import logging
from typing import Any, List, Optional, Sequence

from ..clear_signing_pydantic_classes import (
    FieldFormat,
    FormatParams,
    FormattedField,
    FormattedTransaction,
)
from ..constants import ADDRESS_FORMATS, AMOUNT_FORMATS, DATE_FORMATS, NOT_AVAILABLE
from .paths import resolve_path
from .values import ADDRESS, AMOUNT, DATE

logger = logging.getLogger(__name__)


class FormatterTransactionMixin:
    def format_transaction(self, function_name: str, decoded_args: Sequence[Any]) -> Optional[FormattedTransaction]:
        """
        Format a decoded call using the descriptor's display rules.

        Args:
            function_name: Decoded function name
            decoded_args: Ordered call arguments (structs as dicts, arrays as lists)

        Returns:
            FormattedTransaction, or None when the descriptor has no rule for the function
        """
        message = self.find_message(function_name)
        if message is None:
            return None

        fields: List[FormattedField] = []

        for field_def in message.fields:
            value = resolve_path(decoded_args, field_def.path)

            if field_def.nested:
                nested = self.find_nested_definition(field_def.nested)
                if nested is not None:
                    # Sub-fields are resolved relative to the parent value and replace it
                    for sub_field in nested.fields:
                        fields.append(self._format_field(sub_field, resolve_path(value, sub_field.path)))
                    continue
                logger.warning(
                    f"Field '{field_def.label}' references unknown definition '{field_def.nested}'"
                )

            fields.append(self._format_field(field_def, value))

        logger.debug(f"Formatted {function_name} into {len(fields)} fields")
        return FormattedTransaction(
            intent=message.intent,
            function_name=function_name,
            fields=fields,
        )

    def _format_field(self, field_def: FieldFormat, value: Any) -> FormattedField:
        return FormattedField(
            label=field_def.label,
            value=self.format_field_value(value, field_def.format, field_def.params),
            raw_value=value,
            format=field_def.format,
        )

    def format_field_value(self, value: Any, format_name: Optional[str], params: Optional[FormatParams] = None) -> str:
        """
        Render one resolved value according to a field's format string.

        A named format definition from display.formats wins; otherwise the
        built-in format names are recognized.
        """
        if value is None:
            return NOT_AVAILABLE
        if not format_name:
            return str(value)

        decimals = params.decimals if params is not None else None

        definition = self.find_format_definition(format_name)
        if definition is not None and definition.type in (AMOUNT, ADDRESS, DATE):
            return self.values.format_value(value, definition.type, definition, decimals)

        if format_name in AMOUNT_FORMATS:
            return self.values.format_value(value, AMOUNT, decimals=decimals)
        if format_name in ADDRESS_FORMATS:
            return self.values.format_value(value, ADDRESS)
        if format_name in DATE_FORMATS:
            return self.values.format_value(value, DATE)
        return str(value)
