"""ERC-7730 clear signing: descriptor-driven, human-readable transaction previews."""

from .utils.clear_signing_pydantic_classes import (
    Descriptor,
    FieldFormat,
    FormatDefinition,
    FormattedField,
    FormattedTransaction,
    Message,
    NestedDefinition,
)
from .utils.core import (
    DecodedArguments,
    ERC7730Formatter,
    ValueFormatter,
    format_arguments_heuristically,
    resolve_path,
)
from .utils.decoding import CalldataDecoder, DecodedCall
from .utils.exceptions import CalldataDecodingError, ClearSigningError, DescriptorUnavailableError
from .utils.generation import generate_descriptor
from .utils.loading import DescriptorCache
from .utils.preview import TransactionPreviewer
from .utils.validation import ValidationResult, validate_descriptor

__all__ = [
    "CalldataDecoder",
    "CalldataDecodingError",
    "ClearSigningError",
    "DecodedArguments",
    "DecodedCall",
    "Descriptor",
    "DescriptorCache",
    "DescriptorUnavailableError",
    "ERC7730Formatter",
    "FieldFormat",
    "FormatDefinition",
    "FormattedField",
    "FormattedTransaction",
    "Message",
    "NestedDefinition",
    "TransactionPreviewer",
    "ValidationResult",
    "ValueFormatter",
    "format_arguments_heuristically",
    "generate_descriptor",
    "resolve_path",
    "validate_descriptor",
]
