# flake8: noqa
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Discriminator
from pydantic import Field
from pydantic import Tag


class FormatParams(BaseModel):
    model_config = ConfigDict(extra="allow")

    # tokenAmount params
    tokenPath: Optional[str] = None

    # addressName params
    types: Optional[List[str]] = None
    sources: Optional[List[str]] = None

    # amount / unit params
    decimals: Optional[int] = None
    base: Optional[str] = None

    # date params
    encoding: Optional[str] = None


class FieldFormat(BaseModel):
    model_config = ConfigDict(extra="allow")

    path: str = Field(..., description="Dot-separated path to the value in the decoded arguments.")
    label: str = Field(
        ...,
        title="Field Label",
        description="The label displayed in front of the formatted value.",
    )
    format: Optional[str] = Field(
        default=None,
        title="Format Type",
        description="A named format definition or one of the built-in format names (amount, address, date...).",
    )
    nested: Optional[str] = Field(
        default=None,
        description="Name of a display definition whose fields are resolved against this field's value.",
    )
    params: Optional[FormatParams] = Field(
        default=None,
        title="Format Parameters",
        description="Format-specific parameters (tokenPath, decimals, etc.)",
    )


class Message(BaseModel):
    model_config = ConfigDict(extra="allow")

    intent: str = Field(
        description="The intent of the function, e.g. 'Swap tokens'."
    )
    fields: List[FieldFormat] = Field(
        default_factory=list,
        description="Ordered field formats; order is the display order.",
    )


class FormatDefinition(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str = Field(description="One of amount, address, date or raw. Unknown types render raw.")
    denomination: Optional[str] = None
    prefix: Optional[str] = None
    encoding: Optional[str] = None


class NestedDefinition(BaseModel):
    model_config = ConfigDict(extra="allow")

    fields: List[FieldFormat] = Field(default_factory=list)


def _format_entry_tag(entry: Any) -> Optional[str]:
    """Tell legacy function messages apart from named format definitions."""
    if isinstance(entry, Message):
        return "message"
    if isinstance(entry, FormatDefinition):
        return "definition"
    if isinstance(entry, dict):
        if "fields" in entry:
            return "message"
        if "type" in entry:
            return "definition"
    return None


FormatEntry = Annotated[
    Union[
        Annotated[Message, Tag("message")],
        Annotated[FormatDefinition, Tag("definition")],
    ],
    Discriminator(_format_entry_tag),
]


class Display(BaseModel):
    model_config = ConfigDict(extra="allow")

    formats: Dict[str, FormatEntry] = Field(default_factory=dict)
    definitions: Dict[str, NestedDefinition] = Field(default_factory=dict)


class Deployment(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    chain_id: Union[int, str] = Field(alias="chainId")
    address: str


class ContractContext(BaseModel):
    model_config = ConfigDict(extra="allow")

    abi: List[Dict[str, Any]] = Field(default_factory=list)
    deployments: List[Deployment] = Field(default_factory=list)


class Context(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="$id")
    contract: Optional[ContractContext] = None


class Descriptor(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    schema_url: Optional[str] = Field(default=None, alias="$schema")
    context: Optional[Context] = None
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Free-form provenance (owner, info, constants).",
    )
    messages: Dict[str, Message] = Field(default_factory=dict)
    display: Display = Field(default_factory=Display)

    @property
    def abi(self) -> List[Dict[str, Any]]:
        if self.context is None or self.context.contract is None:
            return []
        return self.context.contract.abi


class FormattedField(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: str
    value: str = Field(description="Final display string.")
    raw_value: Any = Field(
        default=None,
        alias="rawValue",
        description="The unconverted source value.",
    )
    format: Optional[str] = None


class FormattedTransaction(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    intent: str
    function_name: str = Field(alias="functionName")
    fields: List[FormattedField] = Field(default_factory=list)
