"""Starter ERC-7730 descriptor generation from a contract ABI."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .constants import ZERO_ADDRESS
from .core.heuristics import camel_case_label
from .validation import READ_ONLY_MUTABILITIES

logger = logging.getLogger(__name__)

SCHEMA_URL = "https://github.com/LedgerHQ/clear-signing-erc7730-registry/blob/master/specs/erc7730-v1.schema.json"

DEFAULT_FORMATS = {
    "token": {"type": "address"},
    "address": {"type": "address"},
    "amount": {"type": "amount", "denomination": "wei"},
    "date": {"type": "date", "encoding": "timestamp"},
    "raw": {"type": "raw"},
}


def detect_format(abi_type: str, name: Optional[str]) -> str:
    """
    Pick a named format for an ABI input from its type and name.

    Args:
        abi_type: Solidity type (e.g. "address", "uint256")
        name: Parameter name, may be empty

    Returns:
        One of the DEFAULT_FORMATS keys
    """
    lower_name = (name or "").lower()

    if abi_type == "address":
        return "token" if "token" in lower_name else "address"

    if abi_type.startswith(("uint", "int")) and "[" not in abi_type:
        if "amount" in lower_name or "value" in lower_name:
            return "amount"
        if "deadline" in lower_name or "time" in lower_name:
            return "date"

    return "raw"


def _label(name: Optional[str], index: int) -> str:
    return camel_case_label(name) if name else f"Parameter {index}"


def _fields_for_inputs(inputs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    fields = []
    for index, input_def in enumerate(inputs):
        name = input_def.get("name")
        path = name or str(index)

        # Structs are expanded one level into their members
        if input_def.get("type") == "tuple" and input_def.get("components"):
            for component in input_def["components"]:
                comp_name = component.get("name")
                if not comp_name:
                    continue
                fields.append({
                    "path": f"{path}.{comp_name}",
                    "label": camel_case_label(comp_name),
                    "format": detect_format(component.get("type", ""), comp_name),
                })
            continue

        fields.append({
            "path": path,
            "label": _label(name, index),
            "format": detect_format(input_def.get("type", ""), name),
        })
    return fields


def generate_descriptor(
    abi: List[Dict[str, Any]],
    owner: str = "Generated",
    legal_name: str = "Auto-generated descriptor",
    url: str = "",
    chain_id: Optional[str] = None,
    address: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a starter descriptor with one message per state-changing function.

    Args:
        abi: Contract ABI
        owner: metadata.owner
        legal_name: metadata.info.legalName
        url: metadata.info.url
        chain_id: Deployment chain (e.g. "eip155:1"); no deployment is listed when omitted
        address: Deployment address (zero address when omitted)

    Returns:
        Descriptor JSON as a dictionary
    """
    messages = {}
    for item in abi:
        if item.get("type") != "function" or item.get("stateMutability") in READ_ONLY_MUTABILITIES:
            continue
        messages[item["name"]] = {
            "intent": f"Execute {item['name']}",
            "fields": _fields_for_inputs(item.get("inputs", [])),
        }

    logger.info(f"Generated display messages for {len(messages)} functions")

    contract: Dict[str, Any] = {"abi": abi, "deployments": []}
    if chain_id:
        contract["deployments"].append({"chainId": chain_id, "address": address or ZERO_ADDRESS})

    return {
        "$schema": SCHEMA_URL,
        "context": {"contract": contract},
        "metadata": {
            "owner": owner,
            "info": {
                "url": url,
                "legalName": legal_name,
                "lastUpdate": datetime.now(timezone.utc).date().isoformat(),
            },
        },
        "display": {"formats": {name: dict(definition) for name, definition in DEFAULT_FORMATS.items()}},
        "messages": messages,
    }
