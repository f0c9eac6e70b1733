"""Structural validation of ERC-7730 descriptor documents."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .constants import ZERO_ADDRESS

logger = logging.getLogger(__name__)

READ_ONLY_MUTABILITIES = ("view", "pure")


@dataclass
class ValidationResult:
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.valid = False
        self.errors.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)


def _display_rule_keys(data: Dict[str, Any]) -> List[str]:
    keys = list((data.get('messages') or {}).keys())
    formats = (data.get('display') or {}).get('formats') or {}
    keys.extend(key for key, entry in formats.items() if isinstance(entry, dict) and 'fields' in entry)
    return keys


def _check_contract(data: Dict[str, Any], result: ValidationResult) -> None:
    context = data.get('context')
    if not isinstance(context, dict):
        result.error("Missing 'context' field")
        return

    contract = context.get('contract')
    if not isinstance(contract, dict):
        result.error("Missing 'context.contract' field")
        return

    if not isinstance(contract.get('abi'), list):
        result.error("Missing or invalid 'context.contract.abi' field")

    deployments = contract.get('deployments')
    if not isinstance(deployments, list):
        result.error("Missing or invalid 'context.contract.deployments' field")
        return

    for idx, deployment in enumerate(deployments):
        if not isinstance(deployment, dict):
            result.error(f"Deployment {idx}: not an object")
            continue
        if not deployment.get('chainId'):
            result.error(f"Deployment {idx}: missing 'chainId'")
        address = deployment.get('address')
        if not address:
            result.error(f"Deployment {idx}: missing 'address'")
        elif str(address).lower() == ZERO_ADDRESS:
            result.warn(f"Deployment {idx}: using zero address (contract not deployed?)")


def _check_display(data: Dict[str, Any], result: ValidationResult) -> None:
    display = data.get('display')
    if display is not None and not isinstance(display, dict):
        result.error("Invalid 'display' field")
        return
    display = display or {}

    formats = display.get('formats')
    if formats is not None and not isinstance(formats, dict):
        result.error("Invalid 'display.formats' field")
    if not data.get('messages') and not formats:
        result.error("Missing 'messages' or 'display.formats' field")

    definitions = display.get('definitions') or {}
    rules = dict(data.get('messages') or {})
    rules.update((formats or {}) if isinstance(formats, dict) else {})

    for rule_name, rule in rules.items():
        if not isinstance(rule, dict):
            result.error(f"Display rule '{rule_name}' is not an object")
            continue
        if 'fields' not in rule:
            if 'type' not in rule:
                result.error(f"Display entry '{rule_name}' has neither 'fields' nor 'type'")
            continue
        if not rule.get('intent'):
            result.warn(f"Display rule '{rule_name}' has no intent")
        for idx, field_def in enumerate(rule.get('fields') or []):
            if not isinstance(field_def, dict):
                result.error(f"Display rule '{rule_name}' field {idx}: not an object")
                continue
            if not field_def.get('path') or not field_def.get('label'):
                result.error(f"Display rule '{rule_name}' field {idx}: 'path' and 'label' are required")
            nested = field_def.get('nested')
            if nested and nested not in definitions:
                result.warn(f"Display rule '{rule_name}' field {idx}: unknown nested definition '{nested}'")


def _check_coverage(data: Dict[str, Any], result: ValidationResult) -> None:
    abi = ((data.get('context') or {}).get('contract') or {}).get('abi')
    if not isinstance(abi, list):
        return

    rule_keys = _display_rule_keys(data)
    for item in abi:
        if not isinstance(item, dict) or item.get('type') != 'function':
            continue
        if item.get('stateMutability') in READ_ONLY_MUTABILITIES:
            continue
        name = item.get('name', '')
        if not any(name in key for key in rule_keys):
            result.warn(f"Function '{name}' has no display format defined")


def validate_descriptor(data: Dict[str, Any]) -> ValidationResult:
    """
    Check an ERC-7730 descriptor document for structural problems.

    Args:
        data: Raw descriptor JSON

    Returns:
        ValidationResult; errors make the descriptor invalid, warnings do not
    """
    result = ValidationResult()

    if not isinstance(data, dict):
        result.error("Descriptor must be a JSON object")
        return result

    _check_contract(data, result)

    if not data.get('metadata'):
        result.error("Missing 'metadata' field")

    _check_display(data, result)
    _check_coverage(data, result)

    logger.info(f"Validation finished: {len(result.errors)} errors, {len(result.warnings)} warnings")
    return result
