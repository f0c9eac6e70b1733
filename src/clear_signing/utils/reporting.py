"""Markdown rendering of previews and validation results."""

import json
from typing import Any

from .clear_signing_pydantic_classes import FormattedTransaction
from .validation import ValidationResult


def _cell(text: Any) -> str:
    return str(text).replace('|', '\\|').replace('\n', ' ')


def _bool_emoji(value: bool) -> str:
    return '✅ Yes' if value else '❌ No'


def render_preview_markdown(transaction: FormattedTransaction) -> str:
    """
    Render a formatted transaction as a markdown table, one row per field.

    Args:
        transaction: Formatted transaction

    Returns:
        Markdown text
    """
    lines = [
        f"## {transaction.intent}",
        "",
        f"**Function:** `{transaction.function_name}`",
        "",
        "| Field | Value |",
        "|-------|-------|",
    ]
    for field in transaction.fields:
        lines.append(f"| {_cell(field.label)} | {_cell(field.value)} |")
    return "\n".join(lines) + "\n"


def render_preview_json(transaction: FormattedTransaction) -> str:
    return json.dumps(transaction.model_dump(by_alias=True), indent=2, default=str)


def render_validation_markdown(result: ValidationResult) -> str:
    lines = [f"**Valid:** {_bool_emoji(result.valid)}", ""]
    if result.errors:
        lines.append("### 🚨 Errors")
        lines.extend(f"- {error}" for error in result.errors)
        lines.append("")
    if result.warnings:
        lines.append("### ⚠️ Warnings")
        lines.extend(f"- {warning}" for warning in result.warnings)
        lines.append("")
    if result.valid and not result.warnings:
        lines.append("✨ No issues found!")
    return "\n".join(lines).rstrip() + "\n"
