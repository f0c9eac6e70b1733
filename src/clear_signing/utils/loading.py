"""Descriptor loading from disk or over HTTP, with an explicit cache."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import requests
from pydantic import ValidationError

from .clear_signing_pydantic_classes import Descriptor
from .constants import DEFAULT_DESCRIPTOR_PATH, DEFAULT_FETCH_TIMEOUT
from .exceptions import DescriptorUnavailableError

logger = logging.getLogger(__name__)

Source = Union[str, Path]


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def merge_includes(data: Dict[str, Any], base_path: Path) -> Dict[str, Any]:
    """
    Merge ERC-7730 includes into the main file.

    Included values are applied first so the main file can override them.

    Args:
        data: Parsed ERC-7730 JSON data
        base_path: Directory the include path is relative to

    Returns:
        Merged ERC-7730 data with includes resolved
    """
    if 'includes' not in data:
        return data

    include_file = data['includes']
    if not isinstance(include_file, str):
        raise ValueError(f"'includes' must be a file path, got {type(include_file).__name__}")
    include_path = base_path / include_file

    logger.info(f"Merging include file: {include_path}")

    with open(include_path, 'r') as f:
        include_data = json.load(f)
    if not isinstance(include_data, dict):
        raise ValueError(f"Included file {include_path} is not a JSON object")

    # Recursively merge includes in the included file
    include_data = merge_includes(include_data, include_path.parent)

    # Merge metadata (constants, enums, etc.)
    if 'metadata' in include_data:
        metadata = data.setdefault('metadata', {})
        for key, value in include_data['metadata'].items():
            if key not in metadata:
                metadata[key] = value
            elif isinstance(value, dict) and isinstance(metadata[key], dict):
                metadata[key] = {**value, **metadata[key]}

    if 'context' in include_data and 'context' not in data:
        data['context'] = include_data['context']

    if 'messages' in include_data:
        data['messages'] = {**include_data['messages'], **data.get('messages', {})}

    if 'display' in include_data:
        display = data.setdefault('display', {})
        for section in ('definitions', 'formats'):
            if section in include_data['display']:
                display[section] = {**include_data['display'][section], **display.get(section, {})}

    del data['includes']

    logger.info(f"Successfully merged include: {include_file}")
    return data


class DescriptorCache:
    """
    Loads ERC-7730 descriptors and keeps them for reuse.

    One instance is meant to be created by the caller and passed to whatever
    needs descriptors. Each source is fetched at most once until clear().
    """

    def __init__(
        self,
        default_source: Source = DEFAULT_DESCRIPTOR_PATH,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            default_source: Path or URL used when load() is called without a source
            timeout: HTTP timeout in seconds
            session: requests session for HTTP sources (a plain requests.get is used when omitted)
        """
        self.default_source = str(default_source)
        self.timeout = timeout
        self.session = session
        self._descriptors: Dict[str, Descriptor] = {}

    def __contains__(self, source: Source) -> bool:
        return str(source) in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def load(self, source: Optional[Source] = None) -> Descriptor:
        """
        Return the descriptor for a source, fetching it on first use.

        Args:
            source: File path or http(s) URL; the default source when omitted

        Returns:
            Parsed Descriptor

        Raises:
            DescriptorUnavailableError: If the document cannot be fetched, read or parsed
        """
        key = str(source) if source is not None else self.default_source

        cached = self._descriptors.get(key)
        if cached is not None:
            return cached

        logger.info(f"Loading ERC-7730 descriptor: {key}")
        data = self.fetch_document(key)

        try:
            descriptor = Descriptor.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid ERC-7730 descriptor {key}: {e}")
            raise DescriptorUnavailableError(key, f"invalid descriptor: {e}") from e

        self._descriptors[key] = descriptor
        logger.info(f"Successfully loaded {key}")
        return descriptor

    def clear(self) -> None:
        self._descriptors.clear()

    def fetch_document(self, source: Source) -> Dict[str, Any]:
        """Fetch the raw JSON document for a source, bypassing the cache."""
        source = str(source)
        if _is_url(source):
            return self._fetch_url(source)
        return self._read_file(Path(source))

    def _read_file(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("descriptor must be a JSON object")
            return merge_includes(data, path.parent)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to read {path}: {e}")
            raise DescriptorUnavailableError(str(path), str(e)) from e

    def _fetch_url(self, url: str) -> Dict[str, Any]:
        try:
            getter = self.session.get if self.session is not None else requests.get
            response = getter(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
            if not isinstance(data, dict):
                raise ValueError("descriptor must be a JSON object")
            return data
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Failed to fetch {url}: {e}")
            raise DescriptorUnavailableError(url, str(e)) from e
