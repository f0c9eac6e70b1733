"""Path resolution against decoded call arguments."""

import re
from typing import Any, Iterable, List, Mapping, Optional, Sequence

_INDEX_SEGMENT = re.compile(r"^[0-9]+$")

# First positional argument, by convention the primary struct of the call
PARAMS_SEGMENT = "params"


class DecodedArguments(list):
    """
    Ordered call arguments that can also be addressed by ABI parameter name.

    Behaves exactly like a list (index access, iteration, len). Named
    parameters are only consulted by path resolution for non-index segments.
    """

    def __init__(self, values: Iterable[Any] = (), names: Optional[Sequence[Optional[str]]] = None):
        super().__init__(values)
        self.names: List[Optional[str]] = list(names or [])

    def by_name(self, name: str) -> Any:
        for index, param_name in enumerate(self.names):
            if param_name and param_name == name and index < len(self):
                return self[index]
        return None


def _is_sequence(node: Any) -> bool:
    return isinstance(node, (list, tuple))


def resolve_path(root: Any, path: str) -> Any:
    """
    Navigate a dotted path through nested arguments.

    Args:
        root: Decoded arguments (sequence), or any nested value
        path: Path such as "params.tokenIn", "0.amount" or "orders.1.maker"

    Returns:
        The value at the path, or None when any step cannot be applied
    """
    current = root

    for segment in path.split("."):
        if current is None:
            return None

        if segment == PARAMS_SEGMENT and _is_sequence(current) and len(current) > 0:
            current = current[0]
            continue

        if _is_sequence(current) and _INDEX_SEGMENT.match(segment):
            index = int(segment)
            current = current[index] if index < len(current) else None
        elif isinstance(current, Mapping):
            current = current.get(segment)
        elif isinstance(current, DecodedArguments):
            current = current.by_name(segment)
        else:
            return None

    return current
