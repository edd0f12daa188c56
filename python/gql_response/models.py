from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .errors import SerializationError


@dataclass(frozen=True)
class GraphQLErrorItem:
    """A single entry of the ``errors`` array sent by the server.

    ``raw`` keeps the untouched error node so vendor specific fields stay
    reachable next to the standard ones.
    """

    message: str
    raw: Dict[str, Any]
    path: Optional[List[Any]] = None
    extensions: Optional[Dict[str, Any]] = None
    locations: Optional[List[Dict[str, Any]]] = None

    @staticmethod
    def from_dict(obj: Any, path: str) -> "GraphQLErrorItem":
        if not isinstance(obj, dict):
            raise SerializationError(f"Expected object at {path}")
        message = _message_text(obj.get("message"), f"{path}.message")
        error_path = obj.get("path")
        if error_path is not None and not isinstance(error_path, list):
            raise SerializationError(f"Expected list at {path}.path")
        extensions = obj.get("extensions")
        if extensions is not None and not isinstance(extensions, dict):
            raise SerializationError(f"Expected object at {path}.extensions")
        locations = obj.get("locations")
        if locations is not None and not isinstance(locations, list):
            raise SerializationError(f"Expected list at {path}.locations")
        return GraphQLErrorItem(
            message=message,
            raw=obj,
            path=error_path,
            extensions=extensions,
            locations=locations,
        )


def _message_text(value: Any, path: str) -> str:
    if isinstance(value, str):
        return value
    # numbers are coerced the way JSON renders them
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise SerializationError(f"Expected string at {path}")


def parse_error_items(raw_errors: Any) -> Optional[Tuple[GraphQLErrorItem, ...]]:
    if raw_errors is None:
        return None
    if not isinstance(raw_errors, list):
        raise SerializationError("Expected list at errors")
    return tuple(
        GraphQLErrorItem.from_dict(err, f"errors[{idx}]")
        for idx, err in enumerate(raw_errors)
    )
