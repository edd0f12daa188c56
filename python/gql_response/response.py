from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, overload

import httpx

from .convert import item_converter
from .errors import (
    GraphQLOperationError,
    ItemConversionError,
    SerializationError,
    TransportError,
)
from .logging import get_logger, log_response_summary, sanitize_headers
from .models import GraphQLErrorItem, parse_error_items

KEY_DATA = "data"
KEY_ERRORS = "errors"
KEY_EXTENSIONS = "extensions"
KEY_ITEMS = "items"
KEY_EDGES = "edges"
KEY_NODE = "node"

IGNORE_UNKNOWN_ENV = "GQL_RESPONSE_IGNORE_UNKNOWN_FIELDS"

T = TypeVar("T")


def _env_ignore_unknown() -> bool:
    raw = os.getenv(IGNORE_UNKNOWN_ENV, "")
    return raw.strip().lower() in {"1", "true", "yes"}


def _find_items(data: Mapping[str, Any]) -> Optional[Tuple[Any, ...]]:
    # a single root field is expected; the first child in key order wins
    for value in data.values():
        if isinstance(value, dict) and isinstance(value.get(KEY_ITEMS), list):
            return tuple(value[KEY_ITEMS])

    for key, value in data.items():
        if isinstance(value, dict) and isinstance(value.get(KEY_EDGES), list):
            nodes = []
            for idx, edge in enumerate(value[KEY_EDGES]):
                if not isinstance(edge, dict) or KEY_NODE not in edge:
                    raise SerializationError(
                        f"Expected object with {KEY_NODE} at {KEY_DATA}.{key}.{KEY_EDGES}[{idx}]"
                    )
                nodes.append(edge[KEY_NODE])
            return tuple(nodes)

    return None


@dataclass(frozen=True)
class GraphQLResponse:
    """Structured view of one GraphQL response document.

    ``errors`` is ``None`` when the server sent no ``errors`` key at all and an
    empty tuple when it sent an empty array. ``items`` holds the collection of
    a single-root query, found either under ``<root>.items`` or as the nodes
    of ``<root>.edges``.
    """

    data: Optional[Any]
    items: Optional[Tuple[Any, ...]]
    errors: Optional[Tuple[GraphQLErrorItem, ...]]
    extensions: Optional[Dict[str, Any]] = None

    @classmethod
    def from_document(
        cls,
        document: Any,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> "GraphQLResponse":
        log = get_logger(logger)
        if not isinstance(document, dict):
            raise SerializationError("Expected object at response root")

        errors = parse_error_items(document.get(KEY_ERRORS))
        data = document.get(KEY_DATA)
        items = _find_items(data) if isinstance(data, dict) else None

        extensions = document.get(KEY_EXTENSIONS)
        if extensions is not None and not isinstance(extensions, dict):
            raise SerializationError(f"Expected object at {KEY_EXTENSIONS}")

        log_response_summary(log, data=data, items=items, errors=errors)
        return cls(data=data, items=items, errors=errors, extensions=extensions)

    @classmethod
    def from_http_response(
        cls,
        response: httpx.Response,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> "GraphQLResponse":
        log = get_logger(logger)
        log.debug(
            "GraphQL HTTP response status=%s headers=%s",
            response.status_code,
            sanitize_headers(response.headers),
        )
        ok = 200 <= response.status_code < 300
        try:
            document = response.json()
        except ValueError as exc:
            if not ok:
                raise TransportError(response.status_code, response.text[:500]) from exc
            raise SerializationError("Response body is not valid JSON") from exc

        if ok:
            return cls.from_document(document, logger=logger)
        if not (isinstance(document, dict) and document.get(KEY_ERRORS)):
            raise TransportError(response.status_code, response.text[:500])
        try:
            return cls.from_document(document, logger=logger)
        except SerializationError as exc:
            raise TransportError(response.status_code, response.text[:500]) from exc

    def has_items(self) -> bool:
        return bool(self.items)

    def has_errors(self) -> bool:
        return bool(self.errors)

    @overload
    def get_items(self) -> Optional[Tuple[Any, ...]]: ...

    @overload
    def get_items(
        self, target_type: Type[T], *, ignore_unknown: Optional[bool] = None
    ) -> Optional[List[T]]: ...

    def get_items(self, target_type=None, *, ignore_unknown=None):
        """Return the items, optionally converted to ``target_type``.

        Conversion is all or nothing: the first item that does not fit raises
        ``ItemConversionError`` and no converted items are returned.
        """
        if target_type is None or self.items is None:
            return self.items
        if ignore_unknown is None:
            ignore_unknown = _env_ignore_unknown()

        if not self.items:
            return []
        try:
            convert = item_converter(target_type, ignore_unknown=ignore_unknown)
        except SerializationError as exc:
            raise ItemConversionError(self.items[0], target_type, 0) from exc

        result: List[Any] = []
        for idx, item in enumerate(self.items):
            try:
                result.append(convert(item, f"items[{idx}]"))
            except (SerializationError, TypeError, ValueError) as exc:
                raise ItemConversionError(item, target_type, idx) from exc
        return result

    def errors_string(self) -> Optional[str]:
        if self.errors is None:
            return None
        return ", ".join(error.message for error in self.errors)

    def raise_for_errors(self) -> "GraphQLResponse":
        if self.errors:
            raise GraphQLOperationError(errors=list(self.errors), partial_data=self.data)
        return self

    def __str__(self) -> str:
        parts = ["[GraphQLResponse "]
        if self.data is not None:
            parts.append(f"data: \n{json.dumps(self.data, indent=2)}\n")
        if self.errors is not None:
            parts.append(f"errors: {self.errors_string()}")
        parts.append("]")
        return "".join(parts)
