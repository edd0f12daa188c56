from .convert import convert_item, item_converter
from .errors import (
    GraphQLError,
    GraphQLOperationError,
    ItemConversionError,
    SerializationError,
    TransportError,
)
from .models import GraphQLErrorItem, parse_error_items
from .response import GraphQLResponse

__all__ = [
    "GraphQLResponse",
    "GraphQLErrorItem",
    "parse_error_items",
    "convert_item",
    "item_converter",
    "TransportError",
    "GraphQLError",
    "GraphQLOperationError",
    "ItemConversionError",
    "SerializationError",
]
