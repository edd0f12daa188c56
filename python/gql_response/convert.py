from __future__ import annotations

from typing import Any, Callable, Tuple

from pydantic import BaseModel, ConfigDict, PydanticUserError, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel
from pydantic.dataclasses import is_pydantic_dataclass

from .errors import SerializationError

ItemConverter = Callable[[Any, str], Any]

_HOOK_ERRORS = (KeyError, IndexError, TypeError, ValueError, AttributeError)


def _type_name(target_type: Any) -> str:
    return getattr(target_type, "__qualname__", None) or repr(target_type)


def _owns_config(target_type: Any) -> bool:
    if not isinstance(target_type, type):
        return False
    return issubclass(target_type, BaseModel) or is_pydantic_dataclass(target_type)


def _location(path: str, loc: Tuple[Any, ...]) -> str:
    parts = [path]
    for part in loc:
        parts.append(f"[{part}]" if isinstance(part, int) else f".{part}")
    return "".join(parts)


def _hook_converter(target_type: Any, from_dict: Callable[[Any, str], Any]) -> ItemConverter:
    def convert(node: Any, path: str) -> Any:
        try:
            return from_dict(node, path)
        except SerializationError:
            raise
        except _HOOK_ERRORS as exc:
            raise SerializationError(
                f"{_type_name(target_type)}.from_dict failed at {path}: {exc!r}"
            ) from exc

    return convert


def item_converter(target_type: Any, *, ignore_unknown: bool = False) -> ItemConverter:
    """Build a callable mapping one JSON node onto ``target_type``.

    Types exposing ``from_dict(obj, path)`` parse themselves. Everything else
    goes through a pydantic ``TypeAdapter``; plain dataclasses accept both the
    camelCase JSON key and the field name. Models carrying their own pydantic
    config keep it, so ``ignore_unknown`` does not apply to them.
    """
    from_dict = getattr(target_type, "from_dict", None)
    if callable(from_dict):
        return _hook_converter(target_type, from_dict)

    try:
        if _owns_config(target_type):
            adapter: TypeAdapter[Any] = TypeAdapter(target_type)
        else:
            adapter = TypeAdapter(
                target_type,
                config=ConfigDict(
                    alias_generator=to_camel,
                    populate_by_name=True,
                    extra="ignore" if ignore_unknown else "forbid",
                ),
            )
    except (PydanticUserError, NameError) as exc:
        raise SerializationError(
            f"Cannot build a converter for {_type_name(target_type)}: {exc}"
        ) from exc

    def convert(node: Any, path: str) -> Any:
        try:
            return adapter.validate_python(node)
        except ValidationError as exc:
            err = exc.errors()[0]
            raise SerializationError(
                f"{err.get('msg')} at {_location(path, tuple(err.get('loc', ())))}"
            ) from exc
        except (PydanticUserError, NameError) as exc:
            raise SerializationError(
                f"Cannot convert {path} to {_type_name(target_type)}: {exc}"
            ) from exc

    return convert


def convert_item(
    node: Any,
    target_type: Any,
    path: str,
    *,
    ignore_unknown: bool = False,
) -> Any:
    return item_converter(target_type, ignore_unknown=ignore_unknown)(node, path)
