from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sized


def get_logger(logger: logging.Logger | None = None) -> logging.Logger:
    return logger if logger is not None else logging.getLogger("gql_response")


def sanitize_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    sensitive = {"authorization", "cookie", "set-cookie"}
    sanitized: Dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in sensitive:
            sanitized[key] = "<redacted>"
        else:
            sanitized[key] = value
    return sanitized


def _count(values: Optional[Sized]) -> Optional[int]:
    return len(values) if values is not None else None


def log_response_summary(
    logger: logging.Logger,
    *,
    data: Any,
    items: Optional[Sized],
    errors: Optional[Sized],
) -> None:
    """Debug line per parsed response; absent collections log as ``None``."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    root_fields = ",".join(data) if isinstance(data, dict) else None
    logger.debug(
        "Parsed GraphQL response has_data=%s root_fields=%s items=%s errors=%s",
        data is not None,
        root_fields,
        _count(items),
        _count(errors),
    )
