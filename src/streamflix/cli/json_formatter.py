"""
JSON Output Formatter for the StreamFlix CLI

Produces the machine-readable envelope printed when ``--json`` is given.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import orjson

from streamflix.shared.errors import ApplicationError, ErrorCode, ErrorContext


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
) -> bytes:
    """
    Format command output as JSON.

    Args:
        success: Whether the command executed successfully
        command: The command name (e.g., "popular", "search")
        data: The command's output data
        errors: List of error messages

    Returns:
        JSON-encoded bytes ready for output

    Raises:
        ApplicationError: If ``data`` cannot be serialized
    """
    errors = errors or []
    if errors:
        success = False

    json_data = {
        "success": success,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": data,
        "errors": errors,
    }

    try:
        return orjson.dumps(
            json_data,
            option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS,
        )
    except TypeError as e:
        raise ApplicationError(
            code=ErrorCode.CLI_OUTPUT_ERROR,
            message=f"Failed to serialize output for '{command}': {e}",
            context=ErrorContext(operation="format_json_output"),
            original_error=e,
        ) from e
