"""Error formatting utilities.

Turns errors raised by the project service client into one-line messages
for the CLI.
"""

import json
import traceback
from typing import Any

from ..api_client.errors import MalformedResponseError, NotFoundError, TransportError


def format_error(error: Any) -> str | None:
    """Format known application errors into user-friendly messages.

    Returns None if the error type is not recognized, allowing
    fallback to format_unknown_error.
    """
    if isinstance(error, NotFoundError):
        return f"Not found: {error.path or error}"
    if isinstance(error, MalformedResponseError):
        return f"Unexpected response from the project service: {error}"
    if isinstance(error, TransportError):
        if error.status_code is None:
            return f"Could not reach the project service: {error}"
        return f"Project service error ({error.status_code}): {error}"
    return None


def format_unknown_error(error: Any) -> str:
    """Format any error into a string representation."""
    if isinstance(error, Exception):
        if error.__traceback__:
            return ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        return f"{error.__class__.__name__}: {error}"

    if isinstance(error, (dict, list)):
        try:
            return json.dumps(error, indent=2)
        except (TypeError, ValueError):
            return "Unexpected error (unserializable)"

    return str(error)
