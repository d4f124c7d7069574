"""Identifier parsing for path and body parameters."""

from typing import Any

from cinereserve.exceptions import InvalidRequestError
from cinereserve.models import MAX_INT


def parse_id(value: Any, message: str) -> int:
    """
    Parse an identifier made only of digits.

    Values that do not fit an Integer column are rejected here, with the same
    message as any other malformed id.

    Raises:
        InvalidRequestError: With ``message`` when the value is not a usable id
    """
    if isinstance(value, bool):
        raise InvalidRequestError(message)
    if isinstance(value, int):
        number = value
    else:
        text = str(value).strip() if value is not None else ""
        if not text.isdigit():
            raise InvalidRequestError(message)
        number = int(text)
    if not 0 <= number <= MAX_INT:
        raise InvalidRequestError(message)
    return number
