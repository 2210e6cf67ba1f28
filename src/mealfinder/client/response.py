"""Response decoding -- maps :class:`httpx.Response` bodies to JSON records.

TheMealDB answers every endpoint with a JSON object holding a single
array-valued field (``categories`` or ``meals``). When nothing matches, the
field is ``null`` or missing; both mean "empty list", never an error. A body
that is not a JSON object, or a data field that is neither ``null`` nor a
list, is a :class:`~mealfinder.exceptions.DecodeError`.
"""

from __future__ import annotations

from typing import Any

import httpx

from mealfinder.exceptions import DecodeError


def decode_json_body(response: httpx.Response, url: str | None = None) -> dict[str, Any]:
    """Decode a response body as a JSON object.

    Args:
        response: A successful :class:`httpx.Response`.
        url: The request URL, attached to any raised error.

    Returns:
        The decoded object.

    Raises:
        DecodeError: If the body is empty, not JSON, or not a JSON object.
    """
    if not response.content:
        raise DecodeError("Empty response body", url=url, status_code=response.status_code)
    try:
        data = response.json()
    except ValueError as exc:
        raise DecodeError(
            f"Malformed JSON body: {exc}", url=url, status_code=response.status_code
        ) from exc
    if not isinstance(data, dict):
        raise DecodeError(
            f"Expected a JSON object, got {type(data).__name__}",
            url=url,
            status_code=response.status_code,
        )
    return data


def extract_records(body: dict[str, Any], field: str) -> list[dict[str, Any]]:
    """Return the list stored under *field*, treating ``null`` or absence as empty.

    Args:
        body: A decoded response object.
        field: ``"categories"`` or ``"meals"``.

    Raises:
        DecodeError: If the field holds something other than a list of
            objects.
    """
    records = body.get(field)
    if records is None:
        return []
    if not isinstance(records, list):
        raise DecodeError(f"Expected '{field}' to be a list, got {type(records).__name__}")
    if not all(isinstance(r, dict) for r in records):
        raise DecodeError(f"Expected '{field}' to contain only objects")
    return records
