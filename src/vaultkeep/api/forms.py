# API Forms - request body parsing
#
# Routes accept both HTML form posts (urlencoded / multipart) and JSON.

from typing import Dict

from fastapi import Request

from ..core.errors import ValidationFailure


async def read_form(request: Request) -> Dict[str, str]:
    """
    Read a flat mapping of string fields from the request body.

    Raises:
        ValidationFailure: Malformed JSON or a non-object JSON body
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError as e:
            raise ValidationFailure("Malformed JSON body") from e
        if not isinstance(payload, dict):
            raise ValidationFailure("Request body must be a JSON object")
        return {
            key: value if isinstance(value, str) or value is None else str(value)
            for key, value in payload.items()
        }

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}
