"""Request body decoding for JSON and form submissions."""

from __future__ import annotations

import json
from typing import Any

from fastapi import Request

from product_api.core.exceptions import MalformedBodyError

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_payload(request: Request) -> dict[str, Any]:
    """Decode the body into a field mapping.

    JSON is the default; URL-encoded and multipart forms are accepted for
    clients posting plain HTML forms. An empty body decodes to ``{}``.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in FORM_CONTENT_TYPES:
        try:
            form = await request.form()
        except Exception as exc:
            raise MalformedBodyError() from exc
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedBodyError() from exc
    if not isinstance(payload, dict):
        raise MalformedBodyError("Request body must be an object")
    return payload
