from __future__ import annotations

from datetime import date
from typing import Optional

from flask import jsonify

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def json_error(message: str, status: int, **extra):
    body = {"error": message}
    body.update(extra)
    return jsonify(body), status


def date_arg(args, name: str, default: Optional[date] = None) -> date:
    raw = (args.get(name) or "").strip()
    if not raw:
        if default is None:
            raise ValidationError(f"Query parameter '{name}' is required (YYYY-MM-DD)")
        return default
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"Query parameter '{name}' must be YYYY-MM-DD") from None


def json_body(request) -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body
