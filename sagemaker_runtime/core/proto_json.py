"""JSON error protocol shared by the rest-json and json services."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from sagemaker_runtime.core.dispatch import HttpResponse


@dataclass(frozen=True)
class JsonError:
    typ: str
    msg: str


def _clean_type(raw: str) -> str:
    # "aws.protocoltests#ValidationError:http://internal" -> "ValidationError"
    typ = raw.split(":", 1)[0]
    return typ.rsplit("#", 1)[-1].strip()


def _body_json(response: HttpResponse) -> dict[str, Any]:
    if not response.body:
        return {}
    try:
        data = json.loads(response.body)
    except (ValueError, UnicodeDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def parse_json_error(response: HttpResponse) -> JsonError | None:
    """Error type and message from a failed response, or None if neither body nor header names one."""
    data = _body_json(response)
    raw = data.get("__type") or data.get("code") or data.get("Code") or response.header("x-amzn-ErrorType")
    if not raw or not isinstance(raw, str):
        return None
    msg = data.get("message") or data.get("Message") or ""
    return JsonError(_clean_type(raw), str(msg))
