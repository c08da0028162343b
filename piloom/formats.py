import json
from typing import Dict, Tuple

from .engine import Result


def render_full(result: Result) -> str:
    return result.text


def render_tail(result: Result, count: int) -> str:
    return result.tail(count)


def render(result: Result, full: bool, tail_digits: int) -> str:
    if full or len(result.digits) < tail_digits + 1:
        return render_full(result)
    return render_tail(result, tail_digits)


def serialize_payload(value: str, fmt: str, meta: Dict) -> Tuple[bytes, str]:
    fmt = fmt.lower().strip()
    if fmt == "txt":
        return (value + "\n").encode("utf-8"), "text/plain"
    if fmt == "json":
        payload = dict(meta)
        payload["value"] = value
        return (
            json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8"),
            "application/json",
        )
    raise ValueError(f"unsupported format: {fmt}")
