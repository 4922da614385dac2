from typing import Any

from ..models import utcnow


def envelope(data: Any = None, status: int = 200) -> dict:
    return {"status": status, "date": utcnow(), "data": data}


def error_envelope(error: Any, status: int) -> dict:
    return {"status": status, "date": utcnow(), "error": error}
