from datetime import datetime
from typing import Any, Optional

from fastapi.responses import JSONResponse


def serialize_doc(doc):
    """Recursively convert datetimes and rename `_id` to `id` in a MongoDB document."""
    if not doc:
        return doc

    if isinstance(doc, list):
        return [serialize_doc(d) for d in doc]

    if isinstance(doc, dict):
        clean = {}
        for k, v in doc.items():
            key = "id" if k == "_id" else k
            if isinstance(v, datetime):
                clean[key] = v.isoformat()
            elif isinstance(v, (dict, list)):
                clean[key] = serialize_doc(v)
            else:
                clean[key] = v
        return clean

    return doc


def success_response(
    data: Optional[Any] = None,
    message: str = "Success",
    code: int = 200,
) -> JSONResponse:
    """Standard success JSON response."""
    content = {"success": True, "message": message}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=code, content=content)


def error_response(
    message: str,
    code: int = 400,
    data: Optional[Any] = None,
) -> JSONResponse:
    """Standard error JSON response."""
    content = {"success": False, "error": {"code": code, "message": message}}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=code, content=content)
