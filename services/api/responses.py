"""JSON response rendering with orjson."""

from typing import Any

import orjson
from fastapi.responses import JSONResponse


class OrjsonResponse(JSONResponse):
    """JSONResponse rendered with orjson.

    Bare strings are valid content: the delete confirmation and error bodies
    are JSON string literals.
    """

    def render(self, content: Any) -> bytes:
        return orjson.dumps(content)
