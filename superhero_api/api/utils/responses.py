"""orjson-backed JSON responses.

``ORJSONResponse`` is the application's default response class.
"""

from typing import Any

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel

ORJSON_OPTIONS = orjson.OPT_SORT_KEYS


def dump_model(value: object) -> Any:  # noqa: ANN401 - whatever the model dumps to
    """Fallback for orjson: pydantic models become their JSON-mode dump.

    Raises:
        TypeError: For any other type orjson cannot encode.
    """
    if not isinstance(value, BaseModel):
        raise TypeError(f"Cannot serialize {type(value).__name__} to JSON")
    return value.model_dump(mode="json")


class ORJSONResponse(JSONResponse):
    """JSON response with sorted keys, encoded by orjson."""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - JSON content
        return orjson.dumps(content, default=dump_model, option=ORJSON_OPTIONS)
