# nursery/core/responses.py
from typing import Any

from fastapi.encoders import jsonable_encoder

NO_DATA_MESSAGE = "No data available"


def send_response(
    success: bool,
    message: str,
    data: Any = None,
    length: int | None = None,
) -> dict[str, Any]:
    """
    Build the response envelope shared by every endpoint.

    Shape:
        {"success": bool, "message": str, "data": ..., "length"?: int}

    Normalization:
      - data is None          => data = {}, success = False, "No data available"
      - data is an empty list => data = [], success = False, "No data available"
      - data is an empty dict => same as None
      - data is a falsy scalar (0, "", false) => same as None

    This applies even when the operation itself did not fail
    (e.g. listing an empty table).
    """
    data = jsonable_encoder(data, by_alias=True)

    if data is None or data == {} or (isinstance(data, (bool, int, float, str)) and not data):
        data = {}
        message = NO_DATA_MESSAGE
        success = False
    elif isinstance(data, list) and len(data) == 0:
        message = NO_DATA_MESSAGE
        success = False

    body: dict[str, Any] = {
        "success": success,
        "message": message,
        "data": data,
    }
    if length is not None:
        body["length"] = length
    return body
