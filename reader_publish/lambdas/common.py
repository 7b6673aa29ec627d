import base64, json
from typing import Any, Dict, Mapping, Optional, Union

from reader_publish.errors import BadRequest

API_KEY_HEADER = "X-API-Key"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": f"Content-Type, {API_KEY_HEADER}",
}

def respond(body: Dict[str, Any], status: int = 200) -> Dict[str, Any]:
    headers = dict(CORS_HEADERS)
    headers["Content-Type"] = "application/json"
    return {"statusCode": status, "headers": headers, "body": json.dumps(body, ensure_ascii=False)}

def no_content() -> Dict[str, Any]:
    return {"statusCode": 204, "headers": dict(CORS_HEADERS), "body": ""}

def fail(msg: str, status: int = 500, **extra: Any) -> Dict[str, Any]:
    return respond({"success": False, "error": msg, **extra}, status)

def header(headers: Optional[Mapping[str, Any]], name: str) -> Optional[str]:
    # header names are case-insensitive
    wanted = name.lower()
    for key, value in (headers or {}).items():
        if key.lower() == wanted:
            return value
    return None

def with_context(message: str, **context: Any) -> str:
    if not context:
        return message
    return f"{message} | {json.dumps(context, ensure_ascii=False, default=str)}"

def parse_body(body: Union[None, str, bytes, Dict[str, Any]], is_base64: bool = False) -> Dict[str, Any]:
    """Turn a raw request body into a JSON object, raising BadRequest otherwise."""
    if isinstance(body, dict):
        return body
    if body is None or body == "" or body == b"":
        raise BadRequest("Invalid JSON body")
    try:
        if is_base64:
            body = base64.b64decode(body)
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        data = json.loads(body)
    except (ValueError, TypeError) as e:
        raise BadRequest("Invalid JSON body") from e
    if not isinstance(data, dict):
        raise BadRequest("Invalid JSON body")
    return data
