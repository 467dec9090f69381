"""Graph API transport: one signed request in, parsed JSON or GraphRequestError out."""


import json
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from .log_setup import logger

USER_AGENT = "meta-marketing-mcp/1.0"
REQUEST_TIMEOUT_SECONDS = 30.0


class GraphRequestError(Exception):
    """Raised when a Graph request fails at the HTTP or payload level."""

    def __init__(
        self,
        message: str,
        error_payload: Optional[Dict[str, Any]] = None,
        http_status: Optional[int] = None,
    ):
        super().__init__(message)
        self.error_payload = error_payload
        self.http_status = http_status


def _log_rate_headers(headers: Any, endpoint: str) -> None:
    usage_headers = {
        "x-app-usage": headers.get("x-app-usage"),
        "x-business-use-case-usage": headers.get("x-business-use-case-usage"),
        "x-ad-account-usage": headers.get("x-ad-account-usage"),
    }
    used = {k: v for k, v in usage_headers.items() if v}
    if used:
        logger.info("meta_rate_usage endpoint=%s data=%s", endpoint, json.dumps(used))


def _encode_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value


def _normalize_request_params(params: Optional[Dict[str, Any]], access_token: str) -> Dict[str, Any]:
    normalized: Dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        normalized[key] = _encode_value(value)
    normalized["access_token"] = access_token
    return normalized


def _sanitize_url(raw_url: str) -> str:
    try:
        parts = urlsplit(raw_url)
        query_pairs = parse_qsl(parts.query, keep_blank_values=True)
        filtered_pairs = [(key, value) for key, value in query_pairs if key.lower() != "access_token"]
        sanitized_query = urlencode(filtered_pairs, doseq=True)
        return urlunsplit((parts.scheme, parts.netloc, parts.path, sanitized_query, parts.fragment))
    except ValueError:
        return raw_url


def _sanitize_response_payload(value: Any) -> Any:
    """Recursively strip access tokens from URL-like response values."""
    if isinstance(value, dict):
        return {key: _sanitize_response_payload(item) for key, item in value.items()}

    if isinstance(value, list):
        return [_sanitize_response_payload(item) for item in value]

    if isinstance(value, str) and "access_token=" in value.lower():
        return _sanitize_url(value)

    return value


def _error_message(payload: Any, status_code: int) -> str:
    if isinstance(payload, dict):
        error_obj = payload.get("error")
        if isinstance(error_obj, dict) and error_obj.get("message"):
            return str(error_obj["message"])
        if isinstance(error_obj, str) and error_obj:
            return error_obj
        for key in ("error_description", "error_msg", "error_message"):
            if payload.get(key):
                return str(payload[key])
    return f"API request failed with status {status_code}"


def _error_payload(payload: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(payload, dict):
        return None
    error_obj = payload.get("error")
    if isinstance(error_obj, dict):
        return error_obj
    return payload


async def make_api_request(
    base_url: str,
    endpoint: str,
    access_token: str,
    params: Optional[Dict[str, Any]] = None,
    method: str = "GET",
) -> Dict[str, Any]:
    """Execute one Graph API request and return the decoded JSON body."""
    method = method.upper()
    if method not in ("GET", "POST", "DELETE"):
        raise GraphRequestError(f"Unsupported HTTP method: {method}")

    url = f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"
    request_params = _normalize_request_params(params, access_token)
    safe_params = {k: ("***TOKEN***" if k == "access_token" else v) for k, v in request_params.items()}

    logger.debug("Graph request method=%s url=%s params=%s", method, url, safe_params)

    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SECONDS) as client:
        try:
            if method == "GET":
                response = await client.get(url, params=request_params, headers={"User-Agent": USER_AGENT})
            elif method == "POST":
                response = await client.post(url, data=request_params, headers={"User-Agent": USER_AGENT})
            else:
                response = await client.request(
                    "DELETE", url, params=request_params, headers={"User-Agent": USER_AGENT}
                )
        except httpx.RequestError as exc:
            message = str(exc) or exc.__class__.__name__
            if "access_token=" in message.lower():
                message = _sanitize_url(message)
            logger.warning("Graph request network failure endpoint=%s error=%s", endpoint, message)
            raise GraphRequestError(f"Network error: {message}") from exc

    _log_rate_headers(response.headers, endpoint)

    is_success = 200 <= response.status_code < 300
    try:
        payload = _sanitize_response_payload(response.json())
    except ValueError as exc:
        logger.warning(
            "Graph response was not JSON endpoint=%s status=%s", endpoint, response.status_code
        )
        if not is_success:
            raise GraphRequestError(
                f"API request failed with status {response.status_code}",
                http_status=response.status_code,
            ) from exc
        raise GraphRequestError(
            f"Malformed response from Graph API (HTTP {response.status_code})",
            http_status=response.status_code,
        ) from exc

    if not is_success or (isinstance(payload, dict) and payload.get("error")):
        logger.info("Graph error response endpoint=%s status=%s body=%s", endpoint, response.status_code, payload)
        raise GraphRequestError(
            _error_message(payload, response.status_code),
            error_payload=_error_payload(payload),
            http_status=response.status_code,
        )

    return payload


def response_id(payload: Any) -> str:
    """Extract the id Graph assigns on create."""
    if isinstance(payload, dict) and payload.get("id"):
        return str(payload["id"])
    raise GraphRequestError("Graph create response did not include an id", error_payload=None)
