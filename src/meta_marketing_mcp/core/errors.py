# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Error taxonomy and the classify-and-rethrow normalizer.

Every failure that leaves an operation is a ``MetaMarketingError``. Call sites
wrap their network steps like::

    try:
        ...
    except Exception as exc:  # noqa: BLE001
        raise normalize_error(exc, "create campaign") from exc

``normalize_error`` never swallows anything; it only decides which ``ErrorKind``
the failure belongs to and gathers the remote diagnostics.
"""

import enum
import re
from typing import Any, Dict, Optional

from .graph_client import GraphRequestError


class ErrorKind(str, enum.Enum):
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    API_ERROR = "API_ERROR"
    RATE_LIMIT = "RATE_LIMIT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


class MetaMarketingError(Exception):
    """Classified failure carrying the original error and remote diagnostics."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.API_ERROR,
        original_error: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.original_error = original_error
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "kind": self.kind.value, "details": self.details}


def validation_error(message: str) -> MetaMarketingError:
    return MetaMarketingError(message, ErrorKind.VALIDATION_ERROR)


FACEBOOK_ERROR_MAP: Dict[int, Dict[str, str]] = {
    # Authentication and throttling
    190: {
        "message": "Invalid or expired access token",
        "suggestion": "Generate a new access token with the required permissions",
    },
    200: {
        "message": "Permission error",
        "suggestion": "Ensure your app has the necessary permissions to perform this action",
    },
    4: {
        "message": "Application request limit reached",
        "suggestion": "Implement rate limiting or try again later",
    },
    10: {
        "message": "API rate limit exceeded",
        "suggestion": "Implement exponential backoff in your requests",
    },
    17: {
        "message": "User request limit reached",
        "suggestion": "Reduce the frequency of requests or optimize your code",
    },
    # Ad account
    1487188: {
        "message": "Ad account disabled",
        "suggestion": "Check your ad account status in Facebook Business Manager",
    },
    1815973: {
        "message": "Ad account has reached its spend limit",
        "suggestion": "Increase your account spend limit in Facebook Business Manager",
    },
    1815941: {
        "message": "Funding source not active",
        "suggestion": "Update payment method in Facebook Business Manager",
    },
    # Campaign
    100: {
        "message": "Invalid parameter",
        "suggestion": "Check parameter values against Facebook Marketing API documentation",
    },
    1487338: {
        "message": "Campaign group already exists with this name",
        "suggestion": "Use a different campaign name",
    },
    1391835: {
        "message": "Missing or invalid objective",
        "suggestion": "Provide a valid campaign objective from the allowed list",
    },
    1811500: {
        "message": "Invalid special ad category",
        "suggestion": "Provide a valid special ad category value",
    },
    # Ad set
    1487342: {
        "message": "Ad set already exists with this name",
        "suggestion": "Use a different ad set name",
    },
    1479195: {
        "message": "Invalid targeting spec",
        "suggestion": "Check targeting specifications against API documentation",
    },
    1487171: {
        "message": "Invalid optimization goal and billing event combination",
        "suggestion": "Use a compatible combination of optimization goal and billing event",
    },
    1487283: {
        "message": "Invalid bid amount for the selected bid strategy",
        "suggestion": "Adjust bid amount according to bid strategy requirements",
    },
    # Ad
    1487321: {
        "message": "Ad creative not approved",
        "suggestion": "Review Facebook's ad policies and adjust your creative",
    },
    1487301: {
        "message": "Missing or invalid creative",
        "suggestion": "Provide a complete and valid creative for the ad",
    },
    1487383: {
        "message": "Ad has already been used",
        "suggestion": "Create a new ad creative or use a different creative ID",
    },
    # General
    1: {"message": "Unknown error", "suggestion": "Check server logs for more details"},
    2: {"message": "Service temporarily unavailable", "suggestion": "Try again later"},
    3: {"message": "Unknown method", "suggestion": "Check method name in your API call"},
    368: {
        "message": "The action attempted has been deemed abusive or is otherwise disallowed",
        "suggestion": "Review Facebook's platform policies",
    },
}


def _coerce_code(code: Any) -> Optional[int]:
    if isinstance(code, bool):
        return None
    try:
        return int(code)
    except (TypeError, ValueError):
        return None


def get_error_mapping(code: Any) -> Optional[Dict[str, str]]:
    numeric = _coerce_code(code)
    if numeric is None:
        return None
    return FACEBOOK_ERROR_MAP.get(numeric)


def describe_error_code(code: Any) -> str:
    """Human-readable message and remediation for a Graph error code."""
    mapping = get_error_mapping(code)
    if mapping:
        return f"{mapping['message']}. {mapping['suggestion']}"
    return f"Facebook API error (code {code}). Check API documentation for details."


_RATE_LIMIT_PATTERN = re.compile(r"rate limit|too many (calls|requests)|request limit", re.IGNORECASE)
_NETWORK_PATTERN = re.compile(
    r"network|econnrefused|connection refused|connection reset|timed out", re.IGNORECASE
)
_VALIDATION_PATTERN = re.compile(r"missing|invalid|must be|required", re.IGNORECASE)


def _structured_payload(exc: BaseException) -> Optional[Dict[str, Any]]:
    payload = getattr(exc, "error_payload", None)
    if isinstance(payload, dict) and ("code" in payload or "message" in payload):
        return payload
    return None


def _remote_details(payload: Dict[str, Any], http_status: Optional[int]) -> Dict[str, Any]:
    code = payload.get("code")
    return {
        "fb_code": code,
        "fb_subcode": payload.get("error_subcode"),
        "fb_type": payload.get("type"),
        "fb_message": payload.get("message"),
        "fbtrace_id": payload.get("fbtrace_id"),
        "http_status": http_status,
        "explanation": describe_error_code(code) if code is not None else None,
    }


def classify_error(exc: BaseException) -> ErrorKind:
    if isinstance(exc, MetaMarketingError):
        return exc.kind
    if _structured_payload(exc) is not None:
        return ErrorKind.API_ERROR

    text = str(exc)
    if _RATE_LIMIT_PATTERN.search(text):
        return ErrorKind.RATE_LIMIT
    if _NETWORK_PATTERN.search(text):
        return ErrorKind.NETWORK_ERROR
    if _VALIDATION_PATTERN.search(text):
        return ErrorKind.VALIDATION_ERROR
    return ErrorKind.API_ERROR


def normalize_error(exc: BaseException, operation: str) -> MetaMarketingError:
    """Classify ``exc`` for re-raising; already-classified errors pass through."""
    if isinstance(exc, MetaMarketingError):
        return exc

    kind = classify_error(exc)
    http_status = getattr(exc, "http_status", None)
    payload = _structured_payload(exc)

    if payload is not None:
        details: Optional[Dict[str, Any]] = _remote_details(payload, http_status)
    elif http_status is not None:
        details = {"http_status": http_status}
    else:
        details = None

    reason = str(exc) or exc.__class__.__name__
    return MetaMarketingError(f"Error during {operation}: {reason}", kind, original_error=exc, details=details)


__all__ = [
    "ErrorKind",
    "FACEBOOK_ERROR_MAP",
    "GraphRequestError",
    "MetaMarketingError",
    "classify_error",
    "describe_error_code",
    "get_error_mapping",
    "normalize_error",
    "validation_error",
]
