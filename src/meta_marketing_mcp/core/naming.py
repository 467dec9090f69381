# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Key conversion between camelCase tool arguments and snake_case Graph fields.

Only mapping keys are renamed. Lists keep their shape and order; mapping
elements inside them are converted, everything else is left alone.

An uppercase run is one word: ``HTMLBody`` becomes ``html_body`` and
``pageID`` becomes ``page_id``, which converts back to ``pageId``. Acronym
keys therefore do not round-trip; no Graph field in the allowlists uses one.
"""

import re
from typing import Any

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z0-9])")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SNAKE_BOUNDARY = re.compile(r"(?<=[a-zA-Z0-9])_([a-z0-9])")


def decamelize_key(key: Any) -> Any:
    if not isinstance(key, str):
        return key
    key = _ACRONYM_BOUNDARY.sub(r"\1_\2", key)
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def camelize_key(key: Any) -> Any:
    if not isinstance(key, str):
        return key
    return _SNAKE_BOUNDARY.sub(lambda match: match.group(1).upper(), key)


def _convert_keys(value: Any, convert) -> Any:
    if isinstance(value, dict):
        return {convert(key): _convert_keys(item, convert) for key, item in value.items()}

    if isinstance(value, list):
        return [_convert_keys(item, convert) for item in value]

    return value


def decamelize_keys(value: Any) -> Any:
    """Recursively rename mapping keys to snake_case."""
    return _convert_keys(value, decamelize_key)


def camelize_keys(value: Any) -> Any:
    """Recursively rename mapping keys to camelCase."""
    return _convert_keys(value, camelize_key)
