# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Ad-account read operations."""


from typing import Any, Dict, List

from .errors import normalize_error
from .field_sets import ACCOUNT_DETAIL_FIELDS, AVAILABLE_ACCOUNT_FIELDS
from .graph_client import make_api_request
from .log_setup import logger


def normalize_account_id(ad_account_id: str) -> str:
    """Bare numeric account id, with any ``act_`` prefix removed."""
    ad_account_id = str(ad_account_id or "").strip()
    if ad_account_id.startswith("act_"):
        return ad_account_id[len("act_"):]
    return ad_account_id


async def get_available_ad_accounts(base_url: str, access_token: str) -> List[Dict[str, Any]]:
    """Ad accounts visible to the token's user; failures degrade to an empty list."""
    try:
        payload = await make_api_request(base_url, "me/adaccounts", access_token, {"fields": AVAILABLE_ACCOUNT_FIELDS})
    except Exception as exc:  # noqa: BLE001
        logger.warning("get available ad accounts failed: %s", normalize_error(exc, "get available ad accounts"))
        return []

    return list(payload.get("data") or []) if isinstance(payload, dict) else []


async def get_ad_account(base_url: str, access_token: str, ad_account_id: str) -> Dict[str, Any]:
    account_id = normalize_account_id(ad_account_id)
    try:
        return await make_api_request(base_url, f"act_{account_id}", access_token, {"fields": ACCOUNT_DETAIL_FIELDS})
    except Exception as exc:  # noqa: BLE001
        raise normalize_error(exc, f"get ad account act_{account_id}") from exc
