# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Ad set create/read/update/pause operations."""


import json
from typing import Any, Dict, List, Optional

from .config_types import AdSetConfig, present_fields, require_text, validate_budget
from .errors import normalize_error, validation_error
from .field_sets import ADSET_ACCOUNT_LIST_FIELDS, ADSET_CAMPAIGN_LIST_FIELDS, ADSET_DETAIL_FIELDS
from .graph_client import make_api_request, response_id
from .log_setup import logger
from .naming import decamelize_keys

_BID_STRATEGIES_REQUIRING_BID_AMOUNT = {"LOWEST_COST_WITH_BID_CAP", "COST_CAP"}
_VALID_BID_STRATEGIES = (
    "LOWEST_COST_WITHOUT_CAP",
    "LOWEST_COST_WITH_BID_CAP",
    "COST_CAP",
    "LOWEST_COST_WITH_MIN_ROAS",
)


def _normalize_bid_strategy(bid_strategy: Optional[str]) -> Optional[str]:
    if bid_strategy is None:
        return None
    return str(bid_strategy).strip().upper()


def _validate_bid_controls(bid_strategy: Optional[str], bid_amount: Optional[int]) -> None:
    normalized = _normalize_bid_strategy(bid_strategy)
    if normalized is None:
        return

    if normalized == "TARGET_COST":
        raise validation_error(
            "bidStrategy 'TARGET_COST' is deprecated and not supported. "
            f"Use one of: {', '.join(_VALID_BID_STRATEGIES)}"
        )

    if normalized == "LOWEST_COST":
        raise validation_error("'LOWEST_COST' is not a valid bidStrategy value, use 'LOWEST_COST_WITHOUT_CAP'")

    if normalized in _BID_STRATEGIES_REQUIRING_BID_AMOUNT and bid_amount is None:
        raise validation_error(f"bidAmount is required when using bidStrategy '{normalized}'")


def _adset_params(fields: Dict[str, Any]) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    for key, value in fields.items():
        if key == "targeting":
            params["targeting"] = json.dumps(decamelize_keys(value))
        elif key == "promoted_object":
            params["promoted_object"] = json.dumps(decamelize_keys(value))
        elif key in ("adset_schedule", "attribution_spec", "bid_constraints"):
            params[key] = decamelize_keys(value)
        elif key == "bid_strategy":
            params["bid_strategy"] = _normalize_bid_strategy(value)
        elif key == "ad_labels":
            params["adlabels"] = value
        else:
            params[key] = value
    return params


async def create_ad_set(
    base_url: str,
    ad_account_id: str,
    access_token: str,
    config: AdSetConfig,
) -> Dict[str, Any]:
    """Create an ad set under a campaign, then return the fetched record."""
    require_text(config.name, "Ad set name is required")
    require_text(config.campaign_id, "Campaign ID is required")
    if not config.targeting:
        raise validation_error("Targeting is required")
    if not isinstance(config.targeting, dict):
        raise validation_error("Targeting must be an object")
    validate_budget(config.daily_budget, config.lifetime_budget, config.end_time, "endTime")
    _validate_bid_controls(config.bid_strategy, config.bid_amount)

    fields = present_fields(config)
    fields.setdefault("status", "PAUSED")
    params = _adset_params(fields)
    params["special_ad_categories"] = []

    try:
        created = await make_api_request(
            base_url, f"act_{ad_account_id}/adsets", access_token, params, method="POST"
        )
        ad_set_id = response_id(created)
        logger.info("adset_created id=%s campaign_id=%s", ad_set_id, config.campaign_id)
        ad_set = await make_api_request(base_url, ad_set_id, access_token, {"fields": ADSET_DETAIL_FIELDS})
    except Exception as exc:  # noqa: BLE001
        raise normalize_error(exc, "create ad set") from exc

    return {"success": True, "id": ad_set_id, "data": ad_set}


async def get_ad_set(base_url: str, access_token: str, ad_set_id: str) -> Dict[str, Any]:
    try:
        return await make_api_request(base_url, ad_set_id, access_token, {"fields": ADSET_DETAIL_FIELDS})
    except Exception as exc:  # noqa: BLE001
        raise normalize_error(exc, f"get ad set {ad_set_id}") from exc


async def get_ad_sets(base_url: str, access_token: str, campaign_id: str) -> List[Dict[str, Any]]:
    """Ad sets under one campaign; failures degrade to an empty list."""
    try:
        payload = await make_api_request(
            base_url, f"{campaign_id}/adsets", access_token, {"fields": ADSET_CAMPAIGN_LIST_FIELDS}
        )
    except Exception as exc:  # noqa: BLE001
        logger.warning("get ad sets failed: %s", normalize_error(exc, f"get ad sets for campaign {campaign_id}"))
        return []

    return list(payload.get("data") or []) if isinstance(payload, dict) else []


async def get_account_ad_sets(
    base_url: str,
    ad_account_id: str,
    access_token: str,
    limit: Optional[int] = None,
    status: Optional[str] = None,
) -> List[Dict[str, Any]]:
    params: Dict[str, Any] = {"fields": ADSET_ACCOUNT_LIST_FIELDS}
    if limit:
        params["limit"] = int(limit)
    if status:
        params["effective_status"] = [status]

    try:
        payload = await make_api_request(base_url, f"act_{ad_account_id}/adsets", access_token, params)
    except Exception as exc:  # noqa: BLE001
        logger.warning("get account ad sets failed: %s", normalize_error(exc, "get account ad sets"))
        return []

    return list(payload.get("data") or []) if isinstance(payload, dict) else []


async def update_ad_set(
    base_url: str,
    access_token: str,
    ad_set_id: str,
    config: AdSetConfig,
) -> Dict[str, Any]:
    """Send only the supplied fields, then return the post-update snapshot."""
    fields = present_fields(config)
    if not fields:
        raise validation_error("No update parameters provided")
    if config.targeting is not None and not isinstance(config.targeting, dict):
        raise validation_error("Targeting must be an object")
    validate_budget(
        config.daily_budget, config.lifetime_budget, config.end_time, "endTime", require_end_time=False
    )
    _validate_bid_controls(config.bid_strategy, config.bid_amount)
    params = _adset_params(fields)

    try:
        await make_api_request(base_url, ad_set_id, access_token, params, method="POST")
    except Exception as exc:  # noqa: BLE001
        raise normalize_error(exc, f"update ad set {ad_set_id}") from exc

    ad_set = await get_ad_set(base_url, access_token, ad_set_id)
    return {"success": True, "id": ad_set_id, "data": ad_set}


async def pause_ad_set(base_url: str, access_token: str, ad_set_id: str) -> bool:
    """Set status to PAUSED; returns False instead of raising on failure."""
    try:
        await make_api_request(base_url, ad_set_id, access_token, {"status": "PAUSED"}, method="POST")
    except Exception as exc:  # noqa: BLE001
        logger.error("Error pausing ad set %s: %s", ad_set_id, exc)
        return False
    return True
