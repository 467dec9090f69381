# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Campaign create/read/update/pause operations."""


from typing import Any, Dict, List, Optional

from .config_types import CampaignConfig, present_fields, require_text, validate_budget
from .errors import normalize_error, validation_error
from .field_sets import CAMPAIGN_CREATED_FIELDS, CAMPAIGN_DETAIL_FIELDS, CAMPAIGN_LIST_FIELDS
from .graph_client import make_api_request, response_id
from .log_setup import logger
from .naming import decamelize_keys

_DEPRECATED_SPECIAL_AD_CATEGORIES = {
    "CREDIT": "FINANCIAL_PRODUCTS_SERVICES",
}


def normalize_special_ad_categories(values: Optional[List[str]]) -> List[str]:
    if values is None:
        return []
    if not isinstance(values, list):
        raise validation_error("specialAdCategories must be a list of strings")

    normalized = [str(item).strip().upper() for item in values if str(item).strip()]
    for value in normalized:
        if value in _DEPRECATED_SPECIAL_AD_CATEGORIES:
            replacement = _DEPRECATED_SPECIAL_AD_CATEGORIES[value]
            raise validation_error(
                f"specialAdCategories value '{value}' is deprecated and rejected. Use '{replacement}' instead."
            )

    deduped = list(dict.fromkeys(normalized))
    if "NONE" in deduped:
        if len(deduped) > 1:
            raise validation_error("specialAdCategories cannot mix 'NONE' with other categories")
        return []

    return deduped


def _campaign_params(fields: Dict[str, Any]) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    for key, value in fields.items():
        if key == "ad_labels":
            params["adlabels"] = value
        elif key == "promoted_object":
            params["promoted_object"] = decamelize_keys(value)
        elif key == "special_ad_categories":
            params["special_ad_categories"] = normalize_special_ad_categories(value)
        else:
            params[key] = value
    return params


async def create_campaign(
    base_url: str,
    ad_account_id: str,
    access_token: str,
    config: CampaignConfig,
) -> Dict[str, Any]:
    """Create a campaign, then return the freshly fetched record."""
    require_text(config.name, "Campaign name is required")
    require_text(config.objective, "Campaign objective is required")
    validate_budget(config.daily_budget, config.lifetime_budget, config.stop_time, "stopTime")

    fields = present_fields(config)
    fields.setdefault("status", "PAUSED")
    fields.setdefault("special_ad_categories", [])
    params = _campaign_params(fields)

    try:
        created = await make_api_request(
            base_url, f"act_{ad_account_id}/campaigns", access_token, params, method="POST"
        )
        campaign_id = response_id(created)
        logger.info("campaign_created id=%s", campaign_id)
        campaign = await make_api_request(
            base_url, campaign_id, access_token, {"fields": CAMPAIGN_CREATED_FIELDS}
        )
    except Exception as exc:  # noqa: BLE001
        raise normalize_error(exc, "create campaign") from exc

    return {"success": True, "id": campaign_id, "data": campaign}


async def get_campaign(base_url: str, access_token: str, campaign_id: str) -> Dict[str, Any]:
    try:
        return await make_api_request(base_url, campaign_id, access_token, {"fields": CAMPAIGN_DETAIL_FIELDS})
    except Exception as exc:  # noqa: BLE001
        raise normalize_error(exc, f"get campaign {campaign_id}") from exc


async def get_campaigns(
    base_url: str,
    ad_account_id: str,
    access_token: str,
    limit: Optional[int] = None,
    status: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """List account campaigns; failures degrade to an empty list."""
    params: Dict[str, Any] = {"fields": CAMPAIGN_LIST_FIELDS}
    if limit:
        params["limit"] = int(limit)
    if status:
        params["effective_status"] = [status]

    try:
        payload = await make_api_request(base_url, f"act_{ad_account_id}/campaigns", access_token, params)
    except Exception as exc:  # noqa: BLE001
        logger.warning("get campaigns failed: %s", normalize_error(exc, "get campaigns"))
        return []

    return list(payload.get("data") or []) if isinstance(payload, dict) else []


async def update_campaign(
    base_url: str,
    access_token: str,
    campaign_id: str,
    config: CampaignConfig,
) -> Dict[str, Any]:
    """Send only the supplied fields, then return the post-update snapshot."""
    fields = present_fields(config)
    if not fields:
        raise validation_error("No update parameters provided")
    validate_budget(
        config.daily_budget, config.lifetime_budget, config.stop_time, "stopTime", require_end_time=False
    )
    params = _campaign_params(fields)

    try:
        await make_api_request(base_url, campaign_id, access_token, params, method="POST")
    except Exception as exc:  # noqa: BLE001
        raise normalize_error(exc, f"update campaign {campaign_id}") from exc

    campaign = await get_campaign(base_url, access_token, campaign_id)
    return {"success": True, "id": campaign_id, "data": campaign}


async def pause_campaign(base_url: str, access_token: str, campaign_id: str) -> bool:
    """Set status to PAUSED; returns False instead of raising on failure."""
    try:
        await make_api_request(base_url, campaign_id, access_token, {"status": "PAUSED"}, method="POST")
    except Exception as exc:  # noqa: BLE001
        logger.error("Error pausing campaign %s: %s", campaign_id, exc)
        return False
    return True
