# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Ad and ad creative operations.

Creating an ad from a full creative spec is two sequential POSTs: the creative
first, then the ad referencing the new creative id. Nothing is rolled back, so
a failed ad POST leaves the creative on the account. The error raised in that
case carries ``orphaned_creative_id`` in its details.
"""


from typing import Any, Dict, List, Optional

from .config_types import AdConfig, AdCreativeConfig, present_fields, require_text
from .errors import MetaMarketingError, normalize_error, validation_error
from .field_sets import (
    AD_ACCOUNT_LIST_FIELDS,
    AD_ADSET_LIST_FIELDS,
    AD_CREATED_FIELDS,
    AD_DETAIL_FIELDS,
    CREATIVE_DETAIL_FIELDS,
)
from .graph_client import make_api_request, response_id
from .log_setup import logger
from .naming import decamelize_keys

DEFAULT_CALL_TO_ACTION = "LEARN_MORE"


def _validate_creative(creative: AdCreativeConfig) -> None:
    if creative.object_story_spec is not None and not isinstance(creative.object_story_spec, dict):
        raise validation_error("creative objectStorySpec must be an object")
    if creative.object_story_spec or creative.object_story_id:
        return
    require_text(creative.title, "creative title is required without an objectStorySpec")
    require_text(creative.body, "creative body is required without an objectStorySpec")
    require_text(creative.link_url, "creative linkUrl is required without an objectStorySpec")


def _validate_creative_choice(config: AdConfig) -> None:
    if config.creative_id and config.creative is not None:
        raise validation_error("Provide either creativeId or creative, not both")
    if config.creative is not None:
        _validate_creative(config.creative)


def _creative_params(creative: AdCreativeConfig) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    for key, value in present_fields(creative).items():
        if key in ("object_story_spec", "asset_feed_spec"):
            params[key] = decamelize_keys(value)
        else:
            params[key] = value
    params.setdefault("call_to_action_type", DEFAULT_CALL_TO_ACTION)
    return params


def _ad_params(config: AdConfig, creative_id: Optional[str]) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    for key, value in present_fields(config).items():
        if key in ("creative", "creative_id"):
            continue
        if key == "ad_labels":
            params["adlabels"] = value
        elif key == "tracking_specs":
            params["tracking_specs"] = decamelize_keys(value)
        else:
            params[key] = value
    if creative_id:
        params["creative"] = {"creative_id": creative_id}
    return params


async def create_ad_creative(
    base_url: str,
    ad_account_id: str,
    access_token: str,
    creative: AdCreativeConfig,
) -> str:
    """Create a creative and return its id."""
    _validate_creative(creative)
    try:
        created = await make_api_request(
            base_url,
            f"act_{ad_account_id}/adcreatives",
            access_token,
            _creative_params(creative),
            method="POST",
        )
        creative_id = response_id(created)
    except Exception as exc:  # noqa: BLE001
        raise normalize_error(exc, "create ad creative") from exc

    logger.info("creative_created id=%s", creative_id)
    return creative_id


async def get_ad_creative(base_url: str, access_token: str, creative_id: str) -> Dict[str, Any]:
    try:
        return await make_api_request(base_url, creative_id, access_token, {"fields": CREATIVE_DETAIL_FIELDS})
    except Exception as exc:  # noqa: BLE001
        raise normalize_error(exc, f"get ad creative {creative_id}") from exc


def _mark_orphaned_creative(error: MetaMarketingError, creative_id: str) -> MetaMarketingError:
    details = dict(error.details or {})
    details["orphaned_creative_id"] = creative_id
    error.details = details
    return error


async def create_ad(
    base_url: str,
    ad_account_id: str,
    access_token: str,
    config: AdConfig,
) -> Dict[str, Any]:
    """Create the creative (unless one is referenced), then the ad, then fetch it."""
    require_text(config.name, "Ad name is required")
    require_text(config.adset_id, "Ad set ID is required")
    if not config.creative_id and config.creative is None:
        raise validation_error("Must provide either creativeId or creative")
    _validate_creative_choice(config)

    new_creative_id: Optional[str] = None
    if config.creative is not None:
        new_creative_id = await create_ad_creative(base_url, ad_account_id, access_token, config.creative)
    creative_id = new_creative_id or config.creative_id

    params = _ad_params(config, creative_id)
    params.setdefault("status", "PAUSED")

    try:
        created = await make_api_request(base_url, f"act_{ad_account_id}/ads", access_token, params, method="POST")
        ad_id = response_id(created)
        logger.info("ad_created id=%s creative_id=%s", ad_id, creative_id)
        ad = await make_api_request(base_url, ad_id, access_token, {"fields": AD_CREATED_FIELDS})
    except Exception as exc:  # noqa: BLE001
        error = normalize_error(exc, "create ad")
        if new_creative_id:
            logger.warning("Ad creation failed after creative %s was created; creative left in place", new_creative_id)
            error = _mark_orphaned_creative(error, new_creative_id)
        raise error from exc

    return {"success": True, "id": ad_id, "data": ad}


async def get_ad(base_url: str, access_token: str, ad_id: str) -> Dict[str, Any]:
    try:
        return await make_api_request(base_url, ad_id, access_token, {"fields": AD_DETAIL_FIELDS})
    except Exception as exc:  # noqa: BLE001
        raise normalize_error(exc, f"get ad {ad_id}") from exc


async def get_ads(base_url: str, access_token: str, ad_set_id: str) -> List[Dict[str, Any]]:
    """Ads under one ad set; failures degrade to an empty list."""
    try:
        payload = await make_api_request(base_url, f"{ad_set_id}/ads", access_token, {"fields": AD_ADSET_LIST_FIELDS})
    except Exception as exc:  # noqa: BLE001
        logger.warning("get ads failed: %s", normalize_error(exc, f"get ads for ad set {ad_set_id}"))
        return []

    return list(payload.get("data") or []) if isinstance(payload, dict) else []


async def get_account_ads(
    base_url: str,
    ad_account_id: str,
    access_token: str,
    limit: Optional[int] = None,
    status: Optional[str] = None,
) -> List[Dict[str, Any]]:
    params: Dict[str, Any] = {"fields": AD_ACCOUNT_LIST_FIELDS}
    if limit:
        params["limit"] = int(limit)
    if status:
        params["effective_status"] = [status]

    try:
        payload = await make_api_request(base_url, f"act_{ad_account_id}/ads", access_token, params)
    except Exception as exc:  # noqa: BLE001
        logger.warning("get account ads failed: %s", normalize_error(exc, "get account ads"))
        return []

    return list(payload.get("data") or []) if isinstance(payload, dict) else []


async def update_ad(
    base_url: str,
    ad_account_id: str,
    access_token: str,
    ad_id: str,
    config: AdConfig,
) -> Dict[str, Any]:
    """Send only the supplied fields, then return the post-update snapshot.

    A new creative spec is created first and swapped in by id.
    """
    if not present_fields(config):
        raise validation_error("No update parameters provided")
    _validate_creative_choice(config)

    creative_id = config.creative_id
    if config.creative is not None:
        creative_id = await create_ad_creative(base_url, ad_account_id, access_token, config.creative)

    params = _ad_params(config, creative_id)

    try:
        await make_api_request(base_url, ad_id, access_token, params, method="POST")
    except Exception as exc:  # noqa: BLE001
        raise normalize_error(exc, f"update ad {ad_id}") from exc

    ad = await get_ad(base_url, access_token, ad_id)
    return {"success": True, "id": ad_id, "data": ad}


async def pause_ad(base_url: str, access_token: str, ad_id: str) -> bool:
    """Set status to PAUSED; returns False instead of raising on failure."""
    try:
        await make_api_request(base_url, ad_id, access_token, {"status": "PAUSED"}, method="POST")
    except Exception as exc:  # noqa: BLE001
        logger.error("Error pausing ad %s: %s", ad_id, exc)
        return False
    return True
