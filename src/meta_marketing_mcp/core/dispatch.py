# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Tool-name dispatch onto the client facade and the MCP response envelope."""


import json
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Tuple

from .client import MetaMarketingClient
from .config_types import AdConfig, AdSetConfig, CampaignConfig
from .errors import MetaMarketingError
from .log_setup import logger

# Required arguments per tool; "config" must be an object, everything else a non-empty string.
REQUIRED_ARGUMENTS: Dict[str, Tuple[str, ...]] = {
    "createCampaign": ("config",),
    "getCampaign": ("campaignId",),
    "getCampaigns": (),
    "updateCampaign": ("campaignId", "config"),
    "pauseCampaign": ("campaignId",),
    "createAdSet": ("config",),
    "getAdSet": ("adSetId",),
    "getAdSets": ("campaignId",),
    "getAccountAdSets": (),
    "updateAdSet": ("adSetId", "config"),
    "pauseAdSet": ("adSetId",),
    "createAd": ("config",),
    "getAd": ("adId",),
    "getAds": ("adSetId",),
    "getAccountAds": (),
    "updateAd": ("adId", "config"),
    "pauseAd": ("adId",),
    "getAdCreative": ("creativeId",),
    "getAvailableAdAccounts": (),
    "getAdAccount": (),
}


class ToolArgumentError(ValueError):
    """Raised when a required tool argument is absent or has the wrong shape."""


def text_envelope(text: str, is_error: bool) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": text}], "isError": is_error}


def serialize_result(result: Any) -> str:
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2, default=str)


def check_required_arguments(name: str, arguments: Mapping[str, Any]) -> None:
    for key in REQUIRED_ARGUMENTS.get(name, ()):
        value = arguments.get(key)
        if key == "config":
            valid = isinstance(value, Mapping)
        else:
            valid = isinstance(value, str) and bool(value.strip())
        if not valid:
            raise ToolArgumentError(f"Missing or invalid required parameter: {key}")


def _optional_int(arguments: Mapping[str, Any], key: str) -> Optional[int]:
    value = arguments.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _optional_str(arguments: Mapping[str, Any], key: str) -> Optional[str]:
    value = arguments.get(key)
    return value if isinstance(value, str) and value else None


class ToolDispatcher:
    """Routes ``(name, arguments)`` tool calls to a pre-built client."""

    def __init__(self, client: MetaMarketingClient):
        self._client = client
        self._handlers: Dict[str, Callable[[Mapping[str, Any]], Awaitable[Any]]] = {
            "createCampaign": self._create_campaign,
            "getCampaign": lambda args: client.get_campaign(args["campaignId"]),
            "getCampaigns": lambda args: client.get_campaigns(
                _optional_int(args, "limit"), _optional_str(args, "status")
            ),
            "updateCampaign": self._update_campaign,
            "pauseCampaign": lambda args: client.pause_campaign(args["campaignId"]),
            "createAdSet": self._create_ad_set,
            "getAdSet": lambda args: client.get_ad_set(args["adSetId"]),
            "getAdSets": lambda args: client.get_ad_sets(args["campaignId"]),
            "getAccountAdSets": lambda args: client.get_account_ad_sets(
                _optional_int(args, "limit"), _optional_str(args, "status")
            ),
            "updateAdSet": self._update_ad_set,
            "pauseAdSet": lambda args: client.pause_ad_set(args["adSetId"]),
            "createAd": self._create_ad,
            "getAd": lambda args: client.get_ad(args["adId"]),
            "getAds": lambda args: client.get_ads(args["adSetId"]),
            "getAccountAds": lambda args: client.get_account_ads(
                _optional_int(args, "limit"), _optional_str(args, "status")
            ),
            "updateAd": self._update_ad,
            "pauseAd": lambda args: client.pause_ad(args["adId"]),
            "getAdCreative": lambda args: client.get_ad_creative(args["creativeId"]),
            "getAvailableAdAccounts": lambda args: client.get_available_ad_accounts(),
            "getAdAccount": lambda args: client.get_ad_account(_optional_str(args, "adAccountId")),
        }

    @property
    def tool_names(self) -> Tuple[str, ...]:
        return tuple(self._handlers)

    async def _create_campaign(self, args: Mapping[str, Any]) -> Any:
        return await self._client.create_campaign(CampaignConfig.from_payload(args["config"]))

    async def _update_campaign(self, args: Mapping[str, Any]) -> Any:
        return await self._client.update_campaign(args["campaignId"], CampaignConfig.from_payload(args["config"]))

    async def _create_ad_set(self, args: Mapping[str, Any]) -> Any:
        return await self._client.create_ad_set(AdSetConfig.from_payload(args["config"]))

    async def _update_ad_set(self, args: Mapping[str, Any]) -> Any:
        return await self._client.update_ad_set(args["adSetId"], AdSetConfig.from_payload(args["config"]))

    async def _create_ad(self, args: Mapping[str, Any]) -> Any:
        return await self._client.create_ad(AdConfig.from_payload(args["config"]))

    async def _update_ad(self, args: Mapping[str, Any]) -> Any:
        return await self._client.update_ad(args["adId"], AdConfig.from_payload(args["config"]))

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        handler = self._handlers.get(name)
        if handler is None:
            return text_envelope(f"Unknown tool: {name}", True)

        args = arguments or {}
        logger.info("Executing tool: %s", name)
        try:
            check_required_arguments(name, args)
            result = await handler(args)
        except MetaMarketingError as exc:
            logger.error("Error executing tool %s: %s", name, exc.to_dict())
            return text_envelope(f"Error: {exc}", True)
        except Exception as exc:  # noqa: BLE001
            logger.error("Error executing tool %s: %s", name, exc)
            return text_envelope(f"Error: {exc}", True)

        return text_envelope(serialize_result(result), False)
