# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""FastMCP runtime assembly and stdio-first CLI entrypoint."""

import argparse
import logging
import sys
from typing import Any, Dict, Optional

from mcp import types
from mcp.server.fastmcp import FastMCP

from .client import MetaMarketingClient
from .dispatch import ToolDispatcher
from .errors import MetaMarketingError
from .log_setup import logger
from .settings import load_settings

SERVER_NAME = "meta-mcp"

# Prevent upstream HTTP libraries from logging full request URLs that can
# include access_token query parameters.
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


class McpToolError(Exception):
    """Base error type surfaced as MCP tool errors."""


def _compact(arguments: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in arguments.items() if value is not None}


def _call_tool_result(envelope: Dict[str, Any]) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=item["text"]) for item in envelope["content"]],
        isError=envelope["isError"],
    )


def build_mcp_server(dispatcher: ToolDispatcher) -> FastMCP:
    """Register one FastMCP tool per dispatch entry, all bound to ``dispatcher``."""
    server = FastMCP(SERVER_NAME)

    async def _run(name: str, arguments: Dict[str, Any]) -> str:
        envelope = await dispatcher.call_tool(name, _compact(arguments))
        text = envelope["content"][0]["text"]
        if envelope["isError"]:
            raise McpToolError(text)
        return text

    async def _handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        envelope = await dispatcher.call_tool(request.params.name, _compact(request.params.arguments or {}))
        return types.ServerResult(_call_tool_result(envelope))

    # tools/call answers with the dispatcher envelope unchanged; FastMCP's own
    # handler would prefix error text with "Error executing tool ...".
    server._mcp_server.request_handlers[types.CallToolRequest] = _handle_call_tool

    @server.tool(name="createCampaign", description="Create a campaign (camelCase config) and return the fetched record.")
    async def create_campaign(config: Dict[str, Any]):
        return await _run("createCampaign", {"config": config})

    @server.tool(name="getCampaign", description="Fetch one campaign with the full field list.")
    async def get_campaign(campaignId: str):
        return await _run("getCampaign", {"campaignId": campaignId})

    @server.tool(name="getCampaigns", description="List campaigns in the configured ad account.")
    async def get_campaigns(limit: Optional[int] = None, status: Optional[str] = None):
        return await _run("getCampaigns", {"limit": limit, "status": status})

    @server.tool(name="updateCampaign", description="Update only the supplied campaign fields.")
    async def update_campaign(campaignId: str, config: Dict[str, Any]):
        return await _run("updateCampaign", {"campaignId": campaignId, "config": config})

    @server.tool(name="pauseCampaign", description="Pause a campaign; returns true or false.")
    async def pause_campaign(campaignId: str):
        return await _run("pauseCampaign", {"campaignId": campaignId})

    @server.tool(name="createAdSet", description="Create an ad set (camelCase config, targeting required).")
    async def create_ad_set(config: Dict[str, Any]):
        return await _run("createAdSet", {"config": config})

    @server.tool(name="getAdSet", description="Fetch one ad set with the full field list.")
    async def get_ad_set(adSetId: str):
        return await _run("getAdSet", {"adSetId": adSetId})

    @server.tool(name="getAdSets", description="List ad sets under a campaign.")
    async def get_ad_sets(campaignId: str):
        return await _run("getAdSets", {"campaignId": campaignId})

    @server.tool(name="getAccountAdSets", description="List ad sets in the configured ad account.")
    async def get_account_ad_sets(limit: Optional[int] = None, status: Optional[str] = None):
        return await _run("getAccountAdSets", {"limit": limit, "status": status})

    @server.tool(name="updateAdSet", description="Update only the supplied ad set fields.")
    async def update_ad_set(adSetId: str, config: Dict[str, Any]):
        return await _run("updateAdSet", {"adSetId": adSetId, "config": config})

    @server.tool(name="pauseAdSet", description="Pause an ad set; returns true or false.")
    async def pause_ad_set(adSetId: str):
        return await _run("pauseAdSet", {"adSetId": adSetId})

    @server.tool(name="createAd", description="Create an ad from a creativeId or a full creative spec.")
    async def create_ad(config: Dict[str, Any]):
        return await _run("createAd", {"config": config})

    @server.tool(name="getAd", description="Fetch one ad with the full field list.")
    async def get_ad(adId: str):
        return await _run("getAd", {"adId": adId})

    @server.tool(name="getAds", description="List ads under an ad set.")
    async def get_ads(adSetId: str):
        return await _run("getAds", {"adSetId": adSetId})

    @server.tool(name="getAccountAds", description="List ads in the configured ad account.")
    async def get_account_ads(limit: Optional[int] = None, status: Optional[str] = None):
        return await _run("getAccountAds", {"limit": limit, "status": status})

    @server.tool(name="updateAd", description="Update only the supplied ad fields.")
    async def update_ad(adId: str, config: Dict[str, Any]):
        return await _run("updateAd", {"adId": adId, "config": config})

    @server.tool(name="pauseAd", description="Pause an ad; returns true or false.")
    async def pause_ad(adId: str):
        return await _run("pauseAd", {"adId": adId})

    @server.tool(name="getAdCreative", description="Fetch one ad creative.")
    async def get_ad_creative(creativeId: str):
        return await _run("getAdCreative", {"creativeId": creativeId})

    @server.tool(name="getAvailableAdAccounts", description="List ad accounts visible to the access token.")
    async def get_available_ad_accounts():
        return await _run("getAvailableAdAccounts", {})

    @server.tool(name="getAdAccount", description="Fetch ad account details (defaults to the configured account).")
    async def get_ad_account(adAccountId: Optional[str] = None):
        return await _run("getAdAccount", {"adAccountId": adAccountId})

    return server


def main() -> int:
    """CLI entrypoint used by `python -m meta_marketing_mcp` and scripts."""
    parser = argparse.ArgumentParser(
        description="Meta Marketing API MCP server (local stdio mode).",
        epilog="Credentials come from FB_ACCESS_TOKEN and FB_AD_ACCOUNT_ID.",
    )
    parser.add_argument("--ad-account-id", type=str, help="Override FB_AD_ACCOUNT_ID")
    parser.add_argument("--api-version", type=str, help="Override FB_API_VERSION, e.g. v22.0")
    parser.add_argument("--version", action="store_true", help="Print package version")

    # Explicitly reject non-stdio transports.
    parser.add_argument("--transport", type=str, default="stdio", help=argparse.SUPPRESS)

    args = parser.parse_args()

    if args.version:
        from meta_marketing_mcp import __version__

        print(f"Meta Marketing MCP v{__version__}")
        return 0

    if args.transport != "stdio":
        print("This build supports local stdio MCP only.")
        return 2

    settings = load_settings().with_overrides(ad_account_id=args.ad_account_id, api_version=args.api_version)
    try:
        client = MetaMarketingClient(settings.access_token, settings.ad_account_id, api_version=settings.api_version)
    except MetaMarketingError as exc:
        logger.error("startup_failed kind=%s message=%s", exc.kind.value, exc)
        print(f"Error: {exc}. Set FB_ACCESS_TOKEN and FB_AD_ACCOUNT_ID.", file=sys.stderr)
        return 1

    logger.info("Starting %s for ad account %s on %s", SERVER_NAME, client.ad_account_id, client.base_url)
    server = build_mcp_server(ToolDispatcher(client))
    server.run(transport="stdio")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
