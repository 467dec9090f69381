# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Single entry point binding credentials to every entity operation."""


from typing import Any, Dict, List, Optional

from . import account_operations, ad_operations, adset_operations, campaign_operations
from .config_types import AdConfig, AdSetConfig, CampaignConfig
from .errors import ErrorKind, MetaMarketingError
from .graph_constants import DEFAULT_GRAPH_API_VERSION, GRAPH_API_HOST, graph_api_base


class MetaMarketingClient:
    """Facade over the campaign, ad set, ad and account operations.

    Configuration is fixed at construction and never mutated, so one instance
    can serve any number of concurrent tool calls.
    """

    def __init__(
        self,
        access_token: str,
        ad_account_id: str,
        api_version: str = DEFAULT_GRAPH_API_VERSION,
        graph_host: str = GRAPH_API_HOST,
    ):
        if not isinstance(access_token, str) or not access_token.strip():
            raise MetaMarketingError("Access token is required", ErrorKind.INVALID_CREDENTIALS)
        account_id = account_operations.normalize_account_id(ad_account_id)
        if not account_id:
            raise MetaMarketingError("Ad account ID is required", ErrorKind.INVALID_CREDENTIALS)

        self._access_token = access_token.strip()
        self._ad_account_id = account_id
        self._base_url = graph_api_base(api_version, graph_host)

    @property
    def ad_account_id(self) -> str:
        return self._ad_account_id

    @property
    def base_url(self) -> str:
        return self._base_url

    # Campaigns

    async def create_campaign(self, config: CampaignConfig) -> Dict[str, Any]:
        return await campaign_operations.create_campaign(
            self._base_url, self._ad_account_id, self._access_token, config
        )

    async def get_campaign(self, campaign_id: str) -> Dict[str, Any]:
        return await campaign_operations.get_campaign(self._base_url, self._access_token, campaign_id)

    async def get_campaigns(self, limit: Optional[int] = None, status: Optional[str] = None) -> List[Dict[str, Any]]:
        return await campaign_operations.get_campaigns(
            self._base_url, self._ad_account_id, self._access_token, limit, status
        )

    async def update_campaign(self, campaign_id: str, config: CampaignConfig) -> Dict[str, Any]:
        return await campaign_operations.update_campaign(self._base_url, self._access_token, campaign_id, config)

    async def pause_campaign(self, campaign_id: str) -> bool:
        return await campaign_operations.pause_campaign(self._base_url, self._access_token, campaign_id)

    # Ad sets

    async def create_ad_set(self, config: AdSetConfig) -> Dict[str, Any]:
        return await adset_operations.create_ad_set(self._base_url, self._ad_account_id, self._access_token, config)

    async def get_ad_set(self, ad_set_id: str) -> Dict[str, Any]:
        return await adset_operations.get_ad_set(self._base_url, self._access_token, ad_set_id)

    async def get_ad_sets(self, campaign_id: str) -> List[Dict[str, Any]]:
        return await adset_operations.get_ad_sets(self._base_url, self._access_token, campaign_id)

    async def get_account_ad_sets(
        self, limit: Optional[int] = None, status: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        return await adset_operations.get_account_ad_sets(
            self._base_url, self._ad_account_id, self._access_token, limit, status
        )

    async def update_ad_set(self, ad_set_id: str, config: AdSetConfig) -> Dict[str, Any]:
        return await adset_operations.update_ad_set(self._base_url, self._access_token, ad_set_id, config)

    async def pause_ad_set(self, ad_set_id: str) -> bool:
        return await adset_operations.pause_ad_set(self._base_url, self._access_token, ad_set_id)

    # Ads

    async def create_ad(self, config: AdConfig) -> Dict[str, Any]:
        return await ad_operations.create_ad(self._base_url, self._ad_account_id, self._access_token, config)

    async def get_ad(self, ad_id: str) -> Dict[str, Any]:
        return await ad_operations.get_ad(self._base_url, self._access_token, ad_id)

    async def get_ads(self, ad_set_id: str) -> List[Dict[str, Any]]:
        return await ad_operations.get_ads(self._base_url, self._access_token, ad_set_id)

    async def get_account_ads(self, limit: Optional[int] = None, status: Optional[str] = None) -> List[Dict[str, Any]]:
        return await ad_operations.get_account_ads(
            self._base_url, self._ad_account_id, self._access_token, limit, status
        )

    async def update_ad(self, ad_id: str, config: AdConfig) -> Dict[str, Any]:
        return await ad_operations.update_ad(
            self._base_url, self._ad_account_id, self._access_token, ad_id, config
        )

    async def pause_ad(self, ad_id: str) -> bool:
        return await ad_operations.pause_ad(self._base_url, self._access_token, ad_id)

    async def get_ad_creative(self, creative_id: str) -> Dict[str, Any]:
        return await ad_operations.get_ad_creative(self._base_url, self._access_token, creative_id)

    # Accounts

    async def get_available_ad_accounts(self) -> List[Dict[str, Any]]:
        return await account_operations.get_available_ad_accounts(self._base_url, self._access_token)

    async def get_ad_account(self, ad_account_id: Optional[str] = None) -> Dict[str, Any]:
        return await account_operations.get_ad_account(
            self._base_url, self._access_token, ad_account_id or self._ad_account_id
        )
