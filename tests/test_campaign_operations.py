import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from meta_marketing_mcp.core.campaign_operations import (
    create_campaign,
    get_campaigns,
    normalize_special_ad_categories,
    pause_campaign,
    update_campaign,
)
from meta_marketing_mcp.core.client import MetaMarketingClient
from meta_marketing_mcp.core.config_types import CampaignConfig
from meta_marketing_mcp.core.errors import ErrorKind, MetaMarketingError
from meta_marketing_mcp.core.field_sets import CAMPAIGN_CREATED_FIELDS, CAMPAIGN_DETAIL_FIELDS
from meta_marketing_mcp.core.graph_client import GraphRequestError

BASE_URL = "https://graph.facebook.com/v22.0"
PATCH_TARGET = "meta_marketing_mcp.core.campaign_operations.make_api_request"


@pytest.mark.asyncio
async def test_create_campaign_end_to_end_returns_fetched_record():
    fetched = {"id": "999", "name": "Test", "objective": "REACH", "status": "PAUSED"}
    client = MetaMarketingClient("token", "act_123")
    config = CampaignConfig.from_payload(
        {"name": "Test", "objective": "REACH", "status": "PAUSED", "specialAdCategories": []}
    )

    with patch(PATCH_TARGET, new_callable=AsyncMock) as mock_api:
        mock_api.side_effect = [{"id": "999"}, fetched]
        result = await client.create_campaign(config)

    assert result == {"success": True, "id": "999", "data": fetched}
    assert mock_api.await_count == 2

    create_call, fetch_call = mock_api.call_args_list
    assert create_call.args[:3] == (client.base_url, "act_123/campaigns", "token")
    assert create_call.kwargs["method"] == "POST"
    assert create_call.args[3] == {
        "name": "Test",
        "objective": "REACH",
        "status": "PAUSED",
        "special_ad_categories": [],
    }
    assert fetch_call.args[:3] == (client.base_url, "999", "token")
    assert fetch_call.args[3] == {"fields": CAMPAIGN_CREATED_FIELDS}


@pytest.mark.asyncio
async def test_create_campaign_defaults_status_and_decamelizes_promoted_object():
    config = CampaignConfig.from_payload(
        {"name": "Sales", "objective": "OUTCOME_SALES", "promotedObject": {"pixelId": "px", "customEventType": "PURCHASE"}}
    )
    with patch(PATCH_TARGET, new_callable=AsyncMock) as mock_api:
        mock_api.side_effect = [{"id": "1"}, {"id": "1"}]
        await create_campaign(BASE_URL, "123", "token", config)

    params = mock_api.call_args_list[0].args[3]
    assert params["status"] == "PAUSED"
    assert params["special_ad_categories"] == []
    assert params["promoted_object"] == {"pixel_id": "px", "custom_event_type": "PURCHASE"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Both", "objective": "REACH", "dailyBudget": 5000, "lifetimeBudget": 100000, "stopTime": "2030-01-01"},
        {"name": "Lifetime", "objective": "REACH", "lifetimeBudget": 100000},
        {"name": "", "objective": "REACH"},
        {"name": "No objective"},
    ],
)
async def test_create_campaign_validation_happens_before_any_request(payload):
    config = CampaignConfig.from_payload(payload)
    with patch(PATCH_TARGET, new_callable=AsyncMock) as mock_api:
        with pytest.raises(MetaMarketingError) as caught:
            await create_campaign(BASE_URL, "123", "token", config)

    assert caught.value.kind is ErrorKind.VALIDATION_ERROR
    mock_api.assert_not_called()


def test_float_budget_is_rejected_at_the_boundary():
    with pytest.raises(MetaMarketingError) as caught:
        CampaignConfig.from_payload({"name": "x", "objective": "REACH", "dailyBudget": 50.5})
    assert caught.value.kind is ErrorKind.VALIDATION_ERROR


@pytest.mark.asyncio
async def test_create_campaign_fetch_failure_surfaces_as_error():
    config = CampaignConfig.from_payload({"name": "Test", "objective": "REACH"})
    with patch(PATCH_TARGET, new_callable=AsyncMock) as mock_api:
        mock_api.side_effect = [
            {"id": "999"},
            GraphRequestError("Unsupported get request", error_payload={"code": 100, "message": "x"}, http_status=400),
        ]
        with pytest.raises(MetaMarketingError) as caught:
            await create_campaign(BASE_URL, "123", "token", config)

    assert caught.value.kind is ErrorKind.API_ERROR
    assert caught.value.details["fb_code"] == 100


@pytest.mark.asyncio
async def test_update_campaign_sends_only_supplied_fields_then_fetches():
    fetched = {"id": "55", "name": "Renamed", "status": "ACTIVE"}
    config = CampaignConfig.from_payload({"name": "Renamed"})
    with patch(PATCH_TARGET, new_callable=AsyncMock) as mock_api:
        mock_api.side_effect = [{"success": True}, fetched]
        result = await update_campaign(BASE_URL, "token", "55", config)

    assert result == {"success": True, "id": "55", "data": fetched}
    update_call, fetch_call = mock_api.call_args_list
    assert update_call.args[3] == {"name": "Renamed"}
    assert fetch_call.args[3] == {"fields": CAMPAIGN_DETAIL_FIELDS}


@pytest.mark.asyncio
async def test_update_campaign_without_fields_is_rejected():
    with patch(PATCH_TARGET, new_callable=AsyncMock) as mock_api:
        with pytest.raises(MetaMarketingError):
            await update_campaign(BASE_URL, "token", "55", CampaignConfig())
    mock_api.assert_not_called()


@pytest.mark.asyncio
async def test_pause_campaign_failure_resolves_false():
    with patch(PATCH_TARGET, new_callable=AsyncMock) as mock_api:
        mock_api.side_effect = GraphRequestError("Network error: down")
        assert await pause_campaign(BASE_URL, "token", "55") is False


@pytest.mark.asyncio
async def test_pause_campaign_success_posts_paused_status():
    with patch(PATCH_TARGET, new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"success": True}
        assert await pause_campaign(BASE_URL, "token", "55") is True

    assert mock_api.call_args.args[3] == {"status": "PAUSED"}
    assert mock_api.call_args.kwargs["method"] == "POST"


@pytest.mark.asyncio
async def test_get_campaigns_missing_data_resolves_empty_list():
    with patch(PATCH_TARGET, new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"paging": {}}
        assert await get_campaigns(BASE_URL, "123", "token") == []


@pytest.mark.asyncio
async def test_get_campaigns_forwards_limit_and_status_filter():
    with patch(PATCH_TARGET, new_callable=AsyncMock) as mock_api:
        mock_api.return_value = {"data": [{"id": "1"}]}
        result = await get_campaigns(BASE_URL, "123", "token", limit=5, status="ACTIVE")

    assert result == [{"id": "1"}]
    params = mock_api.call_args.args[3]
    assert params["limit"] == 5
    assert params["effective_status"] == ["ACTIVE"]
    assert json.dumps(params)


@pytest.mark.asyncio
async def test_get_campaigns_failure_resolves_empty_list():
    with patch(PATCH_TARGET, new_callable=AsyncMock) as mock_api:
        mock_api.side_effect = GraphRequestError("boom", error_payload={"code": 2, "message": "boom"})
        assert await get_campaigns(BASE_URL, "123", "token") == []


def test_special_ad_categories_normalization():
    assert normalize_special_ad_categories(None) == []
    assert normalize_special_ad_categories(["NONE"]) == []
    assert normalize_special_ad_categories(["housing", "HOUSING", "employment"]) == ["HOUSING", "EMPLOYMENT"]
    with pytest.raises(MetaMarketingError):
        normalize_special_ad_categories(["NONE", "HOUSING"])
    with pytest.raises(MetaMarketingError, match="FINANCIAL_PRODUCTS_SERVICES"):
        normalize_special_ad_categories(["CREDIT"])
