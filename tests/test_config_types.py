import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from meta_marketing_mcp.core.config_types import (
    AdConfig,
    AdCreativeConfig,
    AdSetConfig,
    CampaignConfig,
    present_fields,
    validate_budget,
)
from meta_marketing_mcp.core.errors import ErrorKind, MetaMarketingError


def test_campaign_config_maps_camel_case_keys():
    config = CampaignConfig.from_payload(
        {"name": "C", "objective": "REACH", "specialAdCategories": ["NONE"], "stopTime": "2030-01-01", "adlabels": []}
    )
    assert config.special_ad_categories == ["NONE"]
    assert config.stop_time == "2030-01-01"
    assert config.ad_labels == []


def test_unknown_keys_are_ignored():
    config = CampaignConfig.from_payload({"name": "C", "someFutureField": 1})
    assert present_fields(config) == {"name": "C"}


def test_nested_structures_are_left_in_camel_case():
    config = AdSetConfig.from_payload({"targeting": {"geoLocations": {"countries": ["US"]}}})
    assert config.targeting == {"geoLocations": {"countries": ["US"]}}


def test_ad_config_builds_nested_creative_and_aliases():
    config = AdConfig.from_payload(
        {"name": "A", "adSetId": "3", "creative": {"title": "t", "callToAction": "SHOP_NOW"}}
    )
    assert config.adset_id == "3"
    assert isinstance(config.creative, AdCreativeConfig)
    assert config.creative.call_to_action_type == "SHOP_NOW"


def test_ad_set_schedule_aliases():
    config = AdSetConfig.from_payload({"adSetSchedule": [{"days": [0]}]})
    assert config.adset_schedule == [{"days": [0]}]


@pytest.mark.parametrize(
    "payload",
    [
        {"dailyBudget": 10.5},
        {"lifetimeBudget": "1000"},
        {"spendCap": True},
        {"status": "RUNNING"},
    ],
)
def test_invalid_field_types_are_rejected(payload):
    with pytest.raises(MetaMarketingError) as caught:
        CampaignConfig.from_payload(payload)
    assert caught.value.kind is ErrorKind.VALIDATION_ERROR


def test_non_object_payload_is_rejected():
    with pytest.raises(MetaMarketingError):
        AdConfig.from_payload(["not", "a", "dict"])


def test_validate_budget_rules():
    validate_budget(5000, None, None, "stopTime")
    validate_budget(None, 100000, "2030-01-01", "stopTime")
    validate_budget(None, 100000, None, "endTime", require_end_time=False)

    with pytest.raises(MetaMarketingError, match="Cannot set both"):
        validate_budget(5000, 100000, "2030-01-01", "stopTime")
    with pytest.raises(MetaMarketingError, match="stopTime is required"):
        validate_budget(None, 100000, None, "stopTime")
    with pytest.raises(MetaMarketingError, match="positive"):
        validate_budget(0, None, None, "stopTime")
