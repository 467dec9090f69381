# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Fixed Graph field allowlists requested by each operation.

Downstream consumers rely on these exact key sets, so every operation asks for
an explicit list instead of the API default.
"""


def _fields(*names: str) -> str:
    return ",".join(names)


CAMPAIGN_CREATED_FIELDS = _fields(
    "id", "name", "objective", "status", "created_time", "start_time", "stop_time",
    "spend_cap", "special_ad_categories", "daily_budget", "lifetime_budget",
    "bid_strategy", "boosted_object_id", "buying_type", "promoted_object",
    "budget_remaining", "effective_status", "account_id", "adlabels",
    "is_skadnetwork_attribution",
)

CAMPAIGN_DETAIL_FIELDS = _fields(
    "id", "name", "objective", "status", "created_time", "start_time", "stop_time",
    "spend_cap", "special_ad_categories", "daily_budget", "lifetime_budget",
    "bid_strategy", "boosted_object_id", "buying_type", "promoted_object",
    "budget_remaining", "effective_status", "account_id", "adlabels",
    "is_skadnetwork_attribution", "updated_time", "configured_status",
    "can_use_spend_cap", "can_create_brand_lift_study", "source_campaign_id",
    "special_ad_category_country", "smart_promotion_type", "topline_id",
    "pacing_type", "budget_rebalance_flag", "optimization_goal",
)

CAMPAIGN_LIST_FIELDS = _fields(
    "id", "name", "objective", "status", "created_time", "start_time", "stop_time",
    "spend_cap", "special_ad_categories", "daily_budget", "lifetime_budget",
    "bid_strategy", "boosted_object_id", "buying_type", "promoted_object",
    "budget_remaining", "effective_status", "account_id", "adlabels",
    "is_skadnetwork_attribution", "updated_time",
)

ADSET_DETAIL_FIELDS = _fields(
    "id", "name", "campaign_id", "daily_budget", "lifetime_budget",
    "bid_amount", "bid_strategy", "billing_event", "optimization_goal",
    "targeting", "status", "start_time", "end_time", "created_time",
    "updated_time", "promoted_object", "attribution_spec",
    "pacing_type", "budget_remaining", "effective_status", "adlabels",
    "destination_type", "configured_status",
)

ADSET_CAMPAIGN_LIST_FIELDS = _fields(
    "id", "name", "campaign_id", "daily_budget", "lifetime_budget", "targeting", "status",
)

ADSET_ACCOUNT_LIST_FIELDS = _fields(
    "id", "name", "campaign_id", "daily_budget", "lifetime_budget",
    "bid_amount", "bid_strategy", "billing_event", "optimization_goal",
    "targeting", "status", "start_time", "end_time", "created_time",
    "updated_time", "promoted_object", "attribution_spec",
    "pacing_type", "budget_remaining", "effective_status",
)

AD_CREATED_FIELDS = _fields(
    "id", "name", "adset_id", "creative", "status", "tracking_specs", "bid_amount",
)

AD_DETAIL_FIELDS = _fields(
    "id", "name", "adset_id", "campaign_id", "status", "created_time", "updated_time",
    "effective_status", "configured_status", "bid_amount", "creative",
    "tracking_specs", "adlabels", "conversion_domain",
)

AD_ADSET_LIST_FIELDS = _fields("id", "name", "adset_id", "creative", "status")

AD_ACCOUNT_LIST_FIELDS = _fields(
    "id", "name", "adset_id", "campaign_id", "status", "created_time", "updated_time",
    "effective_status", "configured_status", "bid_amount", "creative",
)

CREATIVE_DETAIL_FIELDS = _fields(
    "id", "name", "title", "body", "image_url", "image_hash", "link_url",
    "object_story_id", "object_story_spec", "object_type", "url_tags",
    "video_id", "call_to_action_type", "link_og_id", "actor_id", "adlabels",
    "branded_content_sponsor_page_id", "instagram_actor_id", "instagram_permalink_url",
    "asset_feed_spec",
)

AVAILABLE_ACCOUNT_FIELDS = _fields(
    "id", "name", "account_id", "account_status", "amount_spent", "business_name",
    "business", "currency", "owner", "spend_cap", "timezone_name", "timezone_offset_hours_utc",
)

ACCOUNT_DETAIL_FIELDS = _fields(
    "id", "name", "account_id", "account_status", "age", "capabilities",
    "created_time", "currency", "timezone_id", "timezone_name", "timezone_offset_hours_utc",
    "amount_spent", "balance", "business", "business_city", "business_country_code",
    "business_name", "business_state", "business_street", "business_street2",
)
