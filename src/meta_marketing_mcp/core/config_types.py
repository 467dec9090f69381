# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Typed entity configurations accepted by the operation layer.

Tool arguments arrive as camelCase objects. ``from_payload`` maps their
top-level keys onto dataclass fields; nested free-form structures such as
targeting stay untouched until request shaping runs them through the naming
adapter. Every field defaults to ``None`` so the same type serves both create
(required fields checked by the operation) and sparse update.
"""

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple

from .errors import validation_error
from .log_setup import logger
from .naming import decamelize_key

_STATUS_VALUES = ("ACTIVE", "PAUSED", "DELETED", "ARCHIVED")


def _check_money(field_name: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise validation_error(f"{field_name} must be an integer amount in cents")


def _build(cls, payload: Any, nested: Optional[Dict[str, Any]] = None):
    if not isinstance(payload, Mapping):
        raise validation_error(f"{cls.__name__} must be an object")

    known = {item.name for item in fields(cls)}
    values: Dict[str, Any] = {}
    for raw_key, value in payload.items():
        key = decamelize_key(raw_key)
        key = cls._ALIASES.get(key, key)
        if key not in known:
            logger.debug("Ignoring unknown %s key=%s", cls.__name__, raw_key)
            continue
        values[key] = value

    for key in cls._MONEY_FIELDS:
        _check_money(key, values.get(key))

    status = values.get("status")
    if status is not None and status not in _STATUS_VALUES:
        raise validation_error(f"status must be one of {', '.join(_STATUS_VALUES)}")

    for key, builder in (nested or {}).items():
        if values.get(key) is not None:
            values[key] = builder(values[key])

    return cls(**values)


def present_fields(config: Any) -> Dict[str, Any]:
    """Fields the caller explicitly supplied, in declaration order."""
    return {item.name: getattr(config, item.name) for item in fields(config) if getattr(config, item.name) is not None}


def require_text(value: Optional[str], message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise validation_error(message)
    return value


def validate_budget(
    daily_budget: Optional[int],
    lifetime_budget: Optional[int],
    end_time: Optional[str],
    end_field: str,
    require_end_time: bool = True,
) -> None:
    """Daily and lifetime budgets are exclusive; lifetime needs an end time."""
    for label, amount in (("dailyBudget", daily_budget), ("lifetimeBudget", lifetime_budget)):
        _check_money(label, amount)
        if amount is not None and amount <= 0:
            raise validation_error(f"{label} must be a positive amount in cents")

    if daily_budget is not None and lifetime_budget is not None:
        raise validation_error("Cannot set both dailyBudget and lifetimeBudget")

    if require_end_time and lifetime_budget is not None and not end_time:
        raise validation_error(f"{end_field} is required when lifetimeBudget is provided")


@dataclass(frozen=True)
class CampaignConfig:
    name: Optional[str] = None
    objective: Optional[str] = None
    status: Optional[str] = None
    special_ad_categories: Optional[List[str]] = None
    spend_cap: Optional[int] = None
    bid_strategy: Optional[str] = None
    daily_budget: Optional[int] = None
    lifetime_budget: Optional[int] = None
    campaign_budget_optimization: Optional[bool] = None
    min_roas_target_value: Optional[int] = None
    ad_labels: Optional[List[Dict[str, Any]]] = None
    start_time: Optional[str] = None
    stop_time: Optional[str] = None
    buying_type: Optional[str] = None
    boosted_object_id: Optional[str] = None
    promoted_object: Optional[Dict[str, Any]] = None
    is_skadnetwork_attribution: Optional[bool] = None

    _ALIASES: ClassVar[Dict[str, str]] = {"adlabels": "ad_labels"}
    _MONEY_FIELDS: ClassVar[Tuple[str, ...]] = ("spend_cap", "daily_budget", "lifetime_budget")

    @classmethod
    def from_payload(cls, payload: Any) -> "CampaignConfig":
        return _build(cls, payload)


@dataclass(frozen=True)
class AdSetConfig:
    name: Optional[str] = None
    campaign_id: Optional[str] = None
    status: Optional[str] = None
    optimization_goal: Optional[str] = None
    billing_event: Optional[str] = None
    bid_amount: Optional[int] = None
    bid_strategy: Optional[str] = None
    bid_constraints: Optional[Dict[str, Any]] = None
    daily_budget: Optional[int] = None
    lifetime_budget: Optional[int] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    targeting: Optional[Dict[str, Any]] = None
    promoted_object: Optional[Dict[str, Any]] = None
    destination_type: Optional[str] = None
    attribution_spec: Optional[List[Dict[str, Any]]] = None
    pacing_type: Optional[List[str]] = None
    adset_schedule: Optional[List[Dict[str, Any]]] = None
    use_new_app_click: Optional[bool] = None
    ad_labels: Optional[List[Dict[str, Any]]] = None

    _ALIASES: ClassVar[Dict[str, str]] = {
        "adlabels": "ad_labels",
        "ad_schedules": "adset_schedule",
        "ad_set_schedule": "adset_schedule",
    }
    _MONEY_FIELDS: ClassVar[Tuple[str, ...]] = ("bid_amount", "daily_budget", "lifetime_budget")

    @classmethod
    def from_payload(cls, payload: Any) -> "AdSetConfig":
        return _build(cls, payload)


@dataclass(frozen=True)
class AdCreativeConfig:
    name: Optional[str] = None
    title: Optional[str] = None
    body: Optional[str] = None
    link_url: Optional[str] = None
    image_url: Optional[str] = None
    image_hash: Optional[str] = None
    video_id: Optional[str] = None
    call_to_action_type: Optional[str] = None
    url_tags: Optional[str] = None
    object_story_id: Optional[str] = None
    object_story_spec: Optional[Dict[str, Any]] = None
    asset_feed_spec: Optional[Dict[str, Any]] = None
    object_type: Optional[str] = None

    _ALIASES: ClassVar[Dict[str, str]] = {"call_to_action": "call_to_action_type"}
    _MONEY_FIELDS: ClassVar[Tuple[str, ...]] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> "AdCreativeConfig":
        return _build(cls, payload)


@dataclass(frozen=True)
class AdConfig:
    name: Optional[str] = None
    adset_id: Optional[str] = None
    status: Optional[str] = None
    creative_id: Optional[str] = None
    creative: Optional[AdCreativeConfig] = None
    tracking_specs: Optional[List[Dict[str, Any]]] = None
    bid_amount: Optional[int] = None
    conversion_domain: Optional[str] = None
    ad_labels: Optional[List[Dict[str, Any]]] = None

    _ALIASES: ClassVar[Dict[str, str]] = {"adlabels": "ad_labels", "ad_set_id": "adset_id"}
    _MONEY_FIELDS: ClassVar[Tuple[str, ...]] = ("bid_amount",)

    @classmethod
    def from_payload(cls, payload: Any) -> "AdConfig":
        return _build(cls, payload, nested={"creative": _creative_from_payload})


def _creative_from_payload(value: Any) -> AdCreativeConfig:
    if isinstance(value, AdCreativeConfig):
        return value
    return AdCreativeConfig.from_payload(value)
