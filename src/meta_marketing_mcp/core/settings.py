# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Process configuration read from the environment once at start-up."""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .graph_constants import DEFAULT_GRAPH_API_VERSION, normalize_graph_api_version


@dataclass(frozen=True)
class MetaSettings:
    access_token: str
    ad_account_id: str
    api_version: str = DEFAULT_GRAPH_API_VERSION

    def with_overrides(self, ad_account_id: Optional[str] = None, api_version: Optional[str] = None) -> "MetaSettings":
        updated = self
        if ad_account_id:
            updated = replace(updated, ad_account_id=ad_account_id.strip())
        if api_version:
            updated = replace(updated, api_version=normalize_graph_api_version(api_version))
        return updated


def load_settings(environ: Optional[Mapping[str, str]] = None) -> MetaSettings:
    env = os.environ if environ is None else environ
    return MetaSettings(
        access_token=env.get("FB_ACCESS_TOKEN", "").strip(),
        ad_account_id=env.get("FB_AD_ACCOUNT_ID", "").strip(),
        api_version=normalize_graph_api_version(env.get("FB_API_VERSION", DEFAULT_GRAPH_API_VERSION)),
    )
