# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared constants for Graph API addressing."""

import re

DEFAULT_GRAPH_API_VERSION = "v22.0"
GRAPH_API_HOST = "graph.facebook.com"


def normalize_graph_api_version(raw_version: str) -> str:
    """Normalize API version to vNN.N format, with safe fallback."""
    if not raw_version:
        return DEFAULT_GRAPH_API_VERSION

    candidate = raw_version.strip()
    if not candidate:
        return DEFAULT_GRAPH_API_VERSION

    if not candidate.startswith("v"):
        candidate = f"v{candidate}"

    if not re.match(r"^v\d+\.\d+$", candidate):
        return DEFAULT_GRAPH_API_VERSION

    return candidate


def graph_api_base(api_version: str, host: str = GRAPH_API_HOST) -> str:
    return f"https://{host}/{normalize_graph_api_version(api_version)}"
