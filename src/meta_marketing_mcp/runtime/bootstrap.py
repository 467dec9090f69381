# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Server bootstrap entrypoints for meta-marketing-mcp."""

from meta_marketing_mcp.core.mcp_runtime import main as _main


def run() -> int:
    """Run the meta-marketing-mcp process."""
    return _main()
