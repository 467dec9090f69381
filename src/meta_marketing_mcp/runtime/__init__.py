# Copyright (C) 2025 ArmaVita LLC
# SPDX-License-Identifier: AGPL-3.0-only

"""Runtime orchestration package for meta-marketing-mcp."""

from .bootstrap import run

__all__ = ["run"]
