"""Public exports for meta-marketing-mcp core modules."""

from .client import MetaMarketingClient
from .config_types import AdConfig, AdCreativeConfig, AdSetConfig, CampaignConfig
from .dispatch import ToolDispatcher
from .errors import ErrorKind, MetaMarketingError, describe_error_code, normalize_error
from .graph_client import GraphRequestError, make_api_request
from .mcp_runtime import build_mcp_server, main
from .naming import camelize_keys, decamelize_keys
from .settings import MetaSettings, load_settings

__all__ = [
    "MetaMarketingClient",
    "ToolDispatcher",
    "build_mcp_server",
    "main",
    "CampaignConfig",
    "AdSetConfig",
    "AdConfig",
    "AdCreativeConfig",
    "ErrorKind",
    "MetaMarketingError",
    "GraphRequestError",
    "describe_error_code",
    "normalize_error",
    "make_api_request",
    "camelize_keys",
    "decamelize_keys",
    "MetaSettings",
    "load_settings",
]
