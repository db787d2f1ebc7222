import os

from rpc_cache.common.core.logging_config import setup_logging as common_setup_logging


def setup_logging():
    """
    Load the proxy's YAML logging config.
    """
    config_path = os.getenv("LOG_CONFIG_PATH", "config/proxy_log.yaml")
    common_setup_logging(config_path)
