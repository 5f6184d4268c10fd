"""Configuration adapters."""

from bahn_route.adapters.config.app_config import AppConfig
from bahn_route.adapters.config.route_file_loader import RouteFileLoader

__all__ = ["AppConfig", "RouteFileLoader"]
