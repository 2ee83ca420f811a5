"""AWS integration helpers for delambda."""

from .clients import AWSClients, build_client_config, get_proxy_url

__all__ = ["AWSClients", "build_client_config", "get_proxy_url"]
