"""AWS session and client construction.

All service clients share one session and one botocore ``Config`` so the
region, profile, retry policy and proxy settings stay consistent.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from ..exceptions import ClientCreationError

logger = logging.getLogger(__name__)

# Checked in order; HTTPS wins over HTTP, upper case over lower case.
PROXY_ENV_VARS = ("HTTPS_PROXY", "https_proxy", "HTTP_PROXY", "http_proxy")


def get_proxy_url(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the proxy URL from the environment, or None.

    Values without a scheme and host are skipped in favor of the next
    variable.
    """
    env = os.environ if environ is None else environ
    for name in PROXY_ENV_VARS:
        value = env.get(name)
        if not value:
            continue
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.hostname:
            logger.warning(f"Ignoring malformed proxy URL in {name}")
            continue
        return value
    return None


def build_client_config(
    max_retries: int = 10, environ: Optional[Mapping[str, str]] = None
) -> Config:
    """Build the botocore config shared by every client."""
    options: Dict[str, Any] = {
        "retries": {"max_attempts": max_retries, "mode": "standard"},
    }
    proxy_url = get_proxy_url(environ)
    if proxy_url:
        options["proxies"] = {"http": proxy_url, "https": proxy_url}
    return Config(**options)


class AWSClients:
    """Lambda, CloudWatch Logs and CloudFormation clients for one session."""

    def __init__(
        self,
        region: Optional[str] = None,
        profile: Optional[str] = None,
        max_retries: int = 10,
        session: Optional[boto3.Session] = None,
    ):
        try:
            if session is None:
                session = boto3.Session(profile_name=profile, region_name=region)
            self.session = session
            self.config = build_client_config(max_retries)

            self.lambda_client = self._client("lambda")
            self.logs_client = self._client("logs")
            self.cloudformation_client = self._client("cloudformation")
        except BotoCoreError as e:
            raise ClientCreationError(str(e)) from e

        logger.info(
            f"Initialized AWS clients (region={self.session.region_name}, "
            f"profile={profile or 'default'})"
        )

    def _client(self, service_name: str) -> Any:
        return self.session.client(service_name, config=self.config)

    @property
    def region(self) -> Optional[str]:
        return self.session.region_name
