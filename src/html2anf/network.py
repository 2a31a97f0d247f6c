#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2anf/network.py
"""Remote resource existence checks.

Components only claim image nodes whose source can actually be fetched.
This module probes http(s) URLs with a HEAD request and local paths on the
filesystem.
"""

import logging
import os
from pathlib import Path
from typing import Callable
from urllib.parse import unquote, urlparse

import httpx

from html2anf.constants import DEFAULT_PROBE_TIMEOUT, DEFAULT_USER_AGENT, ENV_DISABLE_NETWORK, ENV_USER_AGENT

logger = logging.getLogger(__name__)

ResourceProbe = Callable[[str], bool]


def is_network_disabled() -> bool:
    """Check if network access is globally disabled via environment variable.

    Returns
    -------
    bool
        True if network access should be disabled, False otherwise

    """
    return os.getenv(ENV_DISABLE_NETWORK, "").lower() in ("true", "1", "yes", "on")


def remote_file_exists(url: str, timeout: float = DEFAULT_PROBE_TIMEOUT, user_agent: str | None = None) -> bool:
    """Check whether the resource referenced by ``url`` exists.

    Parameters
    ----------
    url : str
        http(s) URL, ``file://`` URL or local path
    timeout : float
        Request timeout in seconds
    user_agent : str, optional
        User-Agent header; defaults to the environment override or the library default

    Returns
    -------
    bool
        True if the resource exists. Network failures, disabled network and
        unsupported schemes all report False.

    """
    if not url:
        return False

    parsed = urlparse(url)
    scheme = parsed.scheme.lower()

    if scheme == "file":
        return Path(unquote(parsed.path)).is_file()
    if scheme == "" and not url.startswith("//"):
        return Path(url).is_file()
    if url.startswith("//"):
        url = f"https:{url}"
        scheme = "https"
    if scheme not in ("http", "https"):
        logger.debug(f"Unsupported URL scheme for probe: {url[:100]}")
        return False

    if is_network_disabled():
        logger.debug(f"Network disabled, not probing {url[:100]}")
        return False

    headers = {"User-Agent": user_agent or os.getenv(ENV_USER_AGENT) or DEFAULT_USER_AGENT}
    try:
        response = httpx.head(url, timeout=timeout, follow_redirects=True, headers=headers)
    except httpx.HTTPError as e:
        logger.debug(f"Probe failed for {url[:100]}: {e}")
        return False

    return response.status_code < 400


__all__ = ["ResourceProbe", "is_network_disabled", "remote_file_exists"]
