import logging
from typing import Iterable, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")


class ImageHostPolicy:
    """Allow-list of image hosts.

    Entries are exact hostnames or ``*.example.com`` wildcards, which match
    any subdomain of ``example.com`` but not ``example.com`` itself.
    """

    def __init__(self, hosts: Iterable[str] = ()):
        self.hosts: Tuple[str, ...] = tuple(h.strip().lower() for h in hosts if h and h.strip())

    def allows(self, host: str) -> bool:
        host = host.lower().rstrip(".")
        for entry in self.hosts:
            if entry.startswith("*."):
                if host.endswith(entry[1:]):
                    return True
            elif host == entry:
                return True
        return False

    def resolve(self, url: Optional[str]) -> Optional[str]:
        if not url:
            return None
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL:
            logger.debug("dropping malformed image url %r", url)
            return None
        if parsed.scheme not in ALLOWED_SCHEMES or not parsed.host:
            return None
        if not self.allows(parsed.host):
            logger.debug("image host %s is not allow-listed", parsed.host)
            return None
        return url
