"""A minimal browser-history model: a stack of URLs."""
import logging
from typing import List, Optional

import httpx

logger = logging.getLogger(__name__)


class BrowserHistory:
    def __init__(self, url: str = "/"):
        self.entries: List[str] = [url]

    @property
    def current(self) -> str:
        return self.entries[-1]

    @property
    def url(self) -> httpx.URL:
        return httpx.URL(self.current)

    def param(self, name: str) -> Optional[str]:
        return self.url.params.get(name)

    def push(self, url: str) -> None:
        self.entries.append(url)
        logger.debug("navigate -> %s", url)

    def replace(self, url: str) -> None:
        """Swap the current entry in place; does not navigate."""
        self.entries[-1] = url

    def back(self) -> str:
        if len(self.entries) > 1:
            self.entries.pop()
        return self.current
