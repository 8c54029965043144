from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

import requests


@dataclass(frozen=True)
class HttpConfig:
    timeout_s: int = 60
    sleep_s: float = 0.0  # polite delay between requests
    user_agent: str = "NorwayPolls scraper (+https://www.pollofpolls.no)"


class PollsHttpClient:
    def __init__(self, config: Optional[HttpConfig] = None) -> None:
        self.config = config or HttpConfig()
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": self.config.user_agent,
                "Accept": "text/html,*/*",
            }
        )

    def get_html(self, url: str, encoding: Optional[str] = None) -> str:
        """
        GET a URL and return HTML text.

        Anything but a 200 raises requests.HTTPError. pollofpolls.no serves
        ISO-8859-1 without always saying so, so callers can force the encoding.
        """
        resp = self.session.get(url, timeout=self.config.timeout_s)
        if resp.status_code != 200:
            resp.raise_for_status()
            raise requests.HTTPError(
                f"request failed - {resp.status_code}: {url}", response=resp
            )
        if self.config.sleep_s:
            time.sleep(self.config.sleep_s)

        if encoding:
            return resp.content.decode(encoding)
        return resp.text
