from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests


@dataclass
class HTTPClient:
    """One GET per call; upstream calls are never retried within a request."""

    user_agent: str
    timeout_s: float = 10
    extra_headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.s = requests.Session()
        self.s.headers.update(
            {
                "User-Agent": self.user_agent,
                "Accept": "application/json",
                **self.extra_headers,
            }
        )

    def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout_s: Optional[float] = None,
    ) -> Any:
        timeout = timeout_s if timeout_s is not None else self.timeout_s
        r = self.s.get(url, params=params, timeout=timeout)
        r.raise_for_status()
        return r.json()
