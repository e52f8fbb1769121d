# src/task_splitter/updates/checker.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_NUM_RE = re.compile(r"\d+")


@dataclass(frozen=True, slots=True)
class UpdateInfo:
    version: str
    download_url: str


def version_key(version: str) -> tuple[int, ...]:
    """Numeric comparison key: "v1.10.0" -> (1, 10, 0). Non-numeric parts are ignored."""
    return tuple(int(n) for n in _NUM_RE.findall(version))


def is_newer(candidate: str, current: str) -> bool:
    a, b = version_key(candidate), version_key(current)
    width = max(len(a), len(b))
    return a + (0,) * (width - len(a)) > b + (0,) * (width - len(b))


class UpdateChecker:
    """
    Polls the latest-release endpoint at most once per interval.

    Only reports; nothing is downloaded or installed. The last check time
    is kept in a small JSON file so the cadence survives restarts.
    """

    def __init__(
        self,
        *,
        current_version: str,
        releases_url: str,
        state_path: str | Path,
        interval_seconds: int = 86400,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.current_version = current_version
        self._releases_url = releases_url
        self._state_path = Path(state_path)
        self._interval = interval_seconds
        self._transport = transport

    def _last_check(self) -> float | None:
        try:
            data = json.loads(self._state_path.read_text("utf-8"))
            return float(data["last_check"])
        except (OSError, ValueError, KeyError, TypeError):
            return None

    def _record_check(self, now: float) -> None:
        try:
            self._state_path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._state_path.with_suffix(".tmp")
            tmp.write_text(json.dumps({"last_check": now}), "utf-8")
            os.replace(tmp, self._state_path)
        except OSError:
            logger.exception("Failed to record update check time to %s", self._state_path)

    def is_due(self, now: float | None = None) -> bool:
        now = time.time() if now is None else now
        last = self._last_check()
        return last is None or now - last >= self._interval

    async def check(self, *, force: bool = False, now: float | None = None) -> UpdateInfo | None:
        now = time.time() if now is None else now
        if not force and not self.is_due(now):
            logger.debug("Update check skipped (checked recently)")
            return None
        # Recorded before the request: a failing endpoint is not hammered either.
        self._record_check(now)

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=15.0) as http:
                resp = await http.get(
                    self._releases_url,
                    headers={"Accept": "application/vnd.github.v3+json"},
                )
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.info("Update check failed (%s)", e.__class__.__name__)
            return None

        return self._parse_release(data)

    def _parse_release(self, data: Any) -> UpdateInfo | None:
        if not isinstance(data, dict) or not isinstance(data.get("tag_name"), str):
            logger.info("Update check: unexpected release payload")
            return None

        latest = data["tag_name"].replace("v", "")
        if not is_newer(latest, self.current_version):
            logger.info("Up to date (current=%s latest=%s)", self.current_version, latest)
            return None

        url = None
        with contextlib.suppress(AttributeError, IndexError, KeyError, TypeError):
            url = data["assets"][0]["browser_download_url"]
        if not isinstance(url, str) or not url:
            logger.info("Update %s available but has no downloadable asset", latest)
            return None

        logger.info("Update available: %s", latest)
        return UpdateInfo(version=latest, download_url=url)
