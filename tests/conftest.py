"""Shared fixtures for the livewatch test suite."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

import pytest

from livewatch.config.settings import WatchConfig
from livewatch.youtube.models import LiveItem

API_KEY = "test-key"
CHANNEL = "UCtestchannel0000000000000"


class FakeSearch:
    """Stand-in poll executor.

    ``outcomes`` is consumed one entry per poll: a list is returned, an
    exception instance is raised. Once exhausted every poll returns ``[]``.
    ``on_poll`` runs after each poll with the 1-based poll number.
    """

    def __init__(
        self,
        outcomes: Optional[List[Union[List[LiveItem], BaseException]]] = None,
        delay: float = 0.0,
        on_poll: Optional[Callable[[int], Any]] = None,
    ) -> None:
        self.outcomes = list(outcomes or [])
        self.delay = delay
        self.on_poll = on_poll
        self.calls = 0
        self.in_flight = 0
        self.max_in_flight = 0

    async def poll_once(self, config: WatchConfig) -> List[LiveItem]:
        self.calls += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            outcome = self.outcomes.pop(0) if self.outcomes else []
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome
        finally:
            self.in_flight -= 1
            if self.on_poll is not None:
                self.on_poll(self.calls)


@pytest.fixture
def watch_config() -> WatchConfig:
    return WatchConfig(api_key=API_KEY, channel=CHANNEL)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"api_key": API_KEY, "channel": CHANNEL}), encoding="utf-8")
    return path


def search_item(video_id: str, title: str) -> dict:
    return {
        "kind": "youtube#searchResult",
        "id": {"kind": "youtube#video", "videoId": video_id},
        "snippet": {
            "title": title,
            "channelId": CHANNEL,
            "channelTitle": "Test Channel",
            "publishedAt": "2026-10-19T12:00:00Z",
            "liveBroadcastContent": "live",
        },
    }
