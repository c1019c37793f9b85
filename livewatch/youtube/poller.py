import asyncio
import logging
import time
from enum import Enum
from typing import List, Optional

from .api_client import SearchError, YouTubeClient
from .models import LiveItem
from livewatch.config.settings import WatchConfig, settings
from livewatch.metrics.registry import (
    poll_duration_seconds, polls_total, poll_errors_total, last_poll_timestamp,
    live_items, poller_state, POLLER_STATE_CODES,
)

log = logging.getLogger(__name__)


class LoopState(str, Enum):
    IDLE = "idle"
    WAITING = "waiting"
    POLLING = "polling"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


class LiveSearch:
    """Runs one live search per call and logs what came back."""

    def __init__(self, client: YouTubeClient):
        self.client = client

    async def poll_once(self, config: WatchConfig) -> List[LiveItem]:
        polls_total.inc()
        start = time.monotonic()
        try:
            response = await asyncio.to_thread(self.client.search_live, config.channel)
        finally:
            poll_duration_seconds.observe(time.monotonic() - start)
        log.debug("Search response channel=%s: %r", config.channel, response)

        try:
            raw_items = response.get("items") or []
            if not isinstance(raw_items, list):
                raise ValueError(f"items is not a list: {raw_items!r}")
            items = [LiveItem.from_search_result(it) for it in raw_items]
        except (AttributeError, ValueError) as e:
            raise SearchError(f"malformed search response for {config.channel}: {e}") from e
        last_poll_timestamp.set_to_current_time()
        live_items.set(len(items))
        if not items:
            log.info("No livestreams")
            return items
        log.info("%d live item(s) for %s", len(items), config.channel)
        for item in items:
            log.info("Live video=%s title=%r url=%s", item.video_id, item.title, item.url)
        return items


class Poller:
    def __init__(self, search, interval: Optional[float] = None):
        self.search = search
        self.interval = settings.poll_interval_sec if interval is None else interval
        if self.interval <= 0:
            raise ValueError(f"poll interval must be positive, got {self.interval}")
        self.state = LoopState.IDLE
        self.polls = 0

    def _set_state(self, state: LoopState):
        self.state = state
        poller_state.set(POLLER_STATE_CODES[state.value])

    async def _wait(self, cancel: asyncio.Event) -> bool:
        # True when cancellation ended the wait before the period elapsed
        try:
            await asyncio.wait_for(cancel.wait(), timeout=self.interval)
        except asyncio.TimeoutError:
            return False
        return True

    async def run(self, config: WatchConfig, cancel: asyncio.Event):
        """Poll every interval until ``cancel`` is set.

        Errors raised by the search end the loop and propagate unchanged. A
        poll that is in flight when cancellation arrives runs to completion.
        """
        self._set_state(LoopState.WAITING)
        while not cancel.is_set():
            if await self._wait(cancel):
                break
            self._set_state(LoopState.POLLING)
            self.polls += 1
            try:
                await self.search.poll_once(config)
            except Exception:
                poll_errors_total.inc()
                self._set_state(LoopState.TERMINATED)
                raise
            if cancel.is_set():
                break
            self._set_state(LoopState.WAITING)
        self._set_state(LoopState.SHUTTING_DOWN)
        log.info("Poll loop stopped after %d poll(s)", self.polls)
        self._set_state(LoopState.TERMINATED)
