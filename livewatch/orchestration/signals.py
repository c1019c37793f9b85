import asyncio
import logging
import signal
from typing import Iterable, Optional

from livewatch.metrics.registry import shutdown_signals_total

log = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class SignalListener:
    """Forwards termination signals onto a cancellation event.

    Signal handlers only enqueue the signal; a listener task drains the queue,
    logs each receipt and sets ``cancel``. Setting an already-set event is a
    no-op, so repeated signals never start a second shutdown.
    """

    def __init__(self, cancel: asyncio.Event, signals: Iterable[signal.Signals] = SHUTDOWN_SIGNALS):
        self.cancel = cancel
        self.signals = tuple(signals)
        self._queue: "asyncio.Queue[signal.Signals]" = asyncio.Queue()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._task: Optional[asyncio.Task] = None
        self._previous = {}

    def notify(self, sig: signal.Signals):
        self._queue.put_nowait(sig)

    def _from_thread(self, signum, frame):
        self._loop.call_soon_threadsafe(self.notify, signal.Signals(signum))

    def start(self):
        self._loop = asyncio.get_running_loop()
        for sig in self.signals:
            try:
                self._loop.add_signal_handler(sig, self.notify, sig)
            except NotImplementedError:
                # no add_signal_handler on this platform (Windows)
                self._previous[sig] = signal.signal(sig, self._from_thread)
        self._task = asyncio.create_task(self._listen())

    async def _listen(self):
        while True:
            sig = await self._queue.get()
            shutdown_signals_total.labels(signal=sig.name).inc()
            log.info("%s signal. Shutdown started.", sig.name)
            self.cancel.set()
            self._queue.task_done()

    async def drained(self):
        await self._queue.join()

    async def stop(self):
        for sig in self.signals:
            if sig in self._previous:
                signal.signal(sig, self._previous.pop(sig))
            elif self._loop is not None:
                self._loop.remove_signal_handler(sig)
        if self._task is not None:
            # log every signal that arrived before the handlers were removed
            await self.drained()
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def __aenter__(self):
        self.start()
        return self

    async def __aexit__(self, *exc):
        await self.stop()
