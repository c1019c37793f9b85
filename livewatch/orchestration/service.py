import asyncio
import json
import logging
import sys
from prometheus_client import start_http_server
from livewatch.config.settings import ConfigError, Settings, load_config, settings
from livewatch.youtube.api_client import YouTubeClient
from livewatch.youtube.poller import LiveSearch, Poller
from livewatch.orchestration.signals import SignalListener

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2
EXIT_POLL_ERROR = 3

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record):
        base = {
            'time': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'msg': record.getMessage(),
        }
        if record.exc_info:
            base['exc'] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(fmt: str = "plain", level: str = "INFO"):
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if fmt == 'json' else logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


async def main(cfg: Settings = settings) -> int:
    try:
        config = load_config(cfg.config_path)
    except ConfigError as e:
        log.error("Cannot start: %s", e)
        return EXIT_CONFIG_ERROR

    log.info("Watch %r", config.channel)
    if cfg.metrics_port:
        start_http_server(cfg.metrics_port)

    cancel = asyncio.Event()
    with YouTubeClient(config.api_key, timeout=cfg.http_timeout_sec) as client:
        poller = Poller(LiveSearch(client), cfg.poll_interval_sec)
        async with SignalListener(cancel):
            try:
                await poller.run(config, cancel)
            except Exception as e:
                log.exception("Polling stopped: %s", e)
                return EXIT_POLL_ERROR

    log.info("Clean shutdown")
    return EXIT_OK


async def check(cfg: Settings = settings) -> int:
    try:
        config = load_config(cfg.config_path)
    except ConfigError as e:
        log.error("Cannot start: %s", e)
        return EXIT_CONFIG_ERROR

    with YouTubeClient(config.api_key, timeout=cfg.http_timeout_sec) as client:
        try:
            items = await LiveSearch(client).poll_once(config)
        except Exception as e:
            log.error("Live check failed: %s", e)
            return EXIT_POLL_ERROR

    if not items:
        print(f"Channel {config.channel} is not live")
    for item in items:
        print(f"Channel {config.channel} live video id: {item.video_id} ({item.title}) {item.url}")
    return EXIT_OK


if __name__ == "__main__":
    configure_logging(settings.log_format, settings.log_level)
    sys.exit(asyncio.run(main()))
