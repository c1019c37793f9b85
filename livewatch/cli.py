import asyncio
import argparse
import sys
from livewatch.config.settings import settings
from livewatch.orchestration.service import check, configure_logging, main as service_main


def _interval(value):
    seconds = float(value)
    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return seconds


def main(argv=None):
    parser = argparse.ArgumentParser(description="Watch a YouTube channel for livestreams")
    parser.add_argument("command", nargs="?", default="run", choices=["run", "check"], help="run the watcher or run a single live check")
    parser.add_argument("--config", help="path to config.json (overrides CONFIG_PATH)")
    parser.add_argument("--interval", type=_interval, help="seconds between polls (overrides POLL_INTERVAL_SEC)")
    args = parser.parse_args(argv)

    cfg = settings
    overrides = {}
    if args.config:
        overrides["config_path"] = args.config
    if args.interval is not None:
        overrides["poll_interval_sec"] = args.interval
    if overrides:
        cfg = settings.model_copy(update=overrides)

    configure_logging(cfg.log_format, cfg.log_level)
    if args.command == "check":
        return asyncio.run(check(cfg))
    # Long-running watcher; returns when a termination signal arrives or a poll fails
    return asyncio.run(service_main(cfg))

if __name__ == "__main__":
    sys.exit(main())
