from __future__ import annotations
import argparse, json, logging, sys
from pydantic import ValidationError
from .config import TrackerConfig
from .errors import TrackerError
from .models.common import DEFAULT_PORT
from .session import TrackerSession

logger = logging.getLogger("hltracker")

def _configure_logging(verbosity: int):
    level = logging.WARNING if verbosity <= 0 else logging.INFO if verbosity == 1 else logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

def cmd_list(args) -> int:
    try:
        cfg = TrackerConfig.from_env(
            host=args.host, port=args.port, timeout=args.timeout, encoding=args.encoding,
        )
    except ValidationError as e:
        print(f"error: invalid settings: {e}", file=sys.stderr)
        return 2

    try:
        with TrackerSession.from_config(cfg) as session:
            listing = session.run_listing(cfg.timeout)
    except (TrackerError, OSError) as e:
        logger.debug("tracker query failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(listing.model_dump(mode="json"), indent=2))
    else:
        sys.stdout.write(listing.to_table())
    return 0

def build_parser():
    p = argparse.ArgumentParser(prog="hltracker", description="List the servers registered on a Hotline tracker")
    p.add_argument("host", help="tracker hostname, e.g. hltracker.com")
    p.add_argument("--port", type=int, default=None, help=f"tracker port (default {DEFAULT_PORT})")
    p.add_argument("--timeout", type=float, default=None, help="overall deadline in seconds (default 10)")
    p.add_argument("--encoding", default=None, help="legacy text encoding (default mac_roman)")
    p.add_argument("--json", action="store_true", help="print the listing as JSON instead of a table")
    p.add_argument("-v", "--verbose", action="count", default=0, help="more logging (-vv for debug)")
    p.set_defaults(func=cmd_list)
    return p

def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)
    _configure_logging(ns.verbose)
    return ns.func(ns)


if __name__ == "__main__":
    raise SystemExit(main())
