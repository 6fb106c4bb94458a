"""Command line entry point.

Behavior:
    1. Initialize logging (INFO, DEBUG with --debug)
    2. Prompt for service / AWB number when not given as options (q to quit)
    3. Fetch, extract and normalize the tracking tables
    4. Print the envelope as JSON; with --dump-dir also write it to a file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from core.assemble import GRANULARITIES, GRANULARITY_RECORDS
from core.console import Console
from core.dump import dump_envelope
from core.errors import ScrapeError
from core.logger import Logger, setup_logging
from core.scrape import Scrape
from providers import available_sources


log = Logger.bind(__name__)


class App:

    def __init__(self, scraper: Optional[Scrape] = None):
        self._scraper = scraper

    @property
    def scraper(self) -> Scrape:
        if self._scraper is None:
            self._scraper = Scrape()
        return self._scraper

    # --- interactive helpers ---
    def getService(self, service: Optional[str]) -> Optional[str]:
        if service:
            return service
        return Console.select('service', available_sources())

    def getAwb(self, awb: Optional[str]) -> Optional[str]:
        if awb:
            return awb
        return Console.input_str('AWB number (e.g. 05700359741)')

    def run(self, args: argparse.Namespace) -> int:
        service = self.getService(args.service)
        if not service:
            log.debug("No service selected, exit.")
            return 0
        awb = self.getAwb(args.awb)
        if not awb:
            log.debug("No AWB number entered, exit.")
            return 0
        try:
            result = self.scraper.run(service, awb, granularity=args.granularity)
        except ScrapeError as e:
            log.error(f"scrape failed kind={e.kind} error={e.message}")
            return 1
        envelope = result['data']
        print(json.dumps(envelope, ensure_ascii=False, indent=2))
        log.info(f"url={result['url']}")
        if args.dump_dir:
            path = dump_envelope(envelope, dump_dir=Path(args.dump_dir))
            log.info(f"{path} written.")
        return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description='Scrape AWB cargo tracking tables into JSON records')
    p.add_argument('--service', help=f"tracking source key or code ({', '.join(available_sources())})")
    p.add_argument('--awb', help='AWB number, e.g. 05700359741')
    p.add_argument('--granularity', choices=GRANULARITIES, default=GRANULARITY_RECORDS)
    p.add_argument('--dump-dir', help='also write the envelope JSON into this directory')
    p.add_argument('--debug', action='store_true')
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO)
    return App().run(args)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
