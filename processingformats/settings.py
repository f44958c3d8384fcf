from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import List

from .messages import ENTITY_TYPES


@dataclass
class Settings:
    message_type: str = "traveltimerequest"
    paths: List[str] = field(default_factory=lambda: ["-"])
    echo: bool = False
    log_level: str = "INFO"


def parse_args() -> Settings:
    parser = argparse.ArgumentParser(description="Processing formats message validator")
    parser.add_argument("paths", nargs="*",
                        help="JSON files to validate, one message per file; '-' reads stdin")
    parser.add_argument("--type", dest="message_type", default="traveltimerequest",
                        type=str.lower, choices=sorted(ENTITY_TYPES),
                        help="Message type contained in the files")
    parser.add_argument("--echo", action="store_true",
                        help="Print the re-serialized JSON of every valid message")
    parser.add_argument("--log-level", default="INFO",
                        help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    args = parser.parse_args()

    paths = args.paths if args.paths else ["-"]
    return Settings(
        message_type=args.message_type,
        paths=paths,
        echo=args.echo,
        log_level=args.log_level.upper(),
    )
