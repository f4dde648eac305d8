#  Copyright ©  2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/
import argparse
import json
import sys
from typing import *

from .exceptions import SourceUnavailable, SourceUnparsable
from .logger import init_logging
from .settings import init_config


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="gigapi", description="Resolve and print the GigAPI configuration")
    parser.add_argument(
        "-c", "--config",
        type=str,
        default="",
        help="configuration file (.toml, .yaml, .yml or .json); environment only if omitted",
    )
    parser.add_argument(
        "--show-secrets", action="store_true", help="do not mask passwords, secrets and URL credentials"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="increase logging verbosity"
    )
    parser.add_argument(
        "--json-logs", action="store_true", help="emit log records on stderr as JSON lines"
    )
    args = parser.parse_args(argv)

    init_logging("debug" if args.verbose else "warn", json_output=args.json_logs)
    try:
        store = init_config(args.config)
    except (SourceUnavailable, SourceUnparsable) as e:
        print(f"gigapi: {e}", file=sys.stderr)
        return 1

    json.dump({
        "source": store.source,
        "config": store.config.as_dict(redact=not args.show_secrets),
        "issues": [str(i) for i in store.issues],
    }, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
