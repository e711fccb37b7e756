"""Script to check a Lavalink application.yml before starting the host."""

import argparse
import logging
import sys

from lavasrc.core.config import load_settings, validate_settings
from lavasrc.core.errors import LavaSrcError
from lavasrc.services.backend_status import build_report
from lavasrc.services.registration import LavaSrcPlugin


def _format_row(status) -> str:
    caps = status.capabilities
    row = (
        f"{status.display_name:<14} enabled={str(status.enabled).lower():<5} "
        f"source={caps.source.value:<15} search={caps.search.value:<15} "
        f"lyrics={caps.lyrics.value}"
    )
    if status.requires:
        row += f" (requires {status.requires})"
    return row


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Validate LavaSrc plugin configuration")
    parser.add_argument("--config", required=True, help="Path to Lavalink application.yml")
    parser.add_argument("--json", action="store_true", help="Print the status report as JSON")
    args = parser.parse_args(argv)

    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("lavasrc").setLevel(logging.INFO)

    try:
        settings = load_settings(args.config)
        validate_settings(settings)
        # Construct without registering; catches anything the backends reject
        LavaSrcPlugin(settings)
    except LavaSrcError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    report = build_report(settings)
    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        for status in report.backends:
            print(_format_row(status))
    return 0


if __name__ == "__main__":
    sys.exit(main())
