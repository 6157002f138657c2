"""Entry point for cardstack CLI."""

import logging
import sys

from cardstack.cli import build_parser
from cardstack.cli._common import error
from cardstack.config import Settings
from cardstack.errors import CardstackError


def main(argv: list[str] | None = None) -> int:
    settings = Settings()

    parser = build_parser()
    args = parser.parse_args(argv)

    # Common options are only set when given on the command line
    opts = vars(args)
    opts.setdefault("json", False)
    opts.setdefault("verbose", False)
    if opts.get("data") is None:
        args.data = str(settings.data_path)

    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else settings.log_level,
    )

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except CardstackError as e:
        error(str(e), args.json)


if __name__ == "__main__":
    sys.exit(main())
