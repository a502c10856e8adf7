from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .logger import apply_session_settings, logger
from .options import OptionError, SessionOptions, render_value
from .text import center_string
from .tokens import split_compound


def _load_options(rcfile: str | None) -> SessionOptions:
    opts = SessionOptions.from_environment()
    if rcfile:
        opts.rc_file = Path(rcfile)
    opts.load()
    apply_session_settings(
        logger, verbose=opts.verbose, silent=opts.silent, color=opts.color
    )
    return opts


def cmd_split(args):
    lines = sys.stdin if args.line == "-" else [args.line]
    for line in lines:
        res = split_compound(line.rstrip("\n"))
        logger.debug("Split %r into %d identifiers", line, len(res))
        print(json.dumps(res, ensure_ascii=False))


def cmd_center(args):
    print(f"|{center_string(args.text, args.width)}|")


def cmd_options(args):
    opts = _load_options(args.rcfile)
    table = Table(title=f"Options ({opts.rc_file})")
    table.add_column("name")
    table.add_column("value")
    for name in opts.property_names():
        table.add_row(name, render_value(opts.get(name)))
    Console().print(table)


def cmd_set(args):
    opts = _load_options(args.rcfile)
    try:
        opts.set_strict(args.name, args.value)
    except OptionError as exc:
        logger.error("Error setting option %s: %s", args.name, exc)
        return 1
    path = opts.save()
    logger.info("%s=%s saved to %s", args.name.lower(), opts.get(args.name), path)
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="sqlident",
        description="Split SQL shell input into compound identifiers",
    )
    sub = p.add_subparsers(dest="cmd", required=True)
    p_s = sub.add_parser("split", help="Split a line into compound identifiers (JSON)")
    p_s.add_argument("line", help="Input line, or '-' to read lines from stdin")
    p_s.set_defaults(func=cmd_split)
    p_c = sub.add_parser("center", help="Center text in a fixed-width field")
    p_c.add_argument("text")
    p_c.add_argument("width", type=int)
    p_c.set_defaults(func=cmd_center)
    p_o = sub.add_parser("options", help="Show session options")
    p_o.add_argument("--rcfile", default=None, help="Properties file to read")
    p_o.set_defaults(func=cmd_options)
    p_set = sub.add_parser("set", help="Set a session option and save it")
    p_set.add_argument("--rcfile", default=None, help="Properties file to update")
    p_set.add_argument("name")
    p_set.add_argument("value")
    p_set.set_defaults(func=cmd_set)
    args = p.parse_args(argv)
    return args.func(args) or 0


if __name__ == "__main__":
    sys.exit(main())
