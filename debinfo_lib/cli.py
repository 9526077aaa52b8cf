# Copyright (c) TurnKey GNU/Linux - http://www.turnkeylinux.org
#
# This file is part of Debinfo
#
# Debinfo is free software; you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by the
# Free Software Foundation; either version 3 of the License, or (at your
# option) any later version.

"""Print control information of Debian binary packages

Environment variables:
    DEBINFO_LOG_LEVEL   Log level: debug, info, warning (default), error
    DEBUG               Same as DEBINFO_LOG_LEVEL=debug
"""

import argparse
import logging
import sys
from typing import Optional

from . import DebinfoError, get_control_info, loglevel, LOG_FORMAT
from .control import FIELDS
from . import cmd_info, utils


def do_control(args: argparse.Namespace) -> None:
    cmd_info.print_control(args.package)


def do_info(args: argparse.Namespace) -> None:
    cmd_info.print_info(get_control_info(args.package))


def do_field(args: argparse.Namespace) -> None:
    if args.key not in FIELDS:
        utils.fatal(f"unknown field {args.key!r}"
                    f" (choose from {', '.join(FIELDS)})")
    cmd_info.print_field(get_control_info(args.package), args.key)


def main(argv: Optional[list[str]] = None) -> None:
    logging.basicConfig(format=LOG_FORMAT, level=loglevel)

    parser = argparse.ArgumentParser(
            prog="debinfo", description=__doc__,
            formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument(
            "--debug", action="store_true",
            help="don't catch errors, show traceback instead")
    subparsers = parser.add_subparsers(dest="cmd", required=True)

    parser_control = subparsers.add_parser(
            "control", help="print raw ./control file of package")
    parser_control.add_argument("package", help="path to .deb file")
    parser_control.set_defaults(func=do_control)

    parser_info = subparsers.add_parser(
            "info", help="print parsed control fields of package")
    parser_info.add_argument("package", help="path to .deb file")
    parser_info.set_defaults(func=do_info)

    parser_field = subparsers.add_parser(
            "field", help="print a single control field of package")
    parser_field.add_argument("package", help="path to .deb file")
    parser_field.add_argument("key", help="control field, e.g. Version")
    parser_field.set_defaults(func=do_field)

    args = parser.parse_args(argv)

    try:
        args.func(args)
    except DebinfoError as e:
        if args.debug:
            raise
        utils.fatal(e)


if __name__ == "__main__":
    main(sys.argv[1:])
