# Copyright (c) TurnKey GNU/Linux - http://www.turnkeylinux.org
#
# This file is part of Debinfo
#
# Debinfo is free software; you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by the
# Free Software Foundation; either version 3 of the License, or (at your
# option) any later version.

"""Parsing of Debian control file fields

Only single line fields are tracked. Description and any other field
spread over continuation lines is not parsed.
"""

import re
import dataclasses
from typing import Iterator

SEPARATOR = ": "

# control key -> record attribute
FIELDS = {
    "Package": "package",
    "Source": "source",
    "Version": "version",
    "Architecture": "architecture",
    "Maintainer": "maintainer",
    "Installed-Size": "installed_size",
    "Provides": "provides",
    "Section": "section",
    "Priority": "priority",
    "Homepage": "homepage",
}

_INTEGER = re.compile(r'[+-]?[0-9]+')
INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1


@dataclasses.dataclass(frozen=True)
class ControlInfo:
    """Fields parsed from a binary package's control file"""

    package: str = ""
    source: str = ""
    version: str = ""
    architecture: str = ""
    maintainer: str = ""
    installed_size: int = 0
    provides: str = ""
    section: str = ""
    priority: str = ""
    homepage: str = ""

    def items(self) -> Iterator[tuple[str, str | int]]:
        """Iterate (control key, value) pairs in field order"""
        for key, attr in FIELDS.items():
            yield key, getattr(self, attr)


def parse_int(value: str) -> int | None:
    """base 10 64-bit integer or None if <value> isn't one"""
    if not _INTEGER.fullmatch(value):
        return None
    i = int(value, 10)
    if not INT_MIN <= i <= INT_MAX:
        return None
    return i


def parse_control_info(control: str) -> ControlInfo:
    """parse control fields -> ControlInfo

    Never fails: malformed lines, unknown keys and bad integers are skipped.
    If a key repeats, the last occurrence wins.
    """
    fields: dict[str, str | int] = {}
    for line in control.split("\n"):
        if not line:
            continue
        if SEPARATOR not in line:
            continue
        key, value = line.split(SEPARATOR, 1)

        attr = FIELDS.get(key)
        if attr is None:
            continue

        if attr == "installed_size":
            size = parse_int(value)
            if size is not None:
                fields[attr] = size
        else:
            fields[attr] = value

    return ControlInfo(**fields)
