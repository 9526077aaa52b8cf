# Copyright (c) TurnKey GNU/Linux - http://www.turnkeylinux.org
#
# This file is part of Debinfo
#
# Debinfo is free software; you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by the
# Free Software Foundation; either version 3 of the License, or (at your
# option) any later version.

"""Extraction and parsing of control data from Debian binary packages"""

import os
from typing import Optional, Union
import logging

logger = logging.getLogger('debinfo')
# allow 'DEBUG' env var to override 'DEBINFO_LOG_LEVEL'
if 'DEBUG' in os.environ.keys():
    level = 'debug'
else:
    level = os.getenv('DEBINFO_LOG_LEVEL', '').lower()

if level == 'info':
    loglevel = logging.INFO
elif level == 'debug':
    loglevel = logging.DEBUG
elif level in ('', 'warn', 'warning'):
    loglevel = logging.WARNING
elif level in ('err', 'error', 'fatal'):
    loglevel = logging.ERROR
else:
    loglevel = logging.WARNING

LOG_FORMAT = ('%(asctime)s - [%(levelname)-7s] ' +
              '%(filename)s:%(lineno)d %(message)s')

AnyPath = Union[str, os.PathLike]


def str_path(p: AnyPath) -> str:
    p = os.fspath(p)
    assert isinstance(p, str)
    return p


class DebinfoError(Exception):
    pass


class OpenError(DebinfoError):
    pass


class ArchiveReadError(DebinfoError):
    pass


class DecompressionError(DebinfoError):
    pass


class ContentReadError(DebinfoError):
    pass


class MemberNotFound(DebinfoError):
    """Expected member missing from an archive.

    <name> is the missing member, <container> the archive it was looked up
    in (None for the package itself).
    """

    def __init__(self, name: str, container: Optional[str] = None):
        self.name = name
        self.container = container
        if container:
            msg = f"{name} is not found in {container}"
        else:
            msg = f"{name} is not found"
        super().__init__(msg)


from .control import ControlInfo, parse_control_info  # noqa: E402
from .extract import (  # noqa: E402
    CONTROL_TARBALL, CONTROL_FILE, extract_control_bytes, get_control_info)

__all__ = [
    'DebinfoError', 'OpenError', 'ArchiveReadError', 'DecompressionError',
    'ContentReadError', 'MemberNotFound',
    'ControlInfo', 'parse_control_info',
    'CONTROL_TARBALL', 'CONTROL_FILE',
    'extract_control_bytes', 'get_control_info',
]
