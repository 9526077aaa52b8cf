# Copyright (c) TurnKey GNU/Linux - http://www.turnkeylinux.org
#
# This file is part of Debinfo
#
# Debinfo is free software; you can redistribute it and/or modify it
# under the terms of the GNU Affero General Public License as published by the
# Free Software Foundation; either version 3 of the License, or (at your
# option) any later version.

"""Extraction of the control file from a Debian binary package

A package is an ar archive. Its control.tar.xz member is an xz compressed
tar archive which holds the ./control file. Both archives are read strictly
forward, member by member, and the first member with the expected name is
used. Nothing past that member is read, so the package may be a pipe.

Member names are compared exactly. Only the space padding of the ar name
field and the GNU "/" terminator are removed.
"""

import lzma
import tarfile
from typing import BinaryIO, Optional

from debian import arfile

from . import (
    AnyPath, str_path, logger,
    OpenError, ArchiveReadError, DecompressionError, ContentReadError,
    MemberNotFound)
from .control import ControlInfo, parse_control_info

CONTROL_TARBALL = "control.tar.xz"
CONTROL_FILE = "./control"

_BLOCKSIZE = 65536


class _MemberReader:
    """forward-only view of the body of the current ar member"""

    def __init__(self, fob: BinaryIO, size: int):
        self.fob = fob
        self.remaining = size

    def read(self, size: int = -1) -> bytes:
        if size < 0 or size > self.remaining:
            size = self.remaining
        buf = self.fob.read(size)
        self.remaining -= len(buf)
        return buf


class _TarInfo(tarfile.TarInfo):
    """TarInfo which records on the archive why a header failed to parse

    tarfile ends iteration silently on a bad header past the first
    member. The recorded error tells that apart from a clean end.
    """

    @classmethod
    def fromtarfile(cls, tarfile_):
        try:
            return super().fromtarfile(tarfile_)
        except tarfile.HeaderError as e:
            tarfile_.header_error = e
            raise


def _member_name(field: bytes) -> str:
    name = field.rstrip(b" ")
    # GNU ar terminates names with "/", "/" and "//" are its index members
    if name.endswith(b"/") and name.strip(b"/"):
        name = name[:-1]
    return name.decode("utf-8", errors="surrogateescape")


def _read_member_header(fob: BinaryIO) -> Optional[tuple[str, int]]:
    """read the next ar member header -> (name, size) or None at the end"""
    buf = fob.read(arfile.FILE_HEADER_LENGTH)
    if not buf:
        return None
    if len(buf) < arfile.FILE_HEADER_LENGTH:
        raise ArchiveReadError(
                "failed to read ar archive: incorrect header length")
    if buf[58:60] != arfile.FILE_MAGIC:
        raise ArchiveReadError(
                "failed to read ar archive: incorrect file magic")
    try:
        size = int(buf[48:58])
    except ValueError as e:
        raise ArchiveReadError(
                f"failed to read ar archive: bad member size: {e}") from e
    if size < 0:
        raise ArchiveReadError(
                f"failed to read ar archive: bad member size {size}")

    return _member_name(buf[0:16]), size


def _skip(fob: BinaryIO, size: int) -> None:
    while size > 0:
        buf = fob.read(min(size, _BLOCKSIZE))
        if not buf:
            raise ArchiveReadError(
                    "failed to read ar archive: unexpected end of file")
        size -= len(buf)


def _find_control_tarball(fob: BinaryIO) -> _MemberReader:
    try:
        if fob.read(arfile.GLOBAL_HEADER_LENGTH) != arfile.GLOBAL_HEADER:
            raise ArchiveReadError(
                    "failed to read ar archive: unable to find global header")

        while True:
            header = _read_member_header(fob)
            if header is None:
                raise MemberNotFound(CONTROL_TARBALL)

            name, size = header
            logger.debug(f'ar member {name!r} ({size} bytes)')
            if name == CONTROL_TARBALL:
                return _MemberReader(fob, size)

            _skip(fob, size)
            if size % 2:
                # padding byte, may be missing after the last member
                fob.read(1)
    except OSError as e:
        raise ArchiveReadError(f"failed to read ar archive: {e}") from e


def _open_xz(member: _MemberReader) -> lzma.LZMAFile:
    xz = lzma.LZMAFile(member, format=lzma.FORMAT_XZ)
    try:
        # decode the stream header now rather than from inside tarfile
        xz.peek()
    except (lzma.LZMAError, EOFError) as e:
        xz.close()
        raise DecompressionError(
                f"failed to parse {CONTROL_TARBALL}: {e}") from e
    return xz


def _check_end_of_archive(tar: tarfile.TarFile) -> None:
    """raise ArchiveReadError unless iteration stopped at a clean end"""
    error = tar.header_error
    if error is None:
        return
    if isinstance(error, (tarfile.EOFHeaderError, tarfile.EmptyHeaderError)):
        return
    raise ArchiveReadError(
            f"failed to read control.tar archive: {error}") from error


def _read_control_file(xz: lzma.LZMAFile) -> bytes:
    try:
        tar = tarfile.open(fileobj=xz, mode="r|", tarinfo=_TarInfo)
    except tarfile.TarError as e:
        raise ArchiveReadError(
                f"failed to read control.tar archive: {e}") from e
    except (lzma.LZMAError, EOFError) as e:
        raise DecompressionError(
                f"failed to decompress {CONTROL_TARBALL}: {e}") from e

    with tar:
        while True:
            tar.header_error = None
            try:
                member = tar.next()
            except tarfile.TarError as e:
                raise ArchiveReadError(
                        f"failed to read control.tar archive: {e}") from e
            except (lzma.LZMAError, EOFError) as e:
                raise DecompressionError(
                        f"failed to decompress {CONTROL_TARBALL}: {e}") from e

            if member is None:
                _check_end_of_archive(tar)
                raise MemberNotFound(CONTROL_FILE, container=CONTROL_TARBALL)

            logger.debug(f'{CONTROL_TARBALL} member {member.name!r}')
            if member.name != CONTROL_FILE:
                continue

            try:
                fob = tar.extractfile(member)
                if fob is None:
                    raise ContentReadError(
                            f"{CONTROL_FILE} in {CONTROL_TARBALL}"
                            " is not a regular file")
                return fob.read()
            except (tarfile.TarError, lzma.LZMAError, EOFError, OSError) as e:
                raise ContentReadError(
                        f"failed to read {CONTROL_FILE} file from"
                        f" {CONTROL_TARBALL}: {e}") from e


def extract_control_bytes(path: AnyPath) -> bytes:
    """extract the control file from the Debian binary package at <path>

    Returns the raw content of ./control from control.tar.xz.
    """
    path_ = str_path(path)
    logger.debug(f'extract_control_bytes({path_!r})')
    try:
        fob = open(path_, "rb")
    except OSError as e:
        raise OpenError(f"failed to open {path_!r}: {e}") from e

    with fob:
        member = _find_control_tarball(fob)
        with _open_xz(member) as xz:
            control = _read_control_file(xz)

    logger.debug(f'read {len(control)} bytes of {CONTROL_FILE}')
    return control


def get_control_info(path: AnyPath) -> ControlInfo:
    """convenience function which extracts control fields from a Debian
    binary package -> ControlInfo"""
    control = extract_control_bytes(path)
    return parse_control_info(control.decode("utf-8", errors="replace"))
