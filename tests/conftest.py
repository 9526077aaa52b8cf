import io
import lzma
import tarfile
from typing import Callable, Optional

import pytest

CONTROL = b"""\
Package: hello
Source: hello-src
Version: 2.10-3
Architecture: amd64
Maintainer: Santiago Vila <sanvila@debian.org>
Installed-Size: 280
Depends: libc6 (>= 2.34)
Section: devel
Priority: optional
Homepage: https://www.gnu.org/software/hello/
Description: example package based on GNU hello
 The GNU hello program produces a familiar, friendly greeting.
"""


def ar_archive(members: list[tuple[str, bytes]]) -> bytes:
    """build an ar archive from (name, data) pairs"""
    out = io.BytesIO()
    out.write(b"!<arch>\n")
    for name, data in members:
        header = (name.ljust(16) +
                  "0".ljust(12) +
                  "0".ljust(6) +
                  "0".ljust(6) +
                  "100644".ljust(8) +
                  str(len(data)).ljust(10))
        out.write(header.encode("ascii") + b"`\n")
        out.write(data)
        if len(data) % 2:
            out.write(b"\n")
    return out.getvalue()


def tar_archive(members: list[tuple[str, Optional[bytes]]]) -> bytes:
    """build a tar archive; a None payload adds a directory"""
    out = io.BytesIO()
    with tarfile.open(fileobj=out, mode="w") as tar:
        for name, data in members:
            info = tarfile.TarInfo(name)
            if data is None:
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            else:
                info.size = len(data)
                info.mode = 0o644
                tar.addfile(info, io.BytesIO(data))
    return out.getvalue()


def tar_blocks(members: list[tuple[str, bytes]]) -> bytes:
    """tar member blocks without the end-of-archive marker"""
    out = io.BytesIO()
    for name, data in members:
        info = tarfile.TarInfo(name)
        info.size = len(data)
        info.mode = 0o644
        out.write(info.tobuf(format=tarfile.GNU_FORMAT))
        out.write(data)
        out.write(b"\0" * (-len(data) % tarfile.BLOCKSIZE))
    return out.getvalue()


def control_tarball(members: list[tuple[str, Optional[bytes]]]) -> bytes:
    return lzma.compress(tar_archive(members), format=lzma.FORMAT_XZ)


def deb_members(control: bytes = CONTROL) -> list[tuple[str, bytes]]:
    return [
        ("debian-binary", b"2.0\n"),
        ("control.tar.xz", control_tarball([
            ("./", None),
            ("./md5sums", b"d41d8cd98f00b204e9800998ecf8427e  usr/bin/hello\n"),
            ("./control", control),
        ])),
        ("data.tar.xz", control_tarball([("./usr/bin/hello", b"\x7fELF")])),
    ]


@pytest.fixture
def write_deb(tmp_path) -> Callable[..., str]:
    """write an ar archive built from (name, data) pairs -> path"""
    def write(members: list[tuple[str, bytes]],
              filename: str = "hello_2.10-3_amd64.deb") -> str:
        path = tmp_path / filename
        path.write_bytes(ar_archive(members))
        return str(path)
    return write


@pytest.fixture
def deb(write_deb) -> str:
    return write_deb(deb_members())
