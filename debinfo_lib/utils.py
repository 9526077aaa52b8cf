import sys
from typing import Optional, Callable, NoReturn

from . import DebinfoError

err_msg = str | DebinfoError | OSError


def fatal(msg: err_msg, help: Optional[Callable] = None) -> NoReturn:
    print("error: " + str(msg), file=sys.stderr)
    if help:
        help()
    sys.exit(1)
