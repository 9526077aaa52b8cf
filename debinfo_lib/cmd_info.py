import sys

from . import ControlInfo, extract_control_bytes
from .control import FIELDS


# debinfo control
def print_control(path: str) -> None:
    control = extract_control_bytes(path)
    sys.stdout.buffer.write(control)
    sys.stdout.flush()


# debinfo info
def print_info(info: ControlInfo) -> None:
    for key, value in info.items():
        if not value:
            continue
        print(f"{key}: {value}")


# debinfo field
def print_field(info: ControlInfo, key: str) -> None:
    print(getattr(info, FIELDS[key]))
