"""Configuration record filled in by the command-line parser."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from strace_ebpf.formats import OutputFormat, StringArgMode


class FollowForkMode(Enum):
    NONE = 0
    FULL = 1


@dataclass
class ClOptions:
    timestamp: bool = False
    failed: bool = False
    debug: bool = False
    do_not_print_progress: bool = False
    pid: Optional[int] = None

    out_fn: Optional[str] = None
    out_fmt_str: str = 'hex'
    out_fmt: OutputFormat = OutputFormat.HEX_RAW
    out_sep_ch: Optional[str] = None  # hex output field separator

    fnr_mode: StringArgMode = StringArgMode.FAST
    expr: Optional[str] = None
    ebpf_src_dir: Optional[str] = None

    ff_mode: FollowForkMode = FollowForkMode.NONE
    ff_separate_logs: bool = False

    # True when a command to trace follows the options
    command: bool = False
