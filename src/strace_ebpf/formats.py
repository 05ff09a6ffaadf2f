"""Output formats and string-argument fetching modes."""

from enum import Enum


class OutputFormat(Enum):
    BIN = "bin"
    HEX_RAW = "hex_raw"
    HEX_SL = "hex_sl"
    STRACE = "strace"


class StringArgMode(Enum):
    FAST = "fast"        # one read of a fixed-size buffer
    CONST_N = "const_n"  # fixed number of chunks
    FULL = "full"        # read until the terminating NUL


# Accepted names, in the order they are advertised
SUPPORTED_FORMATS = ('bin', 'binary', 'hex', 'hex_raw', 'hex_sl', 'strace')

_FORMAT_NAMES = {
    'bin': OutputFormat.BIN,
    'binary': OutputFormat.BIN,
    'hex': OutputFormat.HEX_RAW,
    'hex_raw': OutputFormat.HEX_RAW,
    'hex_sl': OutputFormat.HEX_SL,
    'strace': OutputFormat.STRACE,
}

SUPPORTED_STRING_ARG_MODES = tuple(mode.value for mode in StringArgMode)


def out_fmt_str2enum(name):
    """Resolve an output format name (case-insensitive)."""
    try:
        return _FORMAT_NAMES[name.lower()]
    except KeyError:
        raise ValueError(f"unknown output format: '{name}'") from None


def choose_fnr_mode(name):
    """Resolve a string-argument mode name (case-insensitive)."""
    try:
        return StringArgMode(name.lower())
    except ValueError:
        raise ValueError(f"unknown string-args mode: '{name}'") from None
