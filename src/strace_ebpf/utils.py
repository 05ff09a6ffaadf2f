"""Common utilities for strace_ebpf package."""

import sys


def error(message, stream=None):
    """Print an error diagnostic (stderr by default)."""
    print(f"ERROR: {message}", file=stream or sys.stderr)


def info(message, stream=None):
    """Print an informational message (stderr by default)."""
    print(f"INFO: {message}", file=stream or sys.stderr)
