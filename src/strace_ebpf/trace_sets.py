"""Named syscall sets accepted by 'trace=<set>' expressions."""

import sys

from .syscalls import SYSCALLS

TRACE_SETS = {
    'file': "syscalls which take a file name as an argument",
    'desc': "file descriptor related syscalls",
    'fileio': "syscalls which read or write file data",
    'process': "process management syscalls",
    'signal': "signal related syscalls",
    'ipc': "System V IPC related syscalls",
    'network': "network related syscalls",
    'memory': "memory mapping related syscalls",
}


def syscalls_in_set(set_name):
    """Return the names of builtin syscalls belonging to a trace set."""
    if set_name not in TRACE_SETS:
        raise KeyError(set_name)
    return [sc.name for sc in SYSCALLS if set_name in sc.sets]


def fprint_trace_list(stream=None):
    stream = stream or sys.stderr
    for name, description in TRACE_SETS.items():
        members = ", ".join(syscalls_in_set(name))
        stream.write(f"trace={name}: {description}\n    {members}\n")
