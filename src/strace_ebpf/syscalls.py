"""Builtin syscall table and kernel syscall listing."""

import sys
from dataclasses import dataclass

AVAILABLE_FILTER_FUNCTIONS = "/sys/kernel/debug/tracing/available_filter_functions"

# Kernel symbol prefixes of syscall entry points
SYSCALL_PREFIXES = ('sys_', 'SyS_', '__x64_sys_', '__ia32_sys_', '__arm64_sys_')


@dataclass(frozen=True)
class Syscall:
    num: int
    name: str
    nargs: int
    sets: tuple = ()


# x86_64 numbering
SYSCALLS = (
    Syscall(0, 'read', 3, ('desc', 'fileio')),
    Syscall(1, 'write', 3, ('desc', 'fileio')),
    Syscall(2, 'open', 3, ('file', 'desc')),
    Syscall(3, 'close', 1, ('desc',)),
    Syscall(4, 'stat', 2, ('file',)),
    Syscall(5, 'fstat', 2, ('desc',)),
    Syscall(6, 'lstat', 2, ('file',)),
    Syscall(7, 'poll', 3, ('desc',)),
    Syscall(8, 'lseek', 3, ('desc', 'fileio')),
    Syscall(9, 'mmap', 6, ('desc', 'memory')),
    Syscall(10, 'mprotect', 3, ('memory',)),
    Syscall(11, 'munmap', 2, ('memory',)),
    Syscall(12, 'brk', 1, ('memory',)),
    Syscall(13, 'rt_sigaction', 4, ('signal',)),
    Syscall(14, 'rt_sigprocmask', 4, ('signal',)),
    Syscall(16, 'ioctl', 3, ('desc',)),
    Syscall(17, 'pread64', 4, ('desc', 'fileio')),
    Syscall(18, 'pwrite64', 4, ('desc', 'fileio')),
    Syscall(19, 'readv', 3, ('desc', 'fileio')),
    Syscall(20, 'writev', 3, ('desc', 'fileio')),
    Syscall(21, 'access', 2, ('file',)),
    Syscall(22, 'pipe', 1, ('desc',)),
    Syscall(23, 'select', 5, ('desc',)),
    Syscall(28, 'madvise', 3, ('memory',)),
    Syscall(29, 'shmget', 3, ('ipc',)),
    Syscall(30, 'shmat', 3, ('ipc', 'memory')),
    Syscall(31, 'shmctl', 3, ('ipc',)),
    Syscall(32, 'dup', 1, ('desc',)),
    Syscall(33, 'dup2', 2, ('desc',)),
    Syscall(39, 'getpid', 0),
    Syscall(41, 'socket', 3, ('network', 'desc')),
    Syscall(42, 'connect', 3, ('network', 'desc')),
    Syscall(43, 'accept', 3, ('network', 'desc')),
    Syscall(44, 'sendto', 6, ('network', 'desc')),
    Syscall(45, 'recvfrom', 6, ('network', 'desc')),
    Syscall(49, 'bind', 3, ('network', 'desc')),
    Syscall(50, 'listen', 2, ('network', 'desc')),
    Syscall(56, 'clone', 5, ('process',)),
    Syscall(57, 'fork', 0, ('process',)),
    Syscall(58, 'vfork', 0, ('process',)),
    Syscall(59, 'execve', 3, ('file', 'process')),
    Syscall(60, 'exit', 1, ('process',)),
    Syscall(61, 'wait4', 4, ('process',)),
    Syscall(62, 'kill', 2, ('signal',)),
    Syscall(63, 'uname', 1),
    Syscall(64, 'semget', 3, ('ipc',)),
    Syscall(65, 'semop', 3, ('ipc',)),
    Syscall(66, 'semctl', 4, ('ipc',)),
    Syscall(68, 'msgget', 2, ('ipc',)),
    Syscall(69, 'msgsnd', 4, ('ipc',)),
    Syscall(70, 'msgrcv', 5, ('ipc',)),
    Syscall(71, 'msgctl', 3, ('ipc',)),
    Syscall(72, 'fcntl', 3, ('desc',)),
    Syscall(74, 'fsync', 1, ('desc',)),
    Syscall(78, 'getdents', 3, ('desc',)),
    Syscall(79, 'getcwd', 2),
    Syscall(80, 'chdir', 1, ('file',)),
    Syscall(82, 'rename', 2, ('file',)),
    Syscall(83, 'mkdir', 2, ('file',)),
    Syscall(84, 'rmdir', 1, ('file',)),
    Syscall(86, 'link', 2, ('file',)),
    Syscall(87, 'unlink', 1, ('file',)),
    Syscall(89, 'readlink', 3, ('file',)),
    Syscall(90, 'chmod', 2, ('file',)),
    Syscall(92, 'chown', 3, ('file',)),
    Syscall(200, 'tkill', 2, ('signal',)),
    Syscall(202, 'futex', 6),
    Syscall(217, 'getdents64', 3, ('desc',)),
    Syscall(231, 'exit_group', 1, ('process',)),
    Syscall(234, 'tgkill', 3, ('signal',)),
    Syscall(247, 'waitid', 5, ('process',)),
    Syscall(257, 'openat', 4, ('file', 'desc')),
    Syscall(262, 'newfstatat', 4, ('file', 'desc')),
    Syscall(263, 'unlinkat', 3, ('file', 'desc')),
    Syscall(288, 'accept4', 4, ('network', 'desc')),
    Syscall(292, 'dup3', 3, ('desc',)),
    Syscall(293, 'pipe2', 2, ('desc',)),
    Syscall(322, 'execveat', 5, ('file', 'desc', 'process')),
    Syscall(435, 'clone3', 2, ('process',)),
)


def is_a_sc(name):
    """Check whether a kernel function name is a syscall entry point."""
    if name.endswith('_ni_syscall'):
        return False
    return name.startswith(SYSCALL_PREFIXES)


def get_sc_list(stream=None, predicate=None, source=AVAILABLE_FILTER_FUNCTIONS):
    """Write traceable kernel function names, one per line.

    Reads the tracefs list of functions that can be attached to. When a
    predicate is given only the names it accepts are written. Returns the
    number of names written; OSError propagates if the list is unreadable.
    """
    stream = stream or sys.stdout
    count = 0
    with open(source, 'r') as f:
        for line in f:
            # Module functions are listed as "name [module]"
            name = line.split(' ', 1)[0].strip()
            if not name:
                continue
            if predicate is not None and not predicate(name):
                continue
            stream.write(f"{name}\n")
            count += 1
    return count


def print_syscalls_table(stream=None, table=SYSCALLS):
    """Print a syscall table (the builtin one by default).

    Returns 1 if anything was printed, 0 for an empty table.
    """
    stream = stream or sys.stdout
    if not table:
        return 0
    for sc in table:
        stream.write(f"{sc.num:03d}: {sc.name:<20} ({sc.nargs} args)\n")
    return 1
