"""Usage text of the strace.ebpf command."""

import sys

from strace_ebpf.formats import SUPPORTED_FORMATS, SUPPORTED_STRING_ARG_MODES


def _one_of(names):
    """Quote names as: 'a', 'b' & 'c'."""
    quoted = [f"'{name}'" for name in names]
    return ", ".join(quoted[:-1]) + " & " + quoted[-1]


USAGE = f"""\
Usage: strace.ebpf [options] [command [arg ...]]

Trace system calls of a command or of a running process with eBPF.

Options:
  -t, --timestamp
      include timestamp in output
  -X, --failed
      only show failed syscalls
  -d, --debug
      enable debug output
  -r, --no-progress
      do not print progress while attaching probes
  -p, --pid <pid>
      trace the process with this pid; cannot be combined with a command
  -o, --output <file>
      filename of the log
  -l, --format <fmt>
      output logs format. Possible values:
      {_one_of(SUPPORTED_FORMATS)}.
      Use 'list' or 'help' to print them.
      Default: 'hex'
  -K, --hex-separator <char>
      field separator used by the hex formats
  -s, --string-args <mode>
      how string arguments are fetched. Possible values:
      {_one_of(SUPPORTED_STRING_ARG_MODES)}.
      Default: 'fast'
  -e, --expr <expr>
      expression: 'help', 'list' or 'trace=<set>[,<set>...]'.
      Use 'trace=help' or 'trace=list' to print the supported sets.
  -f, --full-follow-fork[=<arg>]
      follow new processes created with fork()/vfork()/clone();
      with an argument, write a separate log per child
  -N, --ebpf-src-dir <dir>
      load eBPF sources from this directory
  -L, --list
      print the list of syscalls the kernel can trace and exit
  -R, --ll-list
      print every kernel function that can be attached to and exit
  -B, --builtin-list
      print the builtin syscall table and exit
  -h, --help
      print this help and exit

Examples:
  strace.ebpf -l strace -o trace.log ls -l
  strace.ebpf -p 1234 -t -X
  strace.ebpf -f -e trace=file make
"""


def fprint_help(stream=None):
    (stream or sys.stdout).write(USAGE)
