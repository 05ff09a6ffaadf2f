"""Collaborators queried by the strace.ebpf command-line parser."""

from .formats import OutputFormat, StringArgMode, out_fmt_str2enum, choose_fnr_mode
from .syscalls import is_a_sc, get_sc_list, print_syscalls_table
from .trace_sets import fprint_trace_list
from . import utils

__all__ = ['OutputFormat', 'StringArgMode', 'out_fmt_str2enum', 'choose_fnr_mode',
           'is_a_sc', 'get_sc_list', 'print_syscalls_table', 'fprint_trace_list', 'utils']
