"""Command-line front end of strace.ebpf."""

from .cl_parser import cl_parser, Continue, Terminate
from .options import ClOptions, FollowForkMode

__all__ = ['cl_parser', 'Continue', 'Terminate', 'ClOptions', 'FollowForkMode']
