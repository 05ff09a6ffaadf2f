"""Command-line options parser of strace.ebpf.

The parser never exits the process itself. It returns either a
``Continue`` carrying the filled-in options and the number of consumed
arguments, or a ``Terminate`` carrying the exit code the caller should
use (help and list flags, malformed command lines).

Options are scanned left to right and scanning stops at the first
non-option token. The option prefix is first split off argv and rewritten
as exact ``--name`` / ``--name=value`` tokens, so argparse only ever sees
the tool's own options and never the traced command's arguments.
"""

import argparse
import re
import sys
from collections import namedtuple
from dataclasses import dataclass

from strace_ebpf import formats, syscalls
from strace_ebpf.trace_sets import fprint_trace_list
from strace_ebpf.utils import error, info

from cli.help import fprint_help
from cli.options import ClOptions, FollowForkMode

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

MISSING_ARGUMENT = "missing mandatory option's argument"

_ATOI = re.compile(r'\s*([+-]?\d+)')


@dataclass
class Continue:
    options: ClOptions
    consumed: int


@dataclass
class Terminate:
    exit_code: int


class _Exit(Exception):
    def __init__(self, exit_code):
        super().__init__(exit_code)
        self.exit_code = exit_code


class _UsageError(Exception):
    """Malformed command line; reported together with the usage text."""


class _OptionParser(argparse.ArgumentParser):
    def __init__(self, options, stdout, stderr):
        super().__init__(prog='strace.ebpf', add_help=False, allow_abbrev=False)
        self.options = options
        self.out_stream = stdout
        self.err_stream = stderr

    def error(self, message):
        raise _UsageError(message)


class _Handler(argparse.Action):
    """Run a handler as soon as the option is scanned."""

    def __init__(self, option_strings, dest, handler=None, **kwargs):
        kwargs['default'] = argparse.SUPPRESS
        super().__init__(option_strings, dest, **kwargs)
        self.handler = handler

    def __call__(self, parser, namespace, values, option_string=None):
        if self.nargs is None and values == []:
            # argparse before 3.13 drops a '--' option value
            values = '--'
        self.handler(parser, values)


def _atoi(text):
    """Integer prefix of text, 0 when there is none."""
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _set(field):
    def handler(parser, values):
        setattr(parser.options, field, True)
    return handler


def _store(field):
    def handler(parser, value):
        setattr(parser.options, field, value)
    return handler


def _help(parser, values):
    fprint_help(parser.out_stream)
    raise _Exit(EXIT_SUCCESS)


def _list(predicate):
    def handler(parser, values):
        try:
            syscalls.get_sc_list(parser.out_stream, predicate)
        except OSError as e:
            error(f"cannot read the list of kernel functions: {e}", parser.err_stream)
            raise _Exit(EXIT_FAILURE)
        raise _Exit(EXIT_SUCCESS)
    return handler


def _builtin_list(parser, values):
    res = syscalls.print_syscalls_table(parser.out_stream)
    if res == 1:
        raise _Exit(EXIT_SUCCESS)
    if res == 0:
        raise _Exit(EXIT_FAILURE)
    raise _Exit(res)


def _pid(parser, value):
    pid = _atoi(value)
    if pid < 1:
        error(f"wrong value for pid option is provided: '{value}' => '{pid}'", parser.err_stream)
        raise _Exit(EXIT_FAILURE)
    parser.options.pid = pid


def _hex_separator(parser, value):
    if not value:
        raise _UsageError(MISSING_ARGUMENT)
    parser.options.out_sep_ch = value[0]


def _expr(parser, value):
    lowered = value.lower()
    if lowered in ('list', 'help'):
        info("List of supported expressions: 'help', 'list', 'trace=set'", parser.err_stream)
        info("For list of supported sets you should use 'trace=help' or 'trace=list'",
             parser.err_stream)
        raise _Exit(EXIT_SUCCESS)
    if lowered in ('trace=help', 'trace=list'):
        fprint_trace_list(parser.err_stream)
        info("You can combine sets by using comma.", parser.err_stream)
        raise _Exit(EXIT_SUCCESS)
    parser.options.expr = value


def _format(parser, value):
    if value.lower() in ('list', 'help'):
        names = ", ".join(f"'{name}'" for name in formats.SUPPORTED_FORMATS)
        info(f"List of supported formats: {names}, 'list' & 'help'", parser.err_stream)
        raise _Exit(EXIT_SUCCESS)
    try:
        out_fmt = formats.out_fmt_str2enum(value)
    except ValueError as e:
        error(str(e), parser.err_stream)
        raise _Exit(EXIT_FAILURE)
    parser.options.out_fmt_str = value
    parser.options.out_fmt = out_fmt


def _string_args(parser, value):
    try:
        parser.options.fnr_mode = formats.choose_fnr_mode(value)
    except ValueError as e:
        error(str(e), parser.err_stream)
        raise _Exit(EXIT_FAILURE)


def _follow_fork(parser, value):
    parser.options.ff_mode = FollowForkMode.FULL
    if value is not None:
        parser.options.ff_separate_logs = True


# nargs: 0 no argument, None mandatory argument, '?' optional argument
_Option = namedtuple('_Option', ['short', 'long', 'handler', 'nargs'])

OPTIONS = (
    _Option('t', 'timestamp', _set('timestamp'), 0),
    _Option('X', 'failed', _set('failed'), 0),
    _Option('h', 'help', _help, 0),
    _Option('d', 'debug', _set('debug'), 0),
    _Option('L', 'list', _list(syscalls.is_a_sc), 0),
    _Option('R', 'll-list', _list(None), 0),
    _Option('B', 'builtin-list', _builtin_list, 0),
    _Option('r', 'no-progress', _set('do_not_print_progress'), 0),
    _Option('p', 'pid', _pid, None),
    _Option('l', 'format', _format, None),
    _Option('s', 'string-args', _string_args, None),
    _Option('e', 'expr', _expr, None),
    _Option('o', 'output', _store('out_fn'), None),
    _Option('N', 'ebpf-src-dir', _store('ebpf_src_dir'), None),
    _Option('K', 'hex-separator', _hex_separator, None),
    _Option('f', 'full-follow-fork', _follow_fork, '?'),
)

_BY_SHORT = {opt.short: opt for opt in OPTIONS}
_BY_LONG = {opt.long: opt for opt in OPTIONS}


def _build_parser(options, stdout, stderr):
    parser = _OptionParser(options, stdout, stderr)
    for opt in OPTIONS:
        parser.add_argument(f'-{opt.short}', f'--{opt.long}', action=_Handler,
                            handler=opt.handler, nargs=opt.nargs)
    return parser


def _lookup_long(name):
    """Find a long option by exact name or unique prefix."""
    if name in _BY_LONG:
        return _BY_LONG[name]
    matches = [opt for opt in OPTIONS if opt.long.startswith(name)]
    if len(matches) == 1:
        return matches[0]
    if matches:
        candidates = ", ".join(f"--{opt.long}" for opt in matches)
        raise _UsageError(f"ambiguous option: '--{name}' could match {candidates}")
    raise _UsageError(f"unknown option: '--{name}'")


def _normalize(opt, value=None):
    if value is None:
        return f'--{opt.long}'
    return f'--{opt.long}={value}'


def _take_value(opt, argv, index):
    """Value of an option given as a separate token; returns (value, next index)."""
    if opt.nargs is None:
        # Mandatory: the next token is the value whatever it looks like
        if index >= len(argv):
            raise _UsageError(MISSING_ARGUMENT)
        return argv[index], index + 1
    if index < len(argv) and not argv[index].startswith('-'):
        return argv[index], index + 1
    return None, index


def _split_long(arg, argv, index, out):
    name, sep, value = arg[2:].partition('=')
    opt = _lookup_long(name)
    if sep:
        if opt.nargs == 0:
            raise _UsageError(f"option '--{opt.long}' doesn't allow an argument")
        out.append(_normalize(opt, value))
        return index
    if opt.nargs == 0:
        out.append(_normalize(opt))
        return index
    value, index = _take_value(opt, argv, index)
    out.append(_normalize(opt, value))
    return index


def _split_short(arg, argv, index, out):
    chars = arg[1:]
    for pos, char in enumerate(chars):
        opt = _BY_SHORT.get(char)
        if opt is None:
            raise _UsageError(f"unknown option: '-{char}'")
        if opt.nargs == 0:
            out.append(_normalize(opt))
            continue
        # The rest of the cluster is the option's argument
        rest = chars[pos + 1:]
        if rest:
            out.append(_normalize(opt, rest))
            return index
        value, index = _take_value(opt, argv, index)
        out.append(_normalize(opt, value))
        return index
    return index


def _split_argv(argv):
    """Split the leading options off argv.

    Returns (normalized, consumed, failure): the options rewritten as exact
    long options, the index of the first unconsumed argument, and the usage
    error that stopped the scan (None if it ended normally).
    """
    normalized = []
    index = 0
    while index < len(argv):
        arg = argv[index]
        if arg == '--':
            return normalized, index + 1, None
        if arg == '-' or not arg.startswith('-'):
            break
        index += 1
        try:
            if arg.startswith('--'):
                index = _split_long(arg, argv, index, normalized)
            else:
                index = _split_short(arg, argv, index, normalized)
        except _UsageError as e:
            return normalized, index, e
    return normalized, index, None


def cl_parser(options, argv, stdout=None, stderr=None):
    """Parse argv (without the program name) into options.

    Returns Continue(options, consumed) where consumed is the index of the
    first argument that is not an option, or Terminate(exit_code).
    """
    if stdout is None:
        stdout = sys.stdout
    if stderr is None:
        stderr = sys.stderr

    argv = list(argv)
    normalized, consumed, failure = _split_argv(argv)
    parser = _build_parser(options, stdout, stderr)
    try:
        # Options before a malformed one still take effect, in order
        parser.parse_args(normalized)
        if failure is not None:
            raise failure
    except _UsageError as e:
        error(str(e), stderr)
        fprint_help(stderr)
        return Terminate(EXIT_FAILURE)
    except _Exit as e:
        return Terminate(e.exit_code)

    options.command = consumed < len(argv)
    return Continue(options, consumed)
