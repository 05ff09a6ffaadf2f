import sys
import dataclasses

from cli.cl_parser import cl_parser, Terminate, EXIT_FAILURE
from cli.help import fprint_help
from cli.options import ClOptions, FollowForkMode
from strace_ebpf.utils import error


def print_summary(options, command):
    """Report what is going to be traced."""
    if command:
        print(f"Tracing command: {' '.join(command)}")
    elif options.pid is not None:
        print(f"Tracing pid: {options.pid}")
    else:
        print("Tracing all processes")

    print(f"Output file: {options.out_fn or 'stdout'}")
    print(f"Output format: {options.out_fmt_str}")
    if options.expr:
        print(f"Expression: {options.expr}")

    follow = options.ff_mode is FollowForkMode.FULL
    print(f"Follow forks: {follow}")
    if follow:
        print(f"Separate log per child: {options.ff_separate_logs}")

    if options.debug:
        # Dump the whole record
        print("Options:")
        for field in dataclasses.fields(options):
            print(f"  {field.name}: {getattr(options, field.name)}")


def main(argv=None):
    """Entry point for the strace.ebpf command."""
    if argv is None:
        argv = sys.argv[1:]

    options = ClOptions()
    result = cl_parser(options, argv)
    if isinstance(result, Terminate):
        sys.exit(result.exit_code)

    command = argv[result.consumed:]

    if options.pid is not None and options.command:
        error("It is currently unsupported to watch for PID and command simultaneously.")
        fprint_help(sys.stderr)
        sys.exit(EXIT_FAILURE)

    if not options.do_not_print_progress:
        print_summary(options, command)
    return 0


if __name__ == "__main__":
    sys.exit(main())
