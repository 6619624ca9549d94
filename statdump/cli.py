#!/usr/bin/env python3
"""
Command line interface for statdump.

Parses the system/process/cgroup dump subcommands, builds the CommandSpec and
hands it, with the opened output sink, to the sample collector. Without a
collector the resolved plan is written instead.
"""

import argparse
import logging
import sys
from typing import List, Optional

from statdump.core import (
    CatalogFormatter,
    Domain,
    DumpCollector,
    DumpSpecError,
    RawQueryOptions,
    compile_command,
    open_sink,
    parse_domain,
)

logger = logging.getLogger('statdump.cli')

EXAMPLES = {
    Domain.SYSTEM: """\
examples:
  statdump system -b "08:30:00" -e "08:30:30" -f datetime io hostname -O csv
  statdump system -b "08:30:00" -e "08:30:30" -f datetime -O csv -f hostname -f io
""",
    Domain.PROCESS: """\
examples:
  statdump process -b "08:30:00" -e "08:30:30" -f comm cpu io_total -O csv

  all "below*" processes:
  statdump process -b "08:30:00" -e "08:30:30" -s comm -F "below*" -O json

  top 5 CPU consumers of each time slice:
  statdump process -b "08:30:00" -e "08:30:30" -s cpu_total --rsort --top 5
""",
    Domain.CGROUP: """\
examples:
  statdump cgroup -b "08:30:00" -e "08:30:30" -f name cpu -O csv

  all cgroups matching "below*":
  statdump cgroup -b "08:30:00" -e "08:30:30" -s name -F "below*" -O json

  top 5 CPU consumers of each time slice:
  statdump cgroup -b "08:30:00" -e "08:30:30" -s cpu_usage --rsort --top 5
""",
}


def _add_dump_options(parser: argparse.ArgumentParser, with_select: bool):
    """Options shared by the system, process and cgroup subcommands"""
    # Fields
    parser.add_argument('-f', '--fields', nargs='+', action='extend', default=None,
                        metavar='FIELD',
                        help='Fields or field groups to display, in display order (repeatable)')
    parser.add_argument('--default', action='store_true',
                        help='Show the default fields; overrides --fields')
    parser.add_argument('--everything', action='store_true',
                        help='Show every field; overrides --fields and --default')
    parser.add_argument('-d', '--detail', action='store_true',
                        help='Expand field groups with their detail fields')

    # Time window
    parser.add_argument('-b', '--begin', type=str, required=True,
                        help='Begin time (e.g. 08:30:00, 2025-01-01 08:30, 10min ago)')
    parser.add_argument('-e', '--end', type=str, default=None,
                        help='End time, same formats as --begin (default: newest sample)')

    # Row selection
    if with_select:
        parser.add_argument('-s', '--select', type=str, default=None,
                            help='Field used by --filter, --sort, --rsort and --top')
    parser.add_argument('-F', '--filter', type=str, default=None,
                        help='Regular expression matched against the --select field')
    parser.add_argument('--sort', action='store_true',
                        help='Sort by the --select field, lowest first')
    parser.add_argument('--rsort', action='store_true',
                        help='Sort by the --select field, highest first')
    parser.add_argument('--top', type=int, default=0,
                        help='Keep the first N rows of each time slice (0: unlimited)')

    # Output
    parser.add_argument('--repeat-title', type=int, default=None, dest='repeat_title',
                        help='Repeat the title line every N lines (raw output only)')
    parser.add_argument('-O', '--output-format', type=str, default=None, dest='output_format',
                        help='Output format: raw, csv, json or kv (default: $STATDUMP_OUTPUT_FORMAT if set, else raw)')
    parser.add_argument('-o', '--output', type=str, default=None,
                        help='Output file, "-" for stdout (default: $STATDUMP_OUTPUT if set, else stdout)')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='statdump',
        description='Dump system, process and cgroup stats for a time window',
    )

    # Logging
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--debuglog', type=str,
                        help='Debug log file')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    for domain in Domain:
        sub = subparsers.add_parser(
            domain.value,
            help=f'Dump {domain.value} stats',
            epilog=EXAMPLES[domain],
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _add_dump_options(sub, with_select=domain is not Domain.SYSTEM)

    fields_parser = subparsers.add_parser('fields', help='List the fields and groups of a domain')
    fields_parser.add_argument('domain', choices=[domain.value for domain in Domain])

    return parser


def setup_logging(debug: bool = False, debuglog: Optional[str] = None):
    log_level = logging.DEBUG if debug else logging.INFO
    log_format = '%(asctime)s - %(levelname)s - %(message)s'

    if debuglog:
        logging.basicConfig(
            level=log_level,
            format=log_format,
            filename=debuglog,
            filemode='w'
        )
    else:
        logging.basicConfig(
            level=log_level,
            format=log_format
        )


def raw_options_from_args(args: argparse.Namespace) -> RawQueryOptions:
    return RawQueryOptions(
        begin=args.begin,
        end=args.end,
        filter=args.filter,
        sort=args.sort,
        rsort=args.rsort,
        top=args.top,
        repeat_title=args.repeat_title,
        output_format=args.output_format,
        output=args.output,
        detail=args.detail,
        default=args.default,
        everything=args.everything,
    )


def main(argv: Optional[List[str]] = None, collector: Optional[DumpCollector] = None) -> int:
    """
    Run statdump.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])
        collector: Stage that collects and renders samples for the CommandSpec

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.debug, args.debuglog)

    formatter = CatalogFormatter()

    if args.command == 'fields':
        print(formatter.format_catalog(parse_domain(args.domain)))
        return 0

    domain = parse_domain(args.command)
    try:
        spec = compile_command(
            domain,
            args.fields,
            raw_options_from_args(args),
            select_token=getattr(args, 'select', None),
        )
        with open_sink(spec.options.output) as sink:
            if collector is None:
                logger.info("No sample collector configured, writing the command plan")
                sink.write(formatter.format_plan(spec))
            else:
                collector(spec, sink)
    except DumpSpecError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
