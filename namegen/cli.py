#!/usr/bin/env python3
"""
namegen CLI
===========
Command-line interface for pattern-driven name generation.

Usage:
    namegen generate "!ssV'!i" -n 10
    namegen generate --preset either --seed 42 --table
    namegen check "<(C!i)|(v!M)>"
    namegen presets
    namegen tokens --tokens my_tokens.json
"""

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from namegen import __version__

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def success(self, msg: str):
        if not self.quiet:
            print(f"OK: {msg}")


def setup_logging(verbose: bool):
    """Route namegen log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=verbose)],
    )


def build_namegen(args):
    """NameGen with the --tokens file (if any) applied on top of the configuration."""
    from namegen import NameGen

    ng = NameGen()
    if getattr(args, 'tokens', None):
        ng.load_tokens(args.tokens, merge=getattr(args, 'merge', False))
    return ng


def resolve_pattern(args, ng) -> str:
    from namegen import get_pattern

    if args.preset:
        return get_pattern(args.preset)
    if args.pattern:
        return args.pattern
    return ng.config.default_pattern


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate names."""
    from namegen import random_seed
    from namegen.ui import NameTableUI

    if args.count < 1:
        out.error("Count must be at least 1")
        return 1

    ng = build_namegen(args)
    pattern = resolve_pattern(args, ng)
    seed = args.seed if args.seed is not None else random_seed()

    results = ng.generate_many(pattern, count=args.count, seed=seed)
    failed = [r for r in results if not r.ok]

    if args.json:
        data = [
            {
                'name': r.name,
                'status': r.status.value,
                'pattern': r.pattern,
                'seed': r.seed,
            }
            for r in results
        ]
        print(json.dumps(data, indent=2))
    elif not failed:
        if args.table:
            if not out.quiet:
                NameTableUI().show_results(results)
        else:
            for r in results:
                if args.verbose:
                    print(f"{r.name:<24} (seed={r.seed})")
                else:
                    print(r.name)

    if failed:
        out.error(f"Pattern {pattern!r}: {failed[0].status.value} ({failed[0].error})")
        return 1
    return 0


def cmd_check(args, out: Output):
    """Validate a pattern."""
    from namegen import Status

    ng = build_namegen(args)
    pattern = resolve_pattern(args, ng)
    status = ng.validate(pattern)

    if status is Status.SUCCESS:
        out.success(f"{pattern!r} is a valid pattern")
        return 0

    out.error(f"{pattern!r}: {status.value}")
    return 1


def cmd_presets(args, out: Output):
    """List pattern presets."""
    from namegen import list_presets
    from namegen.ui import NameTableUI

    presets = list_presets()
    if args.json:
        print(json.dumps(presets, indent=2))
        return 0

    if not out.quiet:
        NameTableUI().show_presets(presets)
    return 0


def cmd_tokens(args, out: Output):
    """List the token table."""
    from namegen.ui import NameTableUI

    ng = build_namegen(args)
    if args.json:
        print(json.dumps(ng.tokens.to_dict(), indent=2))
        return 0

    if not out.quiet:
        NameTableUI().show_tokens(ng.tokens)
    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='namegen',
        description='namegen - Pattern-Driven Name Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Pattern syntax:
  s v V c B C i m M D d t T   token characters (see `tokens`)
  (...)                       literal group
  <...>                       token group
  |                           alternative inside a group
  !                           capitalize the next component

Examples:
  %(prog)s generate "!ssV'!i" -n 10
  %(prog)s generate --preset either --seed 42 --table
  %(prog)s generate "x(or)" --tokens tokens.json --merge
  %(prog)s check "<(C!i)|(v!M)>"
  %(prog)s presets
  %(prog)s tokens --json
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging and detailed output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate names')
    p.add_argument('pattern', nargs='?', help='Pattern (default: from configuration)')
    p.add_argument('--preset', '-p', help='Use a named preset instead of a pattern')
    p.add_argument('-n', '--count', type=int, default=1, help='Number of names (default: 1)')
    p.add_argument('--seed', '-s', type=int, help='Seed (default: random)')
    p.add_argument('--tokens', '-t', help='JSON/YAML token file')
    p.add_argument('--merge', action='store_true', help='Merge token file over built-in lists')
    p.add_argument('--table', action='store_true', help='Show results as a table')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- check ---
    p = subparsers.add_parser('check', aliases=['c'], help='Validate a pattern')
    p.add_argument('pattern', nargs='?', help='Pattern to validate')
    p.add_argument('--preset', '-p', help='Validate a named preset')

    # --- presets ---
    p = subparsers.add_parser('presets', help='List pattern presets')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- tokens ---
    p = subparsers.add_parser('tokens', help='List token table')
    p.add_argument('--tokens', '-t', help='JSON/YAML token file')
    p.add_argument('--merge', action='store_true', help='Merge token file over built-in lists')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # Parse
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {
        'gen': 'generate', 'g': 'generate',
        'c': 'check',
    }
    command = cmd_map.get(args.command, args.command)

    setup_logging(args.verbose)
    out = Output(quiet=args.quiet)

    if command == 'generate' and args.seed is not None and args.seed < 0:
        out.error("Seed must be a non-negative integer")
        return 1

    # Dispatch
    commands = {
        'generate': cmd_generate,
        'check': cmd_check,
        'presets': cmd_presets,
        'tokens': cmd_tokens,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except Exception as e:
            out.error(str(e))
            if args.verbose:
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
