"""CLI Argument Parsing"""

import argparse
import argcomplete

from gitraven import COMMIT_TYPE_NAMES, __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gitraven',
        description='AI-powered commit message generator',
        epilog='Example: gitraven -p "fixing the login bug" --push'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Generation options
    parser.add_argument('-d', '--dry-run', action='store_true', help='Preview commit message without committing')
    parser.add_argument('-p', '--prompt', type=str, metavar='TEXT', help='Additional context for AI')
    parser.add_argument('-t', '--type', type=str, choices=COMMIT_TYPE_NAMES, help='Force specific commit type')
    parser.add_argument('-s', '--scope', type=str, metavar='SCOPE', help='Force specific scope')
    parser.add_argument('-i', '--interactive', action='store_true', help='Interactive mode: commit, edit, regenerate, or cancel')

    # LLM options
    parser.add_argument('--provider', type=str, choices=['auto', 'ollama', 'claude'], help='LLM provider')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name')

    # Staging and remote
    parser.add_argument('-a', '--auto-stage', action='store_true', help='Stage all changes if nothing is staged')
    parser.add_argument('--push', action='store_true', help='Push after a successful commit')
    parser.add_argument('--no-push', action='store_true', help='Disable push (overrides --push and --all)')
    parser.add_argument('-A', '--all', action='store_true', help='Equivalent to --auto-stage --push, without asking')
    parser.add_argument('-y', '--yes', action='store_true', help='Commit without asking for confirmation')

    # Output options
    parser.add_argument('--verbose', action='store_true', help='Show debug info (git commands, prompt size, timings)')

    # Info
    parser.add_argument('--types', action='store_true', help='List available commit types')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')

    argcomplete.autocomplete(parser)
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    args = build_parser().parse_args(argv)
    if args.all:
        args.auto_stage = True
        args.push = True
    if args.no_push:
        args.push = False
    return args
