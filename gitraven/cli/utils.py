"""CLI Utility Functions"""

import os
import subprocess
import sys
import tempfile

from gitraven.output import bold, dim, info

ACTIONS = {
    'c': 'commit',
    'e': 'edit',
    'r': 'regenerate',
    'q': 'cancel',
}


def confirm(question: str, default: bool = True) -> bool:
    """Ask a yes/no question. Ctrl-C or EOF counts as no."""
    choices = "[Y/n]" if default else "[y/N]"
    try:
        answer = input(f"{question} {dim(choices)} ").strip().lower()
    except (KeyboardInterrupt, EOFError):
        print()
        return False
    if not answer:
        return default
    return answer in ('y', 'yes')


def choose_action() -> str:
    """Interactive menu after generation. Returns an ACTIONS value."""
    print(bold("What would you like to do?"))
    print(f"  {info('(c)')}ommit with this message")
    print(f"  {info('(e)')}dit message")
    print(f"  {info('(r)')}egenerate message")
    print(f"  {info('(q)')} cancel")

    while True:
        try:
            choice = input(dim("Select [c/e/r/q] (Enter to commit): ")).strip().lower()
        except (KeyboardInterrupt, EOFError):
            print()
            return 'cancel'
        if not choice:
            return 'commit'
        if choice[0] in ACTIONS:
            return ACTIONS[choice[0]]
        print("Enter c, e, r or q")


def edit_message(message: str) -> str | None:
    """Open message in user's editor. Returns edited text or None on failure."""
    editor = os.environ.get('VISUAL') or os.environ.get('EDITOR')
    if not editor:
        editor = 'notepad' if sys.platform == 'win32' else 'vi'

    tmp = tempfile.NamedTemporaryFile(mode='w', suffix='.gitcommit', delete=False, encoding='utf-8')
    try:
        tmp.write(message)
        tmp.close()
        subprocess.run([editor, tmp.name], check=True)
        with open(tmp.name, 'r', encoding='utf-8') as f:
            edited = f.read().strip()
        return edited if edited else None
    except (subprocess.CalledProcessError, OSError):
        return None
    finally:
        try:
            os.unlink(tmp.name)
        except OSError as e:
            print(f"Warning: Could not delete temp file {tmp.name}: {e}", file=sys.stderr)
