"""CLI Main Entry Point"""

import logging
import sys

from gitraven.cli.args import parse_args
from gitraven.cli.commands import display_config, display_types
from gitraven.cli.utils import choose_action, confirm, edit_message
from gitraven.config import Config, load_config
from gitraven.config.env import load_env_files, resolve_config
from gitraven.generator import CommitGenerator
from gitraven.git import DiffSummary, GitAnalyzer, GitError, NoStagedChangesError
from gitraven.llm import LLMError, get_client
from gitraven.output import (
    Spinner,
    bold,
    colorize_commit_type,
    dim,
    format_file_change,
    info,
    print_error,
    print_success,
    print_warning,
    success,
    warning,
)
from gitraven.prompts import PromptOverrides

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _stage_and_reload(git: GitAnalyzer) -> DiffSummary:
    with Spinner("Staging all changes...") as spinner:
        git.stage_all()
        spinner.succeed("All changes staged")
    return git.get_staged_changes()


def _prepare_staged_changes(git: GitAnalyzer, args) -> DiffSummary:
    """Get staged changes, offering to stage everything when nothing is staged.

    Raises NoStagedChangesError if the user declines, GitError on git failure.
    """
    try:
        with Spinner("Analyzing staged changes..."):
            diff = git.get_staged_changes()
    except NoStagedChangesError:
        if not git.has_unstaged_changes():
            raise GitError("No changes to commit. Working directory is clean.")

        if args.auto_stage:
            diff = _stage_and_reload(git)
        else:
            print(warning("\nFound unstaged changes but no staged changes."))
            print(info("Options:"))
            print(f"  1. Stage changes manually: {success('git add .')}")
            print(f"  2. Use auto-stage: {success('gitraven --auto-stage')}")
            print(f"  3. Use auto-stage + push: {success('gitraven --all')}\n")
            if not confirm("Would you like to stage all changes automatically?"):
                raise
            diff = _stage_and_reload(git)

    if diff.is_empty:
        raise NoStagedChangesError()

    print_success(f"Found {diff.total_files} staged file(s) with {diff.total_changes} changes")
    return diff


def _display_file_list(diff: DiffSummary) -> None:
    print(bold("\nStaged changes:"))
    for file in diff.files:
        print(format_file_change(file))
    print()


def _display_message(message: str) -> None:
    """Display commit message with horizontal rules and colored type."""
    lines = colorize_commit_type(message).split('\n')
    width = max((len(line) for line in message.split('\n')), default=40)
    print(bold("Generated commit message:"))
    print(dim('─' * width))
    print(bold(lines[0]))
    for line in lines[1:]:
        print(dim(line))
    print(dim('─' * width))
    print()


def _generate_message(generator: CommitGenerator, diff: DiffSummary, overrides: PromptOverrides) -> str:
    with Spinner(f"Generating commit message with {generator.client.name}...") as spinner:
        commit = generator.generate_commit_message(diff, overrides)
        spinner.succeed("Commit message generated")
    return generator.format(commit)


def _commit(git: GitAnalyzer, message: str) -> None:
    with Spinner("Committing changes...") as spinner:
        try:
            git.commit(message)
        except GitError:
            spinner.fail("Failed to commit changes")
            raise
        spinner.succeed("Changes committed successfully")


def _push(git: GitAnalyzer) -> bool:
    """Push the new commit. Failure is reported, never raised: the commit stands."""
    with Spinner("Pushing changes to remote...") as spinner:
        try:
            git.push()
        except GitError as e:
            spinner.fail("Failed to push changes")
            _report_push_failure(git, str(e))
            return False
        spinner.succeed("Changes pushed to remote repository")
    return True


def _report_push_failure(git: GitAnalyzer, reason: str) -> None:
    print_warning(f"Push failed: {reason}")
    try:
        branch = git.current_branch_name()
    except GitError:
        print(f"{info('Try manually:')} {success('git push')}")
        return

    print(f"{info('Manual push command:')} {success(f'git push origin {branch}')}")
    if 'no upstream' in reason or 'set-upstream' in reason:
        print(f"{info('Or set upstream:')} {success(f'git push --set-upstream origin {branch}')}")


def _review_message(generator, diff, overrides, message):
    """Interactive commit/edit/regenerate/cancel loop.

    Returns:
        str | None: message to commit, or None when cancelled
    """
    while True:
        action = choose_action()
        if action == 'cancel':
            return None
        if action == 'commit':
            return message
        if action == 'edit':
            edited = edit_message(message)
            if edited:
                return edited
            print_warning("Editor returned no message, keeping the generated one")
            continue

        print(warning("Regenerating..."))
        message = _generate_message(generator, diff, overrides)
        _display_message(message)


def _generate_commit_flow(args, config: Config) -> int:
    """Main commit message generation flow.

    Returns:
        int: Exit code
    """
    git = GitAnalyzer()
    if not git.is_git_repository():
        print_error("Current directory is not a git repository")
        return 1

    diff = _prepare_staged_changes(git, args)
    _display_file_list(diff)

    client = get_client(config)
    generator = CommitGenerator(config, client)
    overrides = PromptOverrides(hint=args.prompt, forced_type=args.type, forced_scope=args.scope)

    message = _generate_message(generator, diff, overrides)
    _display_message(message)

    confirmed = args.yes
    if args.interactive:
        message = _review_message(generator, diff, overrides, message)
        if message is None:
            print(warning("Cancelled"))
            return 0
        confirmed = True

    if args.dry_run:
        print(warning("Dry run mode - commit message preview only"))
        return 0

    if not confirmed and not confirm("Commit with this message?"):
        print(warning("Cancelled"))
        return 0

    _commit(git, message)

    if args.push:
        if args.all or confirm("Push changes to remote repository?", default=False):
            _push(git)

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    _configure_logging(args.verbose)

    if args.types:
        return display_types()

    env_file = load_env_files()
    config = resolve_config(load_config(), provider=args.provider, model=args.model)
    logger.debug("Resolved provider=%s model=%s", config.provider, config.model or "default")

    if args.display_config:
        return display_config(config, env_file)

    try:
        return _generate_commit_flow(args, config)
    except (GitError, LLMError) as e:
        print_error(str(e))
        return 1
    except KeyboardInterrupt:
        print()
        print_error("Interrupted")
        return 130
