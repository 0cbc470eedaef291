"""
GitRaven

AI-powered conventional commit messages from staged git changes.
"""

__version__ = "1.0.0"

# Centralized commit types - single source of truth
# Used by: prompts/builder.py, commit/parser.py (validation), cli/args.py (argparse)
COMMIT_TYPES = {
    'feat': 'A new feature',
    'fix': 'A bug fix',
    'docs': 'Documentation only changes',
    'style': 'Changes that do not affect the meaning of the code (white-space, formatting, missing semi-colons, etc)',
    'refactor': 'A code change that neither fixes a bug nor adds a feature',
    'test': 'Adding missing tests or correcting existing tests',
    'chore': 'Changes to the build process or auxiliary tools and libraries such as documentation generation',
    'perf': 'A code change that improves performance',
    'ci': 'Changes to our CI configuration files and scripts',
    'build': 'Changes that affect the build system or external dependencies',
    'revert': 'Reverts a previous commit',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())

MAX_DESCRIPTION_LENGTH = 72
MIN_DESCRIPTION_LENGTH = 10

# Breaking changes render as "feat(api)!:" plus a BREAKING CHANGE: trailer
BREAKING_CHANGE_MARKER = "BREAKING CHANGE:"
