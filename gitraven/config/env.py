"""Environment handling for the CLI boundary.

Only the CLI calls into this module. Everything it resolves ends up on a
Config value that is passed down explicitly.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from gitraven.config import Config

logger = logging.getLogger(__name__)

ENV_FILENAMES = (".env", ".env.local")
GLOBAL_ENV_FILENAME = ".gitraven.env"


def env_file_candidates() -> list[Path]:
    return [Path.cwd() / name for name in ENV_FILENAMES] + [Path.home() / GLOBAL_ENV_FILENAME]


def load_env_files() -> Path | None:
    """Load the first env file found. Existing variables are not overridden."""
    for path in env_file_candidates():
        if path.is_file():
            load_dotenv(path, override=False)
            logger.debug("Loaded environment from %s", path)
            return path
    return None


def resolve_config(
    config: Config,
    provider: str | None = None,
    model: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Apply overrides. Precedence: CLI args > environment variables > config file."""
    environ = os.environ if environ is None else environ
    return replace(
        config,
        provider=provider or environ.get("GITRAVEN_PROVIDER") or config.provider,
        model=model or environ.get("GITRAVEN_MODEL") or config.model,
        api_key=environ.get("ANTHROPIC_API_KEY") or config.api_key,
        ollama_host=environ.get("OLLAMA_HOST") or config.ollama_host,
    )
