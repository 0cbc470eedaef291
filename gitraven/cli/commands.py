"""CLI Commands"""

from gitraven import COMMIT_TYPES
from gitraven.config import Config, get_config_path
from gitraven.output import CHECK, CROSS, bold, dim, error, info, success


def display_types() -> int:
    """List available commit types."""
    print(f"\n{bold('Available commit types:')}\n")
    for commit_type, description in COMMIT_TYPES.items():
        print(f"  {success(commit_type.ljust(10))} {description}")
    print()
    return 0


def display_config(config: Config, env_file=None) -> int:
    """Display the resolved configuration."""
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .gitravenrc found)")
    if env_file:
        print(f"  {dim('Environment file:')} {env_file}")

    key_status = success(f"{CHECK} Set") if config.api_key else error(f"{CROSS} Not set")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:               {info(config.provider)}")
    print(f"    model:                  {info(config.model or 'default')}")
    print(f"    api key:                {key_status}")
    print(f"    ollama host:            {info(config.ollama_host or 'default')}")
    print(f"    max_tokens:             {info(str(config.max_tokens))}")
    print(f"    temperature:            {info(str(config.temperature))}")
    print(f"    max_description_length: {info(str(config.max_description_length))}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .gitravenrc (in current directory)")
    print(f"    Global: ~/.gitravenrc")
    print(f"    Env:    .env, .env.local, ~/.gitraven.env\n")

    return 0
