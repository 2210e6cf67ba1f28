"""Config commands -- view and modify global configuration.

Provides the ``mealfinder config`` sub-command group for reading,
updating, and resetting the user's global configuration file
(:class:`~mealfinder.models.GlobalConfig`). Settings control the API base
URL, request timeout, and default output format.
"""

from __future__ import annotations

import typer

from mealfinder.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(
    effective: bool = typer.Option(
        False, "--effective", help="Show the merged config after env and project overrides."
    ),
) -> None:
    """Show current configuration.

    Example::

        mealfinder config show
        mealfinder --json config show --effective
    """
    from mealfinder.config import get_config_dir, load_global_config, resolve_config

    config = resolve_config() if effective else load_global_config()
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("path")
def config_path() -> None:
    """Print the path of the global config file."""
    from mealfinder.config import global_config_path
    from mealfinder.output import print_data

    print_data(str(global_config_path()))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'api.base_url')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    Uses dot notation for nested keys. The value is coerced to match the
    existing field's type (bool, number, or str).

    Raises:
        typer.Exit: With code 2 if the key path is invalid or the value
            cannot be coerced or validated.

    Example::

        mealfinder config set api.timeout 10
        mealfinder config set output.format plain
    """
    from mealfinder.config import load_global_config, save_global_config, set_config_value
    from mealfinder.exceptions import ConfigError

    try:
        new_config = set_config_value(load_global_config(), key, value)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=2) from None

    save_global_config(new_config)
    success(f"Set {key} = {value}")


@config_app.command("reset")
def config_reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
) -> None:
    """Reset configuration to defaults.

    Example::

        mealfinder config reset --yes
    """
    from mealfinder.config import save_global_config
    from mealfinder.models import GlobalConfig

    if not yes:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
