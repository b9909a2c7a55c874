import click
from repobuilder.config import load_config, save_config, get_default_config, get_config_path
import json
from pathlib import Path


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("show")
@click.option("--pretty", is_flag=True, help="Display as formatted JSON instead of single-line JSONL")
@click.option("--path", is_flag=True, help="Show the config file path being used")
def show_config(pretty, path):
    """Show the current configuration with all merges applied.

    By default, outputs single-line JSON (JSONL format).
    Use --pretty for human-readable formatted output.
    Use --path to see which config file is being used.
    """
    if path:
        print(json.dumps({"config_path": str(get_config_path())}))
        return

    config = load_config()

    if pretty:
        print(json.dumps(config, indent=2, ensure_ascii=False))
    else:
        print(json.dumps(config, ensure_ascii=False))


@config_cmd.command("init")
@click.option("--format", "fmt", type=click.Choice(["json", "toml", "yaml"]), default="json",
              help="File format for the new configuration")
@click.option("--overwrite", is_flag=True, help="Replace an existing configuration file")
def init_config(fmt, overwrite):
    """Write the default configuration to ~/.repobuilder/."""
    config_path = Path.home() / ".repobuilder" / f"config.{fmt}"
    if config_path.exists() and not overwrite:
        raise click.ClickException(f"{config_path} already exists (use --overwrite)")

    save_config(get_default_config(), config_path)
    click.echo(json.dumps({"config_path": str(config_path)}))
