"""Settings CLI commands for IIT Calc.

Manages settings.json - data directory, tax rules file, output format.
"""

import click
from pathlib import Path

from iitcalc.sdk import (
    TaxRulesError,
    clear_setting,
    get_data_path,
    get_setting,
    get_settings_path,
    load_settings,
    load_tax_rules,
    set_setting,
)
from iitcalc.sdk.config import OUTPUT_FORMATS


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - data_dir: custom data directory path (saved schemes live here)
    - tax_rules: path to a tax rules YAML file
    - default_output_format: table, json or csv
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective values:")
    click.echo(f"  data_dir: {get_data_path()}")
    click.echo(f"  tax_rules: {current.get('tax_rules') or 'built-in'}")
    click.echo(f"  default_output_format: {current.get('default_output_format') or 'table'}")


@settings.command("data-dir")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Clear custom data_dir, revert to default")
def settings_data_dir(path, clear):
    """Set or clear the custom data directory.

    PATH is the directory where iit-calc stores saved schemes.

    Examples:
        iit-calc settings data-dir ~/Documents/iit-calc
        iit-calc settings data-dir --clear
    """
    if clear:
        if clear_setting("data_dir"):
            click.echo("Cleared data_dir setting.")
            click.echo(f"Data directory is now: {get_data_path()} (default)")
        else:
            click.echo("data_dir was not set.")
        return

    if not path:
        current_data_dir = get_setting("data_dir")
        if current_data_dir:
            click.echo(f"Current data_dir: {current_data_dir}")
        else:
            click.echo(f"No custom data_dir set. Using default: {get_data_path()}")
        return

    data_path = Path(path).expanduser().resolve()

    if data_path.exists():
        if not data_path.is_dir():
            raise click.ClickException(f"Path exists but is not a directory: {data_path}")
    else:
        try:
            data_path.mkdir(parents=True, exist_ok=True)
            click.echo(f"Created directory: {data_path}")
        except OSError as e:
            raise click.ClickException(f"Cannot create directory: {data_path}\n{e}")

    set_setting("data_dir", str(data_path))
    click.echo(f"Set data_dir: {data_path}")
    click.echo(f"Saved to: {get_settings_path()}")


@settings.command("tax-rules")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Clear tax_rules, revert to built-in table")
def settings_tax_rules(path, clear):
    """Set or clear the tax rules YAML file.

    The file is validated before it is saved to settings.
    """
    if clear:
        if clear_setting("tax_rules"):
            click.echo("Cleared tax_rules setting. Using built-in table.")
        else:
            click.echo("tax_rules was not set.")
        return

    if not path:
        current = get_setting("tax_rules")
        click.echo(f"Current tax_rules: {current}" if current else "Using built-in table.")
        return

    rules_path = Path(path).expanduser().resolve()
    try:
        rules = load_tax_rules(rules_path)
    except TaxRulesError as e:
        raise click.ClickException(str(e))

    set_setting("tax_rules", str(rules_path))
    click.echo(f"Set tax_rules: {rules_path} ({rules.name}, {len(rules.brackets)} brackets)")


@settings.command("format")
@click.argument("output_format", required=False, type=click.Choice(OUTPUT_FORMATS))
def settings_format(output_format):
    """Set or show the default output format for 'calc'."""
    if not output_format:
        click.echo(get_setting("default_output_format") or "table")
        return

    set_setting("default_output_format", output_format)
    click.echo(f"Set default_output_format: {output_format}")
