"""Scheme CLI commands - save, list, show, update and delete named inputs."""

import json

import click
from rich.console import Console

from iitcalc.sdk import SchemeNotFoundError, SchemeStore

from .calc_commands import build_tax_input, has_input_options, tax_input_options
from .renderers.result_renderer import render_scheme_list


@click.group()
def schemes():
    """Manage saved calculation schemes.

    A scheme stores a named set of inputs (salary, deductions, bonus)
    so it can be recalculated later with 'iit-calc calc --scheme ID'.
    """
    pass


@schemes.command("save")
@click.argument("name")
@tax_input_options
def schemes_save(name, **input_options):
    """Save inputs under NAME.

    Examples:
        iit-calc schemes save "2025 offer" --salary 30000 --bonus 90000
    """
    tax_input = build_tax_input(input_options)
    try:
        scheme = SchemeStore().save(name, tax_input)
    except ValueError as e:
        raise click.ClickException(str(e))

    click.echo(f"Saved scheme {scheme.id}: {scheme.name}")


@schemes.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def schemes_list(as_json):
    """List saved schemes, most recently updated first."""
    summaries = SchemeStore().list_all()

    if as_json:
        click.echo(json.dumps([s.model_dump() for s in summaries], indent=2))
        return

    if not summaries:
        click.echo("No saved schemes.")
        return

    render_scheme_list(Console(), summaries)


@schemes.command("show")
@click.argument("scheme_id")
def schemes_show(scheme_id):
    """Show the stored inputs of a scheme as JSON."""
    scheme = SchemeStore().get(scheme_id)
    if scheme is None:
        raise click.ClickException(f"Scheme not found: {scheme_id}")

    click.echo(json.dumps(scheme.model_dump(mode="json"), indent=2))


@schemes.command("update")
@click.argument("scheme_id")
@click.option("--name", help="New scheme name")
@tax_input_options
def schemes_update(scheme_id, name, **input_options):
    """Rename a scheme and/or change some of its inputs.

    Options not given keep their saved values.
    """
    store = SchemeStore()
    scheme = store.get(scheme_id)
    if scheme is None:
        raise click.ClickException(f"Scheme not found: {scheme_id}")

    tax_input = None
    if has_input_options(input_options):
        tax_input = build_tax_input(input_options, scheme.input)

    if name is None and tax_input is None:
        raise click.UsageError("Nothing to update. Pass --name or input options.")

    try:
        updated = store.update(scheme_id, name=name, tax_input=tax_input)
    except (SchemeNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))

    click.echo(f"Updated scheme {updated.id}: {updated.name}")


@schemes.command("delete")
@click.argument("scheme_id")
def schemes_delete(scheme_id):
    """Delete a saved scheme."""
    if not SchemeStore().delete(scheme_id):
        raise click.ClickException(f"Scheme not found: {scheme_id}")

    click.echo(f"Deleted scheme {scheme_id}")
