"""Config command - manage repository configuration."""

import click

from gitlet.core.config import get_config
from gitlet.core.errors import GitletError
from gitlet.core.repository import Repository
from gitlet.cli.output import success, fail


def split_key(key):
    """Split 'section.option' (a bare option goes to 'core')."""
    return key.split('.', 1) if '.' in key else ('core', key)


def load_config(is_global):
    if is_global:
        return get_config()
    try:
        return get_config(Repository.find_repository())
    except GitletError as e:
        fail(f"{e} (use --global for global config)")


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        gitlet config set core.compression 9
        gitlet config set --global core.compression 1
    """
    section, option = split_key(key)
    try:
        load_config(is_global).set(section, option, value, global_config=is_global)
    except GitletError as e:
        fail(e)

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('get')
@click.argument('key')
def config_get(key):
    """Get a config value (environment, then repository, then global)."""
    section, option = split_key(key)
    value = load_config(False).get(section, option)

    if value is None:
        fail(f"Config key not found: {key}")
    click.echo(value)


@config_cmd.command('unset')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Unset global config')
def config_unset(key, is_global):
    """Remove a config value."""
    section, option = split_key(key)
    if not load_config(is_global).unset(section, option, global_config=is_global):
        fail(f"Config key not found: {key}")
    click.echo(success(f"Unset {key}"))


@config_cmd.command('list')
def config_list():
    """List all config values."""
    for section, values in sorted(load_config(False).list_all().items()):
        for option, value in sorted(values.items()):
            click.echo(f"{section}.{option}={value}")
