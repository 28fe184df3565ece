"""Main CLI entry point for Gitlet."""

import logging

import click
from colorama import init

from gitlet import __version__
from gitlet.cli.output import BANNER
from gitlet.cli.commands import (init_cmd, add_cmd, rm_cmd, unstage_cmd, status_cmd,
                                 commit_cmd, log_cmd, branch_cmd, switch_cmd, merge_cmd,
                                 config_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class GitletGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=GitletGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log debug details to stderr')
def cli(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(rm_cmd)
cli.add_command(unstage_cmd)
cli.add_command(status_cmd)
cli.add_command(commit_cmd)
cli.add_command(log_cmd)
cli.add_command(branch_cmd)
cli.add_command(switch_cmd)
cli.add_command(merge_cmd)
cli.add_command(config_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
