"""
CLI entry point.

Main command group for the hostel notification client.
"""

import click

from hostel_notify import __version__


@click.group()
@click.version_option(version=__version__, prog_name="hostel-notify")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """
    Hostel Notify - Browse and manage your hostel notifications.

    Lists, searches and filters notifications from the hostel management
    server, marks them read and deletes them.

    Use 'hostel-notify COMMAND --help' for more information on a command.
    """
    ctx.ensure_object(dict)


# Import and register subcommands
from hostel_notify.cli.config import config  # noqa: E402
from hostel_notify.cli.notifications import (  # noqa: E402
    delete_all_cmd,
    delete_cmd,
    list_cmd,
    read_all_cmd,
    read_cmd,
    unread_count_cmd,
)

cli.add_command(config)
cli.add_command(list_cmd)
cli.add_command(read_cmd)
cli.add_command(read_all_cmd)
cli.add_command(delete_cmd)
cli.add_command(delete_all_cmd)
cli.add_command(unread_count_cmd)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
