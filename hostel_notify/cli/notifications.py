"""
Notification CLI commands.

Lists, marks and deletes notifications through a NotificationCenter
session. Notices posted by the center are echoed as they happen.

Exit codes: 0 success, 1 configuration problem, 2 server/connection error.
"""

import asyncio
import json
import sys
from typing import Optional

import click

from hostel_notify.center import NotificationCenter
from hostel_notify.config import ClientConfig, ConfigError, ConfigValidationError
from hostel_notify.display import (
    notification_age,
    priority_color,
    type_color,
    type_label,
)
from hostel_notify.main import open_center, setup_logging
from hostel_notify.models import ReadFilter
from hostel_notify.notices import ConfirmOptions, Notice, NoticeLevel, always_confirm


NOTICE_COLORS = {
    NoticeLevel.SUCCESS: "green",
    NoticeLevel.ERROR: "red",
    NoticeLevel.INFO: "cyan",
}


# ============================================================================
# Helpers
# ============================================================================


def _load_config() -> ClientConfig:
    """Load and validate configuration, exiting with code 1 on failure."""
    try:
        config = ClientConfig()
        config.validate()
    except (ConfigError, ConfigValidationError) as e:
        click.echo(
            click.style("Error: ", fg="red", bold=True)
            + f"Invalid configuration: {e}"
        )
        sys.exit(1)

    if not config.is_configured:
        click.echo(
            click.style("Error: ", fg="red", bold=True)
            + "No server URL configured. Run 'hostel-notify config set-server URL'."
        )
        sys.exit(1)

    setup_logging(config.log_level)
    return config


def _echo_notice(notice: Notice) -> None:
    click.echo(click.style(notice.message, fg=NOTICE_COLORS[notice.level]))


async def _click_confirm(options: ConfirmOptions) -> bool:
    """Ask for confirmation on the terminal without blocking the event loop."""
    style = {"fg": "red", "bold": True} if options.type == "danger" else {"fg": "yellow"}
    click.echo(click.style(options.title, **style))
    return await asyncio.to_thread(click.confirm, options.message, default=False)


def _run(coro) -> bool:
    """Run an async command body; exit with code 2 when it reports failure."""
    ok = asyncio.run(coro)
    if not ok:
        sys.exit(2)
    return ok


# ============================================================================
# list
# ============================================================================


@click.command("list")
@click.option(
    "--filter",
    "-f",
    "read_filter",
    default=ReadFilter.ALL.value,
    type=click.Choice([f.value for f in ReadFilter], case_sensitive=False),
    help="Show all, only unread or only read notifications.",
)
@click.option(
    "--search",
    "-s",
    default="",
    help="Search notifications by title and message.",
)
@click.option(
    "--page",
    "-p",
    default=1,
    type=click.IntRange(min=1),
    help="Page number to show.",
)
@click.option(
    "--stats",
    "show_stats",
    is_flag=True,
    default=False,
    help="Show statistics for the listed page.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the page as JSON.",
)
def list_cmd(
    read_filter: str,
    search: str,
    page: int,
    show_stats: bool,
    as_json: bool,
) -> None:
    """List notifications, newest first.

    \b
    Examples:
        hostel-notify list
        hostel-notify list --filter unread
        hostel-notify list --search "room" --page 2 --stats
    """
    config = _load_config()
    _run(_list_async(config, ReadFilter(read_filter.lower()), search, page, show_stats, as_json))


async def _list_async(
    config: ClientConfig,
    read_filter: ReadFilter,
    search: str,
    page: int,
    show_stats: bool,
    as_json: bool,
) -> bool:
    listener = None if as_json else _echo_notice
    async with open_center(config, listener=listener) as center:
        center.show_stats = show_stats
        ok = await center.mount(read_filter=read_filter, search=search, page=page)
        if not ok:
            return False

        if as_json:
            click.echo(json.dumps(_page_as_dict(center), indent=2))
        else:
            _display_page(center)
        return True


def _page_as_dict(center: NotificationCenter) -> dict:
    data = {
        "notifications": [n.to_dict() for n in center.notifications],
        "pagination": center.pagination.to_dict(),
    }
    if center.server_unread_count is not None:
        data["unreadCount"] = center.server_unread_count
    stats = center.stats
    if stats is not None:
        data["stats"] = stats.to_dict()
    return data


def _display_page(center: NotificationCenter) -> None:
    """Display the loaded page, its pagination and optional statistics."""
    pagination = center.pagination
    total = pagination.total_items
    click.echo(f"{total} notification{'' if total == 1 else 's'} found")

    if not center.notifications:
        click.echo()
        click.echo("No notifications found")
        click.echo(center.empty_message)
        return

    for notification in center.notifications:
        marker = click.style("●", fg="blue") if not notification.is_read else " "
        new_badge = click.style(" New", fg="blue", bold=True) if not notification.is_read else ""
        click.echo()
        click.echo(
            f"{marker} "
            + click.style(notification.title, bold=not notification.is_read)
            + new_badge
        )
        if notification.message:
            click.echo(f"    {notification.message}")
        click.echo(
            "    "
            + click.style(notification.priority.upper(), fg=priority_color(notification.priority))
            + "  "
            + click.style(type_label(notification.type), fg=type_color(notification.type))
            + f"  {notification_age(notification)}"
            + click.style(f"  [{notification.id}]", dim=True)
        )

    if pagination.should_display:
        first, last = pagination.showing_range()
        pages = " ".join(
            click.style(f"[{n}]", bold=True) if n == pagination.current_page else str(n)
            for n in pagination.page_window()
        )
        click.echo()
        click.echo(f"Showing {first} to {last} of {total} results   {pages}")

    stats = center.stats
    if stats is not None:
        click.echo()
        click.echo(click.style("Notification Statistics", bold=True))
        click.echo(
            f"  Total: {stats.overview.total}  "
            f"Read: {stats.overview.read}  Unread: {stats.overview.unread}"
        )
        click.echo(
            "  Priority: "
            + "  ".join(
                f"{name.capitalize()}: {count}"
                for name, count in stats.priority.to_dict().items()
            )
        )
        if stats.by_type:
            click.echo(
                "  Types: "
                + "  ".join(f"{type_label(t)}: {c}" for t, c in stats.by_type.items())
            )


# ============================================================================
# read / read-all
# ============================================================================


@click.command("read")
@click.argument("notification_id", required=True)
def read_cmd(notification_id: str) -> None:
    """Mark a notification as read.

    \b
    Examples:
        hostel-notify read 64f1c2e9a7b3d40012345678
    """
    config = _load_config()
    _run(_read_async(config, notification_id))


async def _read_async(config: ClientConfig, notification_id: str) -> bool:
    async with open_center(config, listener=_echo_notice) as center:
        return await center.mark_as_read(notification_id)


@click.command("read-all")
def read_all_cmd() -> None:
    """Mark every notification as read."""
    config = _load_config()
    _run(_read_all_async(config))


async def _read_all_async(config: ClientConfig) -> bool:
    async with open_center(config, listener=_echo_notice) as center:
        return await center.mark_all_as_read()


# ============================================================================
# delete / delete-all
# ============================================================================


@click.command("delete")
@click.argument("notification_id", required=True)
@click.option("--yes", "-y", is_flag=True, default=False, help="Do not ask for confirmation.")
def delete_cmd(notification_id: str, yes: bool) -> None:
    """Delete a notification.

    \b
    Examples:
        hostel-notify delete 64f1c2e9a7b3d40012345678
        hostel-notify delete 64f1c2e9a7b3d40012345678 --yes
    """
    config = _load_config()
    outcome = asyncio.run(_delete_async(config, notification_id, yes))
    _exit_for_delete(outcome)


async def _delete_async(config: ClientConfig, notification_id: str, yes: bool) -> Optional[bool]:
    confirmer = _Confirmation(always_confirm if yes else _click_confirm)
    async with open_center(config, confirmer=confirmer, listener=_echo_notice) as center:
        deleted = await center.delete(notification_id)
    return deleted if confirmer.accepted else None


@click.command("delete-all")
@click.option("--yes", "-y", is_flag=True, default=False, help="Do not ask for confirmation.")
def delete_all_cmd(yes: bool) -> None:
    """Delete every notification."""
    config = _load_config()
    outcome = asyncio.run(_delete_all_async(config, yes))
    _exit_for_delete(outcome)


async def _delete_all_async(config: ClientConfig, yes: bool) -> Optional[bool]:
    confirmer = _Confirmation(always_confirm if yes else _click_confirm)
    async with open_center(config, confirmer=confirmer, listener=_echo_notice) as center:
        deleted = await center.delete_all()
    return deleted if confirmer.accepted else None


class _Confirmation:
    """Wraps a confirmer and remembers whether the prompt was accepted."""

    def __init__(self, confirmer):
        self._confirmer = confirmer
        self.accepted = False

    async def __call__(self, options: ConfirmOptions) -> bool:
        self.accepted = await self._confirmer(options)
        return self.accepted


def _exit_for_delete(outcome: Optional[bool]) -> None:
    """None means the prompt was declined, which is not an error."""
    if outcome is None:
        click.echo("Cancelled.")
        return
    if not outcome:
        sys.exit(2)


# ============================================================================
# unread-count
# ============================================================================


@click.command("unread-count")
def unread_count_cmd() -> None:
    """Show how many notifications are unread."""
    config = _load_config()
    count = asyncio.run(_unread_count_async(config))
    if count is None:
        click.echo(
            click.style("Error: ", fg="red", bold=True)
            + "Failed to load unread count"
        )
        sys.exit(2)
    click.echo(f"{count} unread notification{'' if count == 1 else 's'}")


async def _unread_count_async(config: ClientConfig) -> Optional[int]:
    async with open_center(config) as center:
        return await center.refresh_unread_count()
