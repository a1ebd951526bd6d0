"""
Notification center state container.

Owns the query state, the loaded page of notifications and its pagination,
and drives the list, mark-as-read, mark-all-read and delete calls:
- Filter changes refetch page 1 immediately
- Search input is debounced and refetches page 1
- Fetch failures fall back to an empty, well-formed state
- Mutations update the held page locally; deletes are followed by a refetch
- Statistics are derived from the held page while they are shown
"""

import asyncio
import logging
from dataclasses import replace
from typing import List, Optional, Tuple, Union

from hostel_notify.api_client import ApiError, NotificationApiClient
from hostel_notify.debounce import Debouncer
from hostel_notify.models import Notification, Pagination, ReadFilter
from hostel_notify.notices import ConfirmOptions, Confirmer, NoticeBoard, never_confirm
from hostel_notify.query import QueryState
from hostel_notify.reconcile import decode_list_response
from hostel_notify.stats import NotificationStats, compute_stats


logger = logging.getLogger("hostel_notify.center")

DEFAULT_ITEMS_PER_PAGE = 12
DEFAULT_SEARCH_DEBOUNCE = 0.5  # seconds

DELETE_CONFIRMATION = ConfirmOptions(
    title="Delete Notification",
    message="Are you sure you want to delete this notification?",
    confirm_text="Delete",
    type="danger",
)

DELETE_ALL_CONFIRMATION = ConfirmOptions(
    title="Delete All Notifications",
    message="Are you sure you want to delete all notifications? This cannot be undone.",
    confirm_text="Delete All",
    type="danger",
)


class NotificationCenter:
    """
    Session view over the notifications API.

    One instance owns its state exclusively. Once closed, pending debounced
    searches are cancelled and late responses are discarded.

    Attributes:
        api_client: Client for the notifications endpoints
        notices: Board receiving user-visible success/error notices
        confirmer: Async yes/no prompt used before destructive actions
    """

    def __init__(
        self,
        api_client: NotificationApiClient,
        notices: Optional[NoticeBoard] = None,
        confirmer: Confirmer = never_confirm,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
        search_debounce: float = DEFAULT_SEARCH_DEBOUNCE,
    ):
        """
        Initialize the notification center.

        Args:
            api_client: Client for the notifications endpoints
            notices: Notice board; a private one is created when omitted
            confirmer: Prompt for destructive actions; declines by default
            items_per_page: Initial page size (the server may override it)
            search_debounce: Quiet period in seconds before a search is sent
        """
        self._api_client = api_client
        self._notices = notices if notices is not None else NoticeBoard()
        self._confirmer = confirmer
        self._debouncer = Debouncer(search_debounce)

        self._query = QueryState(items_per_page=items_per_page)
        self._notifications: List[Notification] = []
        self._pagination = Pagination.empty(items_per_page)
        self._server_unread_count: Optional[int] = None
        self._loading = False
        self._fetch_seq = 0
        self._closed = False

        self._show_stats = False
        self._stats_source: Optional[List[Notification]] = None
        self._stats: Optional[NotificationStats] = None

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def query(self) -> QueryState:
        return self._query

    @property
    def notifications(self) -> Tuple[Notification, ...]:
        """The loaded page."""
        return tuple(self._notifications)

    @property
    def pagination(self) -> Pagination:
        return self._pagination

    @property
    def notices(self) -> NoticeBoard:
        return self._notices

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def search_pending(self) -> bool:
        """True while a debounced search has not completed."""
        return self._debouncer.pending

    @property
    def unread_count(self) -> int:
        """Unread notifications on the loaded page."""
        return sum(1 for n in self._notifications if not n.is_read)

    @property
    def server_unread_count(self) -> Optional[int]:
        """Unread count across all pages, when the server has reported one."""
        return self._server_unread_count

    @property
    def can_mark_all_read(self) -> bool:
        return self.unread_count > 0

    @property
    def can_go_previous(self) -> bool:
        return self._pagination.has_previous

    @property
    def can_go_next(self) -> bool:
        return self._pagination.has_next

    @property
    def empty_message(self) -> str:
        """Message for an empty page, depending on the active query."""
        if self._query.search:
            return "Try adjusting your search."
        if self._query.filter is ReadFilter.UNREAD:
            return "All notifications have been read"
        return "You have no notifications yet"

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    @property
    def show_stats(self) -> bool:
        return self._show_stats

    @show_stats.setter
    def show_stats(self, value: bool) -> None:
        self._show_stats = bool(value)

    def toggle_stats(self) -> bool:
        self._show_stats = not self._show_stats
        return self._show_stats

    @property
    def stats(self) -> Optional[NotificationStats]:
        """
        Statistics for the loaded page.

        None while statistics are hidden or the page is empty. The value is
        recomputed whenever the held page is replaced.
        """
        if not self._show_stats or not self._notifications:
            return None
        if self._stats_source is not self._notifications:
            self._stats = compute_stats(self._notifications)
            self._stats_source = self._notifications
        return self._stats

    # -------------------------------------------------------------------------
    # Query Controller
    # -------------------------------------------------------------------------

    async def mount(
        self,
        read_filter: Union[ReadFilter, str] = ReadFilter.ALL,
        search: str = "",
        page: int = 1,
    ) -> bool:
        """
        Load the initial page.

        Defaults to page 1 of all notifications with no search. Front ends
        that start from a known query (such as the CLI) pass it here so the
        first page is fetched once, without the search debounce.
        """
        if self._closed:
            return False
        self._query = self._query.with_filter(read_filter).with_search(search)
        return await self.fetch(page)

    async def set_filter(self, value: Union[ReadFilter, str]) -> bool:
        """
        Change the read filter and fetch page 1 immediately.

        A pending debounced search is cancelled; the fetch already carries
        the current search text.
        """
        if self._closed:
            return False
        self._debouncer.cancel()
        self._query = self._query.with_filter(value)
        return await self.fetch(1)

    def set_search(self, text: str) -> Optional[asyncio.Task]:
        """
        Update the search text and (re)start the debounce timer.

        Only the last call within the debounce window produces a fetch of
        page 1. Must be called from a running event loop.

        Returns:
            The scheduled task, or None when the center is closed
        """
        if self._closed:
            return None
        self._query = self._query.with_search(text)
        return self._debouncer.schedule(self._run_search)

    async def _run_search(self) -> None:
        await self.fetch(1)

    async def clear_filters(self) -> bool:
        """Reset filter and search, then fetch page 1 once."""
        if self._closed:
            return False
        self._debouncer.cancel()
        self._query = self._query.cleared()
        return await self.fetch(1)

    async def go_to_page(self, page: int) -> bool:
        """
        Fetch a specific page with the current filter and search.

        Pages outside [1, total_pages] are refused without a request.
        """
        if self._closed:
            return False
        if not self._pagination.contains(page):
            logger.debug(
                f"Ignoring page {page} outside 1..{self._pagination.total_pages}"
            )
            return False
        return await self.fetch(page)

    async def next_page(self) -> bool:
        return await self.go_to_page(self._pagination.current_page + 1)

    async def previous_page(self) -> bool:
        return await self.go_to_page(self._pagination.current_page - 1)

    async def refresh(self) -> bool:
        """Refetch the current page."""
        return await self.fetch(self._pagination.current_page)

    # -------------------------------------------------------------------------
    # Fetch / Reconcile
    # -------------------------------------------------------------------------

    async def fetch(self, page: int = 1) -> bool:
        """
        Fetch a page for the current query and replace the held state.

        On failure the held page is emptied, pagination is reset while
        keeping the page size, and an error notice is posted.
        A response overtaken by a newer fetch is discarded.

        Args:
            page: 1-based page number

        Returns:
            True if the page was loaded
        """
        if self._closed:
            return False

        query = self._query.with_page(max(page, 1))
        self._query = query
        previous_items_per_page = self._pagination.items_per_page

        self._fetch_seq += 1
        seq = self._fetch_seq
        self._loading = True
        try:
            payload = await self._api_client.list_notifications(query.to_params())
            if self._closed:
                logger.debug("Discarding list response for closed center")
                return False
            if seq != self._fetch_seq:
                logger.debug(f"Discarding superseded list response for page {query.page}")
                return False

            result = decode_list_response(
                payload,
                requested_page=query.page,
                previous_items_per_page=previous_items_per_page,
            )
            self._notifications = result.notifications
            self._pagination = result.pagination
            self._query = replace(
                query,
                page=result.pagination.current_page,
                items_per_page=result.pagination.items_per_page,
            )
            if result.unread_total is not None:
                self._server_unread_count = result.unread_total
            return True

        except ApiError as e:
            if self._closed or seq != self._fetch_seq:
                return False
            logger.error(f"Error fetching notifications: {e}")
            self._notifications = []
            self._pagination = Pagination.empty(previous_items_per_page)
            self._query = query.with_page(1)
            self._notices.error("Failed to load notifications")
            return False

        finally:
            # A superseded fetch must not clear the flag of the live one
            if seq == self._fetch_seq:
                self._loading = False

    async def refresh_unread_count(self) -> Optional[int]:
        """
        Ask the server for the unread count across all pages.

        Returns:
            The count, or None if the request failed
        """
        if self._closed:
            return None
        try:
            count = await self._api_client.get_unread_count()
        except ApiError as e:
            logger.error(f"Error fetching unread count: {e}")
            return None
        if not self._closed:
            self._server_unread_count = count
        return count

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def mark_as_read(self, notification_id: str) -> bool:
        """
        Mark one notification as read and update the held copy in place.

        Returns:
            True if the server accepted the change
        """
        if self._closed:
            return False
        try:
            await self._api_client.mark_as_read(notification_id)
        except ApiError as e:
            logger.error(f"Error marking notification {notification_id} as read: {e}")
            self._notices.error("Failed to mark as read")
            return False

        if self._closed:
            return True
        self._notifications = [
            n.mark_read() if n.id == notification_id else n
            for n in self._notifications
        ]
        self._notices.success("Marked as read")
        return True

    async def mark_all_as_read(self) -> bool:
        """Mark every notification read; held copies flip without a refetch."""
        if self._closed:
            return False
        try:
            await self._api_client.mark_all_as_read()
        except ApiError as e:
            logger.error(f"Error marking all notifications as read: {e}")
            self._notices.error("Failed to mark all as read")
            return False

        if self._closed:
            return True
        self._notifications = [n.mark_read() for n in self._notifications]
        if self._server_unread_count is not None:
            self._server_unread_count = 0
        self._notices.success("All notifications marked as read")
        return True

    async def delete(self, notification_id: str) -> bool:
        """
        Delete one notification after confirmation.

        A declined confirmation sends nothing. After a successful delete the
        item is removed locally and a page is refetched: the previous page
        if the current one is now empty (and not the first), otherwise the
        current page so the next item moves up.

        Returns:
            True if the notification was deleted
        """
        if self._closed:
            return False
        if not await self._confirmer(DELETE_CONFIRMATION):
            return False

        try:
            await self._api_client.delete_notification(notification_id)
        except ApiError as e:
            logger.error(f"Error deleting notification {notification_id}: {e}")
            self._notices.error("Failed to delete notification")
            return False

        if self._closed:
            return True
        self._notifications = [
            n for n in self._notifications if n.id != notification_id
        ]
        self._notices.success("Notification deleted")

        current_page = self._pagination.current_page
        if not self._notifications and current_page > 1:
            target_page = current_page - 1
        else:
            target_page = current_page
        await self.fetch(target_page)
        return True

    async def delete_all(self) -> bool:
        """Delete every notification after confirmation, then reload page 1."""
        if self._closed:
            return False
        if not await self._confirmer(DELETE_ALL_CONFIRMATION):
            return False

        try:
            await self._api_client.delete_all_notifications()
        except ApiError as e:
            logger.error(f"Error deleting all notifications: {e}")
            self._notices.error("Failed to delete notifications")
            return False

        if self._closed:
            return True
        self._notifications = []
        self._notices.success("All notifications deleted")
        await self.fetch(1)
        return True

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Tear down: cancel any pending search and ignore late responses."""
        self._closed = True
        self._debouncer.cancel()

    async def __aenter__(self) -> "NotificationCenter":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
