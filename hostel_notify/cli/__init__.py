"""
Hostel Notify CLI - Command-line interface for the notification center.

Commands:
- list: List, search and filter notifications
- read / read-all: Mark notifications as read
- delete / delete-all: Delete notifications
- unread-count: Show the unread counter
- config: Manage client configuration
"""
