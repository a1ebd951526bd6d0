"""
Hostel Notify - Notification center client for the hostel management API.

This package provides an async notification center that lists, searches,
filters and paginates a user's notifications, applies read/delete
mutations, and derives statistics from the loaded page.

Key modules:
- api_client: HTTP client for the notifications REST endpoints
- center: NotificationCenter state container (query, fetch, mutations)
- reconcile: Tolerant decoding of list responses and pagination
- stats: Derived statistics over the loaded page
- config: Client configuration management
"""

import os
import re
import subprocess
from typing import Optional


def _run_git_command(args: list[str]) -> Optional[str]:
    """Run a Git command and return its output."""
    try:
        result = subprocess.run(
            ['git'] + args,
            capture_output=True,
            text=True,
            check=True,
            timeout=5
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError):
        return None


def _get_version_from_git() -> Optional[str]:
    """
    Get version from Git tags.

    Version Format:
    - Tagged releases: "v1.2.3"
    - Development builds: "v1.2.3-dev.5+a1b2c3d"
    """
    describe = _run_git_command(['describe', '--tags', '--long', '--always'])
    if not describe:
        return None

    match = re.match(r'^(.+?)-(\d+)-g([a-f0-9]+)$', describe)
    if not match:
        return None

    tag, commits_since, commit_hash = match.groups()
    if int(commits_since) == 0:
        return tag
    return f"{tag}-dev.{commits_since}+{commit_hash}"


def _get_version() -> str:
    """
    Get version with priority: HOSTEL_NOTIFY_VERSION env var > installed metadata > Git tags > fallback.
    """
    env_version = os.environ.get('HOSTEL_NOTIFY_VERSION')
    if env_version:
        return env_version

    try:
        from importlib.metadata import PackageNotFoundError, version
        try:
            return version('hostel-notify')
        except PackageNotFoundError:
            pass
    except ImportError:
        pass

    git_version = _get_version_from_git()
    if git_version:
        return git_version

    return '0.0.0-dev+unknown'


__version__ = _get_version()
