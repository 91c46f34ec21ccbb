"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from SitixUserError.

Programming errors and bugs should NOT inherit from SitixUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations


class SitixUserError(Exception):
    """
    Base class for all user-facing errors in Sitix.

    These errors indicate problems that the user can fix:
    broken markup, missing templates, unreadable files, bad configuration.
    """
    pass


__all__ = ["SitixUserError"]
