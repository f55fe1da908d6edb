"""Time helpers for run reports and event lines."""

from __future__ import annotations

import datetime as dt


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def rfc3339_micro(value: dt.datetime) -> str:
    """Format ``value`` in UTC with exactly 6 fractional digits and trailing Z."""
    return value.astimezone(dt.timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def utc_now_rfc3339_micro() -> str:
    return rfc3339_micro(utc_now())
