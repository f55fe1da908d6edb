"""Raw UTC offset extraction from compiled TZif bytes."""

from __future__ import annotations

import io
import struct
from typing import Sequence

from zoneinfo import _common as zoneinfo_common

from zone_compactor.core.errors import err


def raw_offset_seconds(data: bytes, *, zone: str = "<zone>") -> int:
    """Return the standard (non-DST) offset in seconds east of UTC.

    The offset is taken from the local time type of the latest transition
    into standard time, which is what runtime readers report as the raw
    offset once all historical changes have applied.
    """
    if data[:4] == b"TZif" and data[4:5] >= b"2" and not data.endswith(b"\n"):
        # v2+ footers are newline terminated; load_data never returns without one
        raise err("E_ZONE_DATA_INVALID", f"zone '{zone}' has a truncated TZif footer")
    try:
        trans_idx, _trans_list, utcoff, isdst, _abbr, _tz_str = zoneinfo_common.load_data(
            io.BytesIO(data)
        )
    except (ValueError, struct.error, AssertionError, UnicodeDecodeError) as exc:
        raise err("E_ZONE_DATA_INVALID", f"zone '{zone}' is not a readable TZif file: {exc}") from exc
    if not utcoff:
        raise err(
            "E_ZONE_DATA_INVALID",
            f"zone '{zone}' does not contain any local time definitions",
        )
    type_idx = _select_standard_type(trans_idx, isdst)
    if type_idx >= len(utcoff):
        raise err(
            "E_ZONE_DATA_INVALID",
            f"zone '{zone}' references local time type {type_idx} of {len(utcoff)}",
        )
    return int(utcoff[type_idx])


def _select_standard_type(trans_idx: Sequence[int], isdst: Sequence[int]) -> int:
    for idx in reversed(trans_idx):
        if idx < len(isdst) and not isdst[idx]:
            return idx
    if trans_idx:
        return trans_idx[0]
    for idx, flag in enumerate(isdst):
        if not flag:
            return idx
    return 0
