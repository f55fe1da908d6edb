import pytest

from zone_compactor.compaction.l0.binary import (
    INT32_MAX,
    INT32_MIN,
    UINT32_MAX,
    fits_int32,
    fits_uint32,
    pack_int32,
    pack_record,
    pack_uint32,
    record_struct,
    unpack_int32,
    unpack_record,
    unpack_uint32,
)


def test_int32_is_network_order_twos_complement():
    assert pack_int32(1) == b"\x00\x00\x00\x01"
    assert pack_int32(-1) == b"\xff\xff\xff\xff"
    assert pack_int32(-3600) == b"\xff\xff\xf1\xf0"
    assert pack_int32(19800) == b"\x00\x00\x4d\x58"
    assert unpack_int32(b"\xff\xff\xf1\xf0") == -3600
    assert unpack_int32(b"junk\x00\x00\x4d\x58", 4) == 19800


def test_uint32_round_trip_at_bounds():
    assert pack_uint32(UINT32_MAX) == b"\xff\xff\xff\xff"
    assert unpack_uint32(pack_uint32(UINT32_MAX)) == UINT32_MAX


def test_range_predicates():
    assert fits_int32(INT32_MIN) and fits_int32(INT32_MAX)
    assert not fits_int32(INT32_MAX + 1)
    assert fits_uint32(0) and fits_uint32(UINT32_MAX)
    assert not fits_uint32(-1)
    assert not fits_uint32(UINT32_MAX + 1)


def test_record_layout():
    assert record_struct(40).size == 52
    record = pack_record(b"GMT", 10, 5, -60, name_width=40)
    assert len(record) == 52
    assert record[:3] == b"GMT"
    assert record[3:40] == b"\x00" * 37
    assert record[40:44] == b"\x00\x00\x00\x0a"
    assert record[44:48] == b"\x00\x00\x00\x05"
    assert record[48:52] == b"\xff\xff\xff\xc4"
    assert unpack_record(record, 0, name_width=40) == (b"GMT", 10, 5, -60)


def test_record_requires_terminator_room():
    with pytest.raises(ValueError):
        pack_record(b"x" * 8, 0, 0, 0, name_width=8)
    assert len(pack_record(b"x" * 7, 0, 0, 0, name_width=8)) == 20
