"""
Tests for the cache value codec.
"""

from __future__ import annotations

import json
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from content_cache.cache.codec import NodeKind, decode, encode, kind_of, mark_dates
from content_cache.cache.errors import CodecError

T = datetime(2024, 5, 1, 10, 30, 15, 123000, tzinfo=timezone.utc)


class TestRoundTrip:
    def test_record_with_date_round_trips(self):
        value = {"name": "x", "when": T}
        assert decode(encode(value)) == {"name": "x", "when": T}

    def test_nested_dates_in_lists_and_dicts(self):
        value = {
            "id": "a1",
            "updated_at": datetime(2024, 1, 3, 12, 0),
            "topics": [{"id": "t1", "created_at": T}, {"id": "t2", "created_at": None}],
            "history": [[T, T + timedelta(days=1)]],
        }
        restored = decode(encode(value))
        assert restored == value
        assert isinstance(restored["topics"][0]["created_at"], datetime)

    def test_naive_datetime_stays_naive(self):
        naive = datetime(2024, 2, 29, 23, 59, 59)
        restored = decode(encode({"at": naive}))["at"]
        assert restored == naive
        assert restored.tzinfo is None

    def test_offset_is_preserved_as_same_instant(self):
        plus_seven = datetime(2024, 5, 1, 17, 30, tzinfo=timezone(timedelta(hours=7)))
        restored = decode(encode(plus_seven))
        assert restored == plus_seven
        assert restored.utcoffset() == timedelta(hours=7)

    @pytest.mark.parametrize("value", [None, True, False, 0, 42, 3.5, "", "text", [], {}])
    def test_primitives_and_empty_containers_pass_through(self, value):
        restored = decode(encode(value))
        assert restored == value
        assert type(restored) is type(value)

    def test_tuples_come_back_as_lists(self):
        assert decode(encode({"pair": (1, T)})) == {"pair": [1, T]}


class TestWireFormat:
    def test_dates_are_tagged(self):
        payload = json.loads(encode({"when": T}))
        assert payload == {"when": {"__type": "Date", "value": "2024-05-01T10:30:15.123000+00:00"}}

    def test_top_level_date(self):
        assert json.loads(encode(T)) == {"__type": "Date", "value": T.isoformat()}

    def test_decodes_javascript_style_timestamps(self):
        # Written by other clients as Date.toISOString()
        text = '{"when": {"__type": "Date", "value": "2024-05-01T10:30:15.123Z"}}'
        assert decode(text) == {"when": T}

    def test_mark_dates_does_not_mutate_input(self):
        value = {"when": T, "items": [T]}
        marked = mark_dates(value)
        assert value == {"when": T, "items": [T]}
        assert marked["items"][0]["__type"] == "Date"

    def test_non_ascii_is_kept_readable(self):
        assert "Film Indonesia: Pengabdi Setan" in encode({"title": "Film Indonesia: Pengabdi Setan"})
        assert "Amélie" in encode("Amélie")


class TestNodeKinds:
    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (None, NodeKind.NULL),
            (True, NodeKind.BOOLEAN),
            (1, NodeKind.NUMBER),
            (1.5, NodeKind.NUMBER),
            ("s", NodeKind.STRING),
            (T, NodeKind.TEMPORAL),
            ([1], NodeKind.SEQUENCE),
            ((1,), NodeKind.SEQUENCE),
            ({"a": 1}, NodeKind.MAPPING),
        ],
    )
    def test_closed_set(self, value, kind):
        assert kind_of(value) is kind

    @pytest.mark.parametrize("value", [{1, 2}, Decimal("1.5"), date(2024, 1, 1), object(), b"raw"])
    def test_unknown_kinds_are_rejected(self, value):
        with pytest.raises(CodecError):
            encode({"field": value})


class TestDecodeFailures:
    def test_malformed_json(self):
        with pytest.raises(CodecError):
            decode("{not json")

    def test_tag_with_garbage_value(self):
        with pytest.raises(CodecError):
            decode('{"__type": "Date", "value": "yesterday"}')

    def test_tag_with_non_string_value(self):
        with pytest.raises(CodecError):
            decode('{"__type": "Date", "value": 1714559415}')

    def test_bytes_that_are_not_utf8(self):
        with pytest.raises(CodecError):
            decode(b"\x80{}")

    def test_deeply_nested_payload(self):
        with pytest.raises(CodecError):
            decode("[" * 100_000 + "]" * 100_000)

    def test_deeply_nested_value_cannot_be_encoded(self):
        value: list = []
        for _ in range(5000):
            value = [value]
        with pytest.raises(CodecError):
            encode(value)

    def test_other_type_tags_are_left_alone(self):
        assert decode('{"__type": "Map", "value": 1}') == {"__type": "Map", "value": 1}

    def test_tag_without_value_is_left_alone(self):
        assert decode('{"__type": "Date"}') == {"__type": "Date"}


def test_user_dict_shaped_like_a_tag_is_revived():
    # Known ambiguity: the tag is not escaped on encode.
    lookalike = {"__type": "Date", "value": "2024-05-01T10:30:15.123000+00:00"}
    assert decode(encode({"meta": lookalike})) == {"meta": T}
