import pytest

from nostr_sdk.event_types import (
    CalendarEventRSVP,
    CalendarListEvent,
    DirectMessageEvent,
    FollowListEvent,
    resolve_event_class,
)
from nostr_sdk.events import NostrEvent
from nostr_sdk.kinds import (
    EventKind,
    UnknownEventKind,
    is_non_parameterized_replaceable,
    is_parameterized_replaceable,
    is_unknown,
    kind_code,
    kind_from_code,
    known_kinds,
)

KNOWN_TABLE = {
    0: EventKind.SET_METADATA,
    1: EventKind.TEXT_NOTE,
    3: EventKind.FOLLOW_LIST,
    4: EventKind.DIRECT_MESSAGE,
    5: EventKind.DELETION,
    6: EventKind.REPOST,
    7: EventKind.REACTION,
    16: EventKind.GENERIC_REPOST,
    1984: EventKind.REPORT,
    10000: EventKind.MUTE_LIST,
    10003: EventKind.BOOKMARKS_LIST,
    30023: EventKind.LONGFORM_CONTENT,
    31922: EventKind.DATE_BASED_CALENDAR_EVENT,
    31923: EventKind.TIME_BASED_CALENDAR_EVENT,
    31924: EventKind.CALENDAR,
    31925: EventKind.CALENDAR_EVENT_RSVP,
}


@pytest.mark.parametrize("code,kind", sorted(KNOWN_TABLE.items()))
def test_known_codes(code, kind):
    assert kind_from_code(code) is kind
    assert kind_code(kind) == code


def test_known_kinds_lists_the_whole_table():
    assert known_kinds() == [KNOWN_TABLE[c] for c in sorted(KNOWN_TABLE)]


@pytest.mark.parametrize("code", [-1, 2, 8, 1985, 9999, 20000, 30000, 2**40])
def test_unknown_codes_keep_their_value(code):
    kind = kind_from_code(code)
    assert kind == UnknownEventKind(code)
    assert is_unknown(kind)
    assert kind_code(kind) == code


def test_round_trip_over_a_range():
    for code in range(-5, 40005, 7):
        assert kind_code(kind_from_code(code)) == code


def test_kind_code_rejects_non_ints():
    with pytest.raises(TypeError):
        kind_code("1")
    with pytest.raises(TypeError):
        kind_code(True)


@pytest.mark.parametrize("code,expected", [
    (0, True),
    (1, False),
    (3, True),
    (4, False),
    (9999, False),
    (10000, True),
    (19999, True),
    (20000, False),
    (30000, False),
])
def test_non_parameterized_replaceable(code, expected):
    assert is_non_parameterized_replaceable(code) is expected
    assert is_non_parameterized_replaceable(kind_from_code(code)) is expected


@pytest.mark.parametrize("code,expected", [
    (0, False),
    (19999, False),
    (29999, False),
    (30000, True),
    (30023, True),
    (39999, True),
    (40000, False),
])
def test_parameterized_replaceable(code, expected):
    assert is_parameterized_replaceable(kind_from_code(code)) is expected


def test_replaceable_ranges_never_overlap():
    for code in list(range(0, 50)) + list(range(9990, 40010)):
        assert not (is_non_parameterized_replaceable(code) and is_parameterized_replaceable(code))


def test_resolve_event_class():
    assert resolve_event_class(EventKind.DIRECT_MESSAGE) is DirectMessageEvent
    assert resolve_event_class(3) is FollowListEvent
    assert resolve_event_class(EventKind.CALENDAR) is CalendarListEvent
    assert resolve_event_class(31925) is CalendarEventRSVP
    assert resolve_event_class(UnknownEventKind(42)) is NostrEvent
    assert resolve_event_class(42) is NostrEvent


def test_every_known_kind_resolves_to_a_subclass():
    for kind in known_kinds():
        cls = resolve_event_class(kind)
        assert issubclass(cls, NostrEvent)
        assert cls is not NostrEvent
