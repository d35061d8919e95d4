"""
Event kinds.

Known kinds live in the `EventKind` table. Any other integer is represented
by `UnknownEventKind`, which keeps the raw code so events of kinds this
library does not know yet still round-trip unchanged.
"""
from dataclasses import dataclass
from enum import IntEnum


class EventKind(IntEnum):
    SET_METADATA = 0                    # NIP-01
    TEXT_NOTE = 1                       # NIP-01
    FOLLOW_LIST = 3                     # NIP-02
    DIRECT_MESSAGE = 4                  # NIP-04
    DELETION = 5                        # NIP-09
    REPOST = 6                          # NIP-18, reposts a kind 1 note
    REACTION = 7                        # NIP-25
    GENERIC_REPOST = 16                 # NIP-18, reposts anything but kind 1
    REPORT = 1984                       # NIP-56
    MUTE_LIST = 10000                   # NIP-51
    BOOKMARKS_LIST = 10003              # NIP-51
    LONGFORM_CONTENT = 30023            # NIP-23
    DATE_BASED_CALENDAR_EVENT = 31922   # NIP-52
    TIME_BASED_CALENDAR_EVENT = 31923   # NIP-52
    CALENDAR = 31924                    # NIP-52
    CALENDAR_EVENT_RSVP = 31925         # NIP-52


@dataclass(frozen=True)
class UnknownEventKind:
    value: int

    def __int__(self) -> int:
        return self.value


def known_kinds() -> list[EventKind]:
    return list(EventKind)


def kind_from_code(code: int) -> EventKind | UnknownEventKind:
    code = kind_code(code)
    try:
        return EventKind(code)
    except ValueError:
        return UnknownEventKind(code)


def kind_code(kind) -> int:
    """Accepts an EventKind, an UnknownEventKind or a bare int."""
    if isinstance(kind, (EventKind, UnknownEventKind)):
        return kind.value
    if isinstance(kind, int) and not isinstance(kind, bool):
        return kind
    raise TypeError(f"not an event kind: {kind!r}")


def is_unknown(kind) -> bool:
    return isinstance(kind_from_code(kind_code(kind)), UnknownEventKind)


def is_non_parameterized_replaceable(kind) -> bool:
    """
    For kind n with 10000 <= n < 20000, n == 0 or n == 3, relays keep only the
    latest event per (pubkey, kind).
    """
    code = kind_code(kind)
    return code in (0, 3) or 10000 <= code < 20000


def is_parameterized_replaceable(kind) -> bool:
    """
    For kind n with 30000 <= n < 40000, relays keep only the latest event per
    (pubkey, kind, first "d" tag value).
    """
    return 30000 <= kind_code(kind) < 40000
