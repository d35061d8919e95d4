"""
Concrete event shapes and the kind -> class table used when decoding.

The subclasses add no fields, only the tags their kind requires and a few
accessors. Adding a kind means adding a class and one entry in EVENT_CLASSES.
"""
import json

from .errors import MalformedEvent
from .events import NostrEvent
from .keys import PrivateKey
from .kinds import EventKind, kind_from_code
from .tags import TagName


class SetMetadataEvent(NostrEvent):
    def user_metadata(self) -> dict:
        """Content is a stringified JSON object: {name, about, picture, ...}."""
        try:
            data = json.loads(self.content or "{}")
        except ValueError as e:
            raise MalformedEvent(f"metadata content is not JSON: {e}") from e
        if not isinstance(data, dict):
            raise MalformedEvent("metadata content must be a JSON object")
        return data


class TextNoteEvent(NostrEvent):
    pass


class FollowListEvent(NostrEvent):
    @property
    def followed_pubkeys(self) -> list[str]:
        return [t.value for t in self.tags_named(TagName.PUBKEY) if t.value]


class DirectMessageEvent(NostrEvent):
    required_tags = (TagName.PUBKEY,)

    @property
    def recipient_pubkey(self) -> str:
        return self.first_tag_value(TagName.PUBKEY)

    def decrypted_content(self, private_key: PrivateKey) -> str:
        """
        Decrypt with the reader's private key. The other party is the author,
        unless the reader is the author, in which case it is the tagged recipient.
        """
        from .direct_message import read_direct_message

        return read_direct_message(self, private_key)


class DeletionEvent(NostrEvent):
    required_tags = (TagName.EVENT,)

    @property
    def deleted_event_ids(self) -> list[str]:
        return [t.value for t in self.tags_named(TagName.EVENT) if t.value]

    @property
    def reason(self) -> str:
        return self.content


class TextNoteRepostEvent(NostrEvent):
    required_tags = (TagName.EVENT,)

    @property
    def reposted_event_id(self) -> str:
        return self.first_tag_value(TagName.EVENT)


class ReactionEvent(NostrEvent):
    required_tags = (TagName.EVENT,)

    @property
    def reacted_event_id(self) -> str:
        # NIP-25: the last "e" tag is the event being reacted to
        return self.tags_named(TagName.EVENT)[-1].value


class GenericRepostEvent(TextNoteRepostEvent):
    pass


class ReportEvent(NostrEvent):
    required_tags = (TagName.PUBKEY,)


class MuteListEvent(NostrEvent):
    @property
    def muted_pubkeys(self) -> list[str]:
        return [t.value for t in self.tags_named(TagName.PUBKEY) if t.value]


class BookmarksListEvent(NostrEvent):
    pass


class LongformContentEvent(NostrEvent):
    required_tags = (TagName.IDENTIFIER,)

    @property
    def title(self) -> str | None:
        return self.first_tag_value("title")


class DateBasedCalendarEvent(NostrEvent):
    required_tags = (TagName.IDENTIFIER,)


class TimeBasedCalendarEvent(NostrEvent):
    required_tags = (TagName.IDENTIFIER,)


class CalendarListEvent(NostrEvent):
    required_tags = (TagName.IDENTIFIER,)


class CalendarEventRSVP(NostrEvent):
    required_tags = (TagName.IDENTIFIER,)


EVENT_CLASSES: dict[EventKind, type[NostrEvent]] = {
    EventKind.SET_METADATA: SetMetadataEvent,
    EventKind.TEXT_NOTE: TextNoteEvent,
    EventKind.FOLLOW_LIST: FollowListEvent,
    EventKind.DIRECT_MESSAGE: DirectMessageEvent,
    EventKind.DELETION: DeletionEvent,
    EventKind.REPOST: TextNoteRepostEvent,
    EventKind.REACTION: ReactionEvent,
    EventKind.GENERIC_REPOST: GenericRepostEvent,
    EventKind.REPORT: ReportEvent,
    EventKind.MUTE_LIST: MuteListEvent,
    EventKind.BOOKMARKS_LIST: BookmarksListEvent,
    EventKind.LONGFORM_CONTENT: LongformContentEvent,
    EventKind.DATE_BASED_CALENDAR_EVENT: DateBasedCalendarEvent,
    EventKind.TIME_BASED_CALENDAR_EVENT: TimeBasedCalendarEvent,
    EventKind.CALENDAR: CalendarListEvent,
    EventKind.CALENDAR_EVENT_RSVP: CalendarEventRSVP,
}


def resolve_event_class(kind) -> type[NostrEvent]:
    """Concrete class for a kind; unknown kinds get the plain NostrEvent."""
    return EVENT_CLASSES.get(kind_from_code(kind), NostrEvent)
