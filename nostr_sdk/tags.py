from dataclasses import dataclass


class TagName:
    PUBKEY = "p"
    EVENT = "e"
    IDENTIFIER = "d"
    HASHTAG = "t"


@dataclass(frozen=True)
class Tag:
    """
    One annotation on an event, e.g. ["p", <pubkey>, <relay url>].

    The first field is the discriminator, the rest are its values. Equality is
    exact, element by element.
    """

    fields: tuple[str, ...]

    def __post_init__(self):
        fields = tuple(self.fields)
        if not fields:
            raise ValueError("tag must have at least a name")
        if not all(isinstance(f, str) for f in fields):
            raise ValueError("tag fields must be strings")
        object.__setattr__(self, "fields", fields)

    @classmethod
    def from_list(cls, values) -> "Tag":
        return cls(tuple(values))

    @classmethod
    def pubkey(cls, pubkey_hex: str, *other) -> "Tag":
        return cls((TagName.PUBKEY, pubkey_hex, *other))

    @classmethod
    def event(cls, event_id: str, *other) -> "Tag":
        return cls((TagName.EVENT, event_id, *other))

    @classmethod
    def identifier(cls, value: str) -> "Tag":
        return cls((TagName.IDENTIFIER, value))

    @property
    def name(self) -> str:
        return self.fields[0]

    @property
    def value(self) -> str | None:
        return self.fields[1] if len(self.fields) > 1 else None

    @property
    def other_parameters(self) -> tuple[str, ...]:
        return self.fields[2:]

    def to_list(self) -> list[str]:
        return list(self.fields)


def as_tags(tags) -> tuple[Tag, ...]:
    """Accept Tag objects or plain lists of strings; keep order and duplicates."""
    return tuple(t if isinstance(t, Tag) else Tag.from_list(t) for t in (tags or ()))
