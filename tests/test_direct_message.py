import dataclasses

import pytest

from nostr_sdk.direct_message import build_direct_message, read_direct_message
from nostr_sdk.errors import DecryptionFailed, InvalidKey, InvalidSignature, MalformedContent
from nostr_sdk.event_types import DirectMessageEvent
from nostr_sdk.events import decode_event
from nostr_sdk.kinds import EventKind, kind_from_code
from nostr_sdk.tags import Tag

# A direct message recorded from a live client: a note the author sent to themselves.
FIXTURE_PUBKEY = "9947f9659dd80c3682402b612f5447e28249997fb3709500c32a585eb0977340"
FIXTURE = {
    "id": "a606649e4995a12226902bd38573c21b04732c0835e415d09be6fbe93879b666",
    "pubkey": FIXTURE_PUBKEY,
    "created_at": 1691768179,
    "kind": 4,
    "tags": [["p", FIXTURE_PUBKEY]],
    "content": "+0V/p6oNtFXAlWVzDTx6wg==?iv=L6gDJ8ei4k1t3lUNgYAahw==",
    "sig": "0" * 128,
}


def test_create_direct_message(alice):
    content = "Secret message."
    event = build_direct_message(content, alice.public_key, alice)

    assert isinstance(event, DirectMessageEvent)
    assert event.kind is EventKind.DIRECT_MESSAGE
    assert "?iv=" in event.content
    assert event.tags == (Tag.pubkey(alice.public_key.hex),)
    assert event.decrypted_content(alice.private_key) == content
    event.verify()


def test_direct_message_between_two_parties(alice, bob):
    event = build_direct_message("hi bob", bob.public_key.hex, alice, created_at=1700000000)

    assert [t.to_list() for t in event.tags] == [["p", bob.public_key.hex]]
    assert event.recipient_pubkey == bob.public_key.hex
    assert event.pubkey == alice.public_key.hex
    # recipient reads with the author's key, author reads with the recipient's
    assert event.decrypted_content(bob.private_key) == "hi bob"
    assert read_direct_message(event, alice.private_key) == "hi bob"


def test_direct_message_to_npub(alice, bob):
    event = build_direct_message("via npub", bob.public_key.npub, alice)
    assert event.recipient_pubkey == bob.public_key.hex
    assert event.decrypted_content(bob.private_key) == "via npub"


def test_third_party_cannot_read(alice, bob, carol):
    event = build_direct_message("not for carol", bob.public_key, alice)
    with pytest.raises(DecryptionFailed):
        event.decrypted_content(carol.private_key)


def test_empty_message_is_rejected(alice, bob):
    with pytest.raises(ValueError):
        build_direct_message("   ", bob.public_key, alice)


def test_bad_recipient_is_rejected(alice):
    with pytest.raises(InvalidKey):
        build_direct_message("hello", "not a key", alice)


def test_wire_round_trip(alice, bob):
    event = build_direct_message("over the wire", bob.public_key, alice)
    decoded = decode_event(event.to_json())
    assert isinstance(decoded, DirectMessageEvent)
    decoded.verify()
    assert decoded.decrypted_content(bob.private_key) == "over the wire"


def test_tampered_message_content_is_malformed(alice, bob):
    event = build_direct_message("hello", bob.public_key, alice)
    broken = dataclasses.replace(event, content=event.content.replace("?iv=", "&iv="))
    with pytest.raises(MalformedContent):
        broken.decrypted_content(bob.private_key)


def test_decode_recorded_direct_message(carol):
    event = decode_event(FIXTURE)

    assert isinstance(event, DirectMessageEvent)
    assert event.content == "+0V/p6oNtFXAlWVzDTx6wg==?iv=L6gDJ8ei4k1t3lUNgYAahw=="
    assert event.pubkey == FIXTURE_PUBKEY
    assert event.created_at == 1691768179
    assert event.kind is EventKind.DIRECT_MESSAGE
    assert kind_from_code(4) is EventKind.DIRECT_MESSAGE
    assert event.tags == (Tag.pubkey(FIXTURE_PUBKEY),)

    # the stored id is exactly the hash of the canonical serialization
    assert event.compute_id() == FIXTURE["id"]

    # the signature was replaced, so only the signature check fails
    with pytest.raises(InvalidSignature):
        event.verify()

    # someone holding an unrelated key gets a clean failure, not garbage
    with pytest.raises(DecryptionFailed):
        event.decrypted_content(carol.private_key)


@pytest.mark.parametrize("content", [None, b"bytes", 42])
def test_non_str_message_is_a_type_error(alice, bob, content):
    with pytest.raises(TypeError):
        build_direct_message(content, bob.public_key, alice)
