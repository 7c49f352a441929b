"""
Tests for data models (whatsbot/models)
"""
import base64

from whatsbot.models import (
    ACCEPTED_STATES,
    Message,
    MessageMedia,
    Session,
    WAState,
    create_chat,
    is_accepted_state,
)


class TestMessage:
    """Message.from_raw"""

    def test_fields(self, raw_message):
        message = Message.from_raw(raw_message(msg_id="M1", body="yo", from_me=True))
        assert message.id.id == "M1"
        assert message.id.remote == "5511999999999@c.us"
        assert message.from_me
        assert message.body == "yo"
        assert message.from_ == "5511999999999@c.us"
        assert message.timestamp == 1600000000
        assert message.is_new_msg

    def test_location(self, raw_message):
        message = Message.from_raw(raw_message(type="location", body="", lat=1.0, lng=2.0, loc="Home"))
        assert message.location.latitude == 1.0
        assert message.location.description == "Home"

    def test_location_without_longitude_is_dropped(self, raw_message):
        message = Message.from_raw(raw_message(type="location", body="", lat=1.0))
        assert message.location is None

    def test_nested_wids_are_flattened(self, raw_message):
        message = Message.from_raw(
            raw_message(author={"_serialized": "1@c.us"}, mentionedJidList=[{"_serialized": "2@c.us"}])
        )
        assert message.author == "1@c.us"
        assert message.mentioned_ids == ["2@c.us"]


class TestMessageMedia:
    """MessageMedia loaders"""

    def test_from_file(self, tmp_path):
        path = tmp_path / "note.txt"
        path.write_bytes(b"hello")
        media = MessageMedia.from_file(str(path))
        assert media.mimetype == "text/plain"
        assert media.filename == "note.txt"
        assert base64.b64decode(media.data) == b"hello"


class TestSessionAndState:
    """Session tokens and connection states"""

    def test_local_storage_round_trip_keys(self):
        session = Session.from_local_storage({"WABrowserId": "b", "WAToken1": "t1", "other": "x"})
        assert session.browser_id == "b"
        assert session.to_local_storage() == {
            "WABrowserId": "b",
            "WASecretBundle": None,
            "WAToken1": "t1",
            "WAToken2": None,
        }

    def test_accepted_states(self):
        assert {s.value for s in ACCEPTED_STATES} == {"CONNECTED", "OPENING", "PAIRING", "TIMEOUT"}
        assert is_accepted_state("PAIRING")
        assert not is_accepted_state(WAState.UNPAIRED.value)
        assert not is_accepted_state("whatever")


class TestChatFactory:
    """create_chat"""

    def test_private_chat(self):
        chat = create_chat({"id": {"_serialized": "1@c.us"}, "unreadCount": 2, "pin": 1})
        assert type(chat).__name__ == "Chat"
        assert chat.unread_count == 2
        assert chat.pinned
