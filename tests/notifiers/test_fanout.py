"""Tests for the notification fanout."""

import pytest

from notifiers.exceptions import NotificationError
from notifiers.fanout import NotificationFanout

from tests.utils.test_helpers import RecordingNotifier


class TestNotificationFanout:
    """Test key management and delivery to every key."""

    @pytest.fixture
    def built(self):
        """Notifiers created by the fanout, by key."""
        return {}

    @pytest.fixture
    def make_fanout(self, built):
        """Build a fanout whose listed keys fail."""

        def build(keys, failing=()) -> NotificationFanout:
            def factory(key: str) -> RecordingNotifier:
                built[key] = RecordingNotifier(key, fail=key in failing)
                return built[key]

            return NotificationFanout(keys, notifier_factory=factory)

        return build

    @pytest.mark.asyncio
    async def test_send_to_all_keys(self, make_fanout, built):
        """Test every key receives the notification."""
        fanout = make_fanout(["a", "b", "c"])

        await fanout.send("title", "body")

        assert all(built[key].sent == [("title", "body")] for key in "abc")

    @pytest.mark.asyncio
    async def test_empty_key_set(self, make_fanout):
        """Test sending without keys is an error."""
        fanout = make_fanout([])

        with pytest.raises(NotificationError, match="No notification keys"):
            await fanout.send("title", "body")

    @pytest.mark.asyncio
    async def test_one_failure_still_attempts_all(self, make_fanout, built):
        """Test a failing key does not stop delivery to the others."""
        fanout = make_fanout(["a", "b", "c"], failing={"b"})

        with pytest.raises(NotificationError) as exc_info:
            await fanout.send("title", "body")

        assert all(len(built[key].sent) == 1 for key in "abc")
        assert list(exc_info.value.failures) == ["b"]
        assert "1 of 3" in str(exc_info.value)
        assert "*: rejected" in str(exc_info.value)

    def test_keys_are_deduplicated(self, make_fanout, built):
        """Test duplicate and blank keys are ignored."""
        fanout = make_fanout(["a", " a ", "", "b", "a"])

        assert fanout.keys == ["a", "b"]
        assert len(fanout) == 2
        assert set(built) == {"a", "b"}

    def test_add_and_remove_are_idempotent(self, make_fanout):
        """Test repeated adds and removes."""
        fanout = make_fanout([])

        assert fanout.add_key("a") is True
        assert fanout.add_key("a") is False
        assert fanout.remove_key("a") is True
        assert fanout.remove_key("a") is False
        assert fanout.keys == []

    def test_set_keys_keeps_existing_notifiers(self, make_fanout, built):
        """Test replacing the key set."""
        fanout = make_fanout(["a", "b"])
        notifier_a = built["a"]

        fanout.set_keys(["c", "a", "c"])

        assert fanout.keys == ["a", "c"]
        assert built["a"] is notifier_a

    @pytest.mark.asyncio
    async def test_aclose_closes_notifiers(self, make_fanout, built):
        """Test closing the fanout closes each notifier."""
        fanout = make_fanout(["a", "b"])

        await fanout.aclose()

        assert built["a"].closed and built["b"].closed

    @pytest.mark.asyncio
    async def test_error_message_masks_keys(self, make_fanout):
        """Test failing keys are masked in the message but kept in failures."""
        secret = "SCT123456SECRETKEY999"
        fanout = make_fanout([secret], failing={secret})

        with pytest.raises(NotificationError) as exc_info:
            await fanout.send("title", "body")

        assert secret not in str(exc_info.value)
        assert "SCT1*************Y999" in str(exc_info.value)
        assert list(exc_info.value.failures) == [secret]
