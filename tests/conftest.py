"""Shared test fixtures."""

from types import SimpleNamespace

import pytest

from config import Settings


class FakeMessages:
    """Mimics ``twilio.rest.Client.messages``; records every create() call."""

    def __init__(self, fail: Exception | None = None):
        self.sent: list[dict] = []
        self.fail = fail

    def create(self, body, from_, to):
        if self.fail is not None:
            raise self.fail
        self.sent.append({"body": body, "from_": from_, "to": to})
        return SimpleNamespace(sid=f"SM{len(self.sent):04d}")


class FakeSmsClient:
    def __init__(self, fail: Exception | None = None):
        self.messages = FakeMessages(fail)


@pytest.fixture
def settings(tmp_path):
    """Test settings with throwaway files, fast bcrypt and a configured SMS channel."""
    return Settings(
        events_file=str(tmp_path / "events.json"),
        users_file=str(tmp_path / "users.json"),
        static_dir=str(tmp_path / "public"),
        api_key="",
        server_lat=13.218,
        server_lng=75.006,
        twilio_sid="ACtest",
        twilio_token="test-token",
        twilio_from="+15550000000",
        alert_to="+15551111111",
        jwt_secret="test-secret-" + "x" * 52,
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture
def sms_client():
    return FakeSmsClient()


@pytest.fixture
def failing_sms_client():
    """Factory for a client whose every send raises the given error."""
    return lambda error: FakeSmsClient(fail=error)
