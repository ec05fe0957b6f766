import smtplib
import types

import pytest
import requests

from bilgibite_notify import channels
from bilgibite_notify.config import NotificationSettings
from bilgibite_notify.errors import DeliveryError
from bilgibite_notify.models import OutgoingMessage

MESSAGE = OutgoingMessage(
    to="ali@example.com",
    display_name="Ali",
    subject="Ödeme başarısız",
    html_body="<p>Merhaba Ali</p>",
    text_body="Merhaba Ali",
)


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.sent = []
        self.started_tls = False
        self.logged_in = None
        FakeSMTP.instances.append(self)

    def starttls(self):
        self.started_tls = True

    def login(self, username, password):
        self.logged_in = (username, password)

    def send_message(self, email):
        self.sent.append(email)

    def quit(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture(autouse=True)
def reset_fake_smtp():
    FakeSMTP.instances = []


def test_logging_sink_writes_preview(caplog):
    with caplog.at_level("INFO"):
        channels.LoggingSink().deliver(MESSAGE)
    assert "ali@example.com" in caplog.text
    assert "Ödeme başarısız" in caplog.text


def test_smtp_sink_requires_host():
    sink = channels.SmtpSink(NotificationSettings(sender="noreply@bilgibite.com"))
    with pytest.raises(DeliveryError) as excinfo:
        sink.deliver(MESSAGE)
    assert excinfo.value.recipient == "ali@example.com"


def test_smtp_sink_sends_multipart_email(monkeypatch):
    monkeypatch.setattr(channels.smtplib, "SMTP", FakeSMTP)
    settings = NotificationSettings(
        delivery="smtp",
        sender="noreply@bilgibite.com",
        smtp_host="smtp.example.com",
        smtp_username="user",
        smtp_password="secret",
    )

    channels.SmtpSink(settings).deliver(MESSAGE)

    server = FakeSMTP.instances[0]
    assert (server.host, server.port, server.timeout) == ("smtp.example.com", 587, 10)
    assert server.started_tls
    assert server.logged_in == ("user", "secret")
    email = server.sent[0]
    assert email["From"] == "noreply@bilgibite.com"
    assert email["To"] == "Ali <ali@example.com>"
    assert email.get_body(("html",)).get_content().strip() == "<p>Merhaba Ali</p>"


def test_smtp_sink_wraps_transport_errors(monkeypatch):
    class RefusingSMTP(FakeSMTP):
        def send_message(self, email):
            raise smtplib.SMTPRecipientsRefused({"ali@example.com": (550, b"no such user")})

    monkeypatch.setattr(channels.smtplib, "SMTP", RefusingSMTP)
    settings = NotificationSettings(sender="noreply@bilgibite.com", smtp_host="smtp.example.com")

    with pytest.raises(DeliveryError) as excinfo:
        channels.SmtpSink(settings).deliver(MESSAGE)
    assert isinstance(excinfo.value.cause, smtplib.SMTPRecipientsRefused)


def test_discord_sink_posts_payload(monkeypatch):
    calls = []

    def fake_post(url, headers=None, data=None, timeout=None):
        calls.append((url, data, timeout))
        return types.SimpleNamespace(status_code=204, text="")

    monkeypatch.setattr(channels.requests, "post", fake_post)
    settings = NotificationSettings(discord_webhook="https://discord.test/hook")

    channels.DiscordWebhookSink(settings).deliver(MESSAGE)

    url, data, timeout = calls[0]
    assert url == "https://discord.test/hook"
    assert '"username": "BilgiBite"' in data
    assert timeout == 5


def test_discord_sink_raises_on_error_status(monkeypatch):
    monkeypatch.setattr(
        channels.requests,
        "post",
        lambda *args, **kwargs: types.SimpleNamespace(status_code=429, text="rate limited"),
    )
    settings = NotificationSettings(discord_webhook="https://discord.test/hook")

    with pytest.raises(DeliveryError, match="429"):
        channels.DiscordWebhookSink(settings).deliver(MESSAGE)


def test_discord_sink_wraps_request_exceptions(monkeypatch):
    def fail(*args, **kwargs):
        raise requests.ConnectionError("dns failure")

    monkeypatch.setattr(channels.requests, "post", fail)
    settings = NotificationSettings(discord_webhook="https://discord.test/hook")

    with pytest.raises(DeliveryError, match="dns failure"):
        channels.DiscordWebhookSink(settings).deliver(MESSAGE)


@pytest.mark.parametrize(
    "delivery, expected",
    [("log", channels.LoggingSink), ("smtp", channels.SmtpSink), ("discord", channels.DiscordWebhookSink)],
)
def test_build_sink(delivery, expected):
    assert isinstance(channels.build_sink(NotificationSettings(delivery=delivery)), expected)
