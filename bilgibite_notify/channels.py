from __future__ import annotations

import json
import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

import requests

from .config import NotificationSettings
from .errors import DeliveryError
from .models import OutgoingMessage

LOGGER = logging.getLogger(__name__)

PREVIEW_CHARS = 200


class LoggingSink:
    """Development sink: writes the message to the log instead of sending it."""

    def deliver(self, message: OutgoingMessage) -> None:
        LOGGER.info(
            "EMAIL to %s (%s) | %s | %s...",
            message.to,
            message.display_name or "Unknown",
            message.subject,
            message.text_body.strip()[:PREVIEW_CHARS],
        )


class SmtpSink:
    """Send the rendered message as a multipart e-mail over SMTP."""

    def __init__(self, settings: NotificationSettings, timeout: float = 10):
        self.settings = settings
        self.timeout = timeout

    def _connection(self) -> smtplib.SMTP:
        settings = self.settings
        server = smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=self.timeout)
        try:
            if settings.smtp_use_tls:
                server.starttls()
            if settings.smtp_username and settings.smtp_password:
                server.login(settings.smtp_username, settings.smtp_password)
        except Exception:
            server.quit()
            raise
        return server

    def build_email(self, message: OutgoingMessage) -> EmailMessage:
        email = EmailMessage()
        email["Subject"] = message.subject
        email["From"] = self.settings.sender
        email["To"] = formataddr((message.display_name, message.to)) if message.display_name else message.to
        email.set_content(message.text_body)
        if message.html_body:
            email.add_alternative(message.html_body, subtype="html")
        return email

    def deliver(self, message: OutgoingMessage) -> None:
        if not self.settings.smtp_host:
            raise DeliveryError("SMTP_HOST not configured", recipient=message.to)
        if not self.settings.sender:
            raise DeliveryError("NOTIFY_FROM_EMAIL not configured", recipient=message.to)

        email = self.build_email(message)
        try:
            with self._connection() as server:
                server.send_message(email)
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(f"SMTP delivery failed: {exc}", recipient=message.to, cause=exc) from exc
        LOGGER.info("Sent email '%s' to %s", message.subject, message.to)


class DiscordWebhookSink:
    """Post the subject and text body to a Discord webhook."""

    def __init__(self, settings: NotificationSettings, timeout: float = 5):
        self.settings = settings
        self.timeout = timeout

    def deliver(self, message: OutgoingMessage) -> None:
        webhook_url = self.settings.discord_webhook
        if not webhook_url:
            raise DeliveryError("DISCORD_WEBHOOK_URL not configured", recipient=message.to)

        payload = {
            "username": self.settings.discord_bot_name,
            "content": f"**{message.subject}**\n{message.text_body.strip()}",
        }
        headers = {"Content-Type": "application/json"}
        try:
            resp = requests.post(webhook_url, headers=headers, data=json.dumps(payload), timeout=self.timeout)
        except requests.RequestException as exc:
            raise DeliveryError(f"Discord webhook failed: {exc}", recipient=message.to, cause=exc) from exc
        if resp.status_code >= 400:
            raise DeliveryError(
                f"Discord webhook responded with {resp.status_code}: {resp.text[:120]}",
                recipient=message.to,
            )
        LOGGER.info("Sent discord notification '%s' for %s", message.subject, message.to)


def build_sink(settings: NotificationSettings):
    """Return the delivery sink selected by ``settings.delivery``."""
    if settings.delivery == "log":
        return LoggingSink()
    if settings.delivery == "smtp":
        return SmtpSink(settings)
    if settings.delivery == "discord":
        return DiscordWebhookSink(settings)
    raise ValueError(f"Unknown delivery channel '{settings.delivery}'")


__all__ = ["LoggingSink", "SmtpSink", "DiscordWebhookSink", "build_sink"]
