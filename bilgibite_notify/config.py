"""Shared configuration defaults for the notification system."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_NOTIFICATION_SETTINGS = {
    "poll_interval": 5.0,
    "max_attempts": 3,
    "delivery": "log",
    "app_url": "https://bilgibite.com",
    "smtp_port": 587,
    "discord_bot_name": "BilgiBite",
}

VALID_DELIVERY_CHANNELS = {"log", "smtp", "discord"}
_FALSY = {"0", "false", "False", "no", "off", ""}


@dataclass(slots=True)
class NotificationSettings:
    poll_interval: float = DEFAULT_NOTIFICATION_SETTINGS["poll_interval"]
    max_attempts: int = DEFAULT_NOTIFICATION_SETTINGS["max_attempts"]
    delivery: str = DEFAULT_NOTIFICATION_SETTINGS["delivery"]
    autostart_worker: bool = False
    app_url: str = DEFAULT_NOTIFICATION_SETTINGS["app_url"]
    sender: Optional[str] = None
    smtp_host: Optional[str] = None
    smtp_port: int = DEFAULT_NOTIFICATION_SETTINGS["smtp_port"]
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True
    discord_webhook: Optional[str] = None
    discord_bot_name: str = DEFAULT_NOTIFICATION_SETTINGS["discord_bot_name"]

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise ValueError("NOTIFY_POLL_INTERVAL must be positive")
        if self.max_attempts < 1:
            raise ValueError("NOTIFY_MAX_ATTEMPTS must be at least 1")
        if self.delivery not in VALID_DELIVERY_CHANNELS:
            raise ValueError(f"NOTIFY_DELIVERY must be one of {sorted(VALID_DELIVERY_CHANNELS)}")
        self.app_url = self.app_url.rstrip("/")


def _number(env: Mapping[str, str], key: str, default, cast):
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None


def load_settings(env: Optional[Mapping[str, str]] = None) -> NotificationSettings:
    """Build settings from environment variables (``os.environ`` by default)."""
    env = os.environ if env is None else env
    return NotificationSettings(
        poll_interval=_number(env, "NOTIFY_POLL_INTERVAL", DEFAULT_NOTIFICATION_SETTINGS["poll_interval"], float),
        max_attempts=_number(env, "NOTIFY_MAX_ATTEMPTS", DEFAULT_NOTIFICATION_SETTINGS["max_attempts"], int),
        delivery=(env.get("NOTIFY_DELIVERY") or DEFAULT_NOTIFICATION_SETTINGS["delivery"]).strip().lower(),
        autostart_worker=env.get("NOTIFY_AUTOSTART", "0") not in _FALSY,
        app_url=env.get("CLIENT_URL") or DEFAULT_NOTIFICATION_SETTINGS["app_url"],
        sender=env.get("NOTIFY_FROM_EMAIL") or env.get("SMTP_DEFAULT_SENDER"),
        smtp_host=env.get("SMTP_HOST"),
        smtp_port=_number(env, "SMTP_PORT", DEFAULT_NOTIFICATION_SETTINGS["smtp_port"], int),
        smtp_username=env.get("SMTP_USERNAME"),
        smtp_password=env.get("SMTP_PASSWORD"),
        smtp_use_tls=env.get("SMTP_USE_TLS", "1") not in _FALSY,
        discord_webhook=env.get("DISCORD_WEBHOOK_URL"),
        discord_bot_name=env.get("DISCORD_BOT_NAME") or DEFAULT_NOTIFICATION_SETTINGS["discord_bot_name"],
    )


__all__ = [
    "DEFAULT_NOTIFICATION_SETTINGS",
    "VALID_DELIVERY_CHANNELS",
    "NotificationSettings",
    "load_settings",
]
