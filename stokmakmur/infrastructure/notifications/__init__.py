"""Stock alert delivery."""

from stokmakmur.infrastructure.notifications.slack_notifier import (
    SlackNotifier,
    build_alert_message,
)

__all__ = ["SlackNotifier", "build_alert_message"]
