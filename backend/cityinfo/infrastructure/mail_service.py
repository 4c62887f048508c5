"""Mail Service — out-of-band notifications, delivered fire-and-forget.

Invariants:
    - LocalMailService never performs network IO: delivery is a log record
    - BackgroundNotifier.send only schedules; it returns before delivery happens
    - A failing delivery is logged and absorbed, never propagated to the request
      that scheduled it (that request's commit has already completed)

Design Decisions:
    - Delivery via FastAPI BackgroundTasks: runs after the response is sent,
      same mechanism as other deferred work in this codebase
    - Mail addresses come from settings, not from callers
"""

import logging

from fastapi import BackgroundTasks

from cityinfo.config import Settings
from cityinfo.core.repository_protocols import MailService

logger = logging.getLogger(__name__)


class LocalMailService:
    """Mail service for development and single-node deployments: logs every message."""

    def __init__(self, settings: Settings):
        self.mail_to = settings.mail_to_address
        self.mail_from = settings.mail_from_address

    async def send(self, subject: str, message: str) -> None:
        logger.info(
            f"Mail from {self.mail_from} to {self.mail_to}, "
            f"with {type(self).__name__}. Subject: {subject} Message: {message}",
        )


async def deliver_safely(mail_service: MailService, subject: str, message: str) -> None:
    """Background task: deliver one message, logging (not raising) on failure."""
    try:
        await mail_service.send(subject, message)
    except Exception as e:
        logger.error(f"Failed to send notification '{subject}': {e}", exc_info=True)


class BackgroundNotifier:
    """Notifier that defers MailService delivery to FastAPI background tasks."""

    def __init__(self, background_tasks: BackgroundTasks, mail_service: MailService):
        self.background_tasks = background_tasks
        self.mail_service = mail_service

    def send(self, subject: str, message: str) -> None:
        self.background_tasks.add_task(
            deliver_safely, self.mail_service, subject, message,
        )
