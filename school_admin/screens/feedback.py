"""
User feedback hooks for the screens: blocking dialogs and transient toasts.

Screens never talk to a UI toolkit directly. They ask a ``confirm``
callable before write actions and report results through a Notifier.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfirmPrompt:
    """Contents of a blocking confirmation dialog."""
    title: str
    text: str
    icon: str = 'question'
    confirm_text: str = 'Yes'
    cancel_text: str = 'Cancel'


class Notifier:
    """
    Default notifier: writes feedback to the log.

    Front ends subclass this and override ``toast`` (transient, non-blocking)
    and ``alert`` (blocking modal).
    """

    def toast(self, title, icon='success'):
        logger.info(f"[TOAST:{icon}] {title}")

    def alert(self, title, text, icon='info'):
        log_func = logger.error if icon == 'error' else logger.info
        log_func(f"[ALERT:{icon}] {title} - {text}")
