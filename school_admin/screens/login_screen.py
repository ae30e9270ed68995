"""
Admin login screen state.

Two states only: idle and submitting. While submitting, further submits are
dropped; when the request completes the form is editable and resubmittable
again, with any field errors from the server kept for display.
"""

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum

from .transport import OutcomeKind

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = 'Unable to reach the server. Please try again.'
SERVER_ERROR_MESSAGE = 'Something went wrong. Please try again.'


class LoginState(Enum):
    IDLE = 'idle'
    SUBMITTING = 'submitting'


@dataclass
class Credentials:
    username: str = ''
    password: str = ''


class LoginScreen:
    FIELDS = ('username', 'password')

    def __init__(self, transport):
        self.transport = transport
        self.credentials = Credentials()
        self.show_password = False
        self.state = LoginState.IDLE
        self.errors = {}
        self.redirect_to = None

    @property
    def processing(self):
        return self.state is LoginState.SUBMITTING

    @property
    def submit_disabled(self):
        return self.processing

    @property
    def submit_label(self):
        return 'Logging in...' if self.processing else 'Login'

    @property
    def password_input_type(self):
        return 'text' if self.show_password else 'password'

    @property
    def toggle_label(self):
        return 'Hide' if self.show_password else 'Show'

    def set_field(self, name, value):
        if name not in self.FIELDS:
            raise ValueError(f"Unknown login field: {name}")
        setattr(self.credentials, name, value)

    def toggle_password(self):
        """Reveals or masks the password input. Never sends a request."""
        self.show_password = not self.show_password

    def submit(self):
        """
        Posts the current credentials.

        Returns the TransportResult, or None when a submit is already in flight.
        """
        if self.processing:
            logger.debug("Login submit ignored: request already in flight")
            return None

        self.state = LoginState.SUBMITTING
        try:
            # Transient copy: the request never sees later edits to the form
            result = self.transport.login(dataclasses.replace(self.credentials))
        finally:
            self.state = LoginState.IDLE

        if result.ok:
            self.errors = {}
            self.redirect_to = result.location
        elif result.kind is OutcomeKind.NETWORK_FAILURE:
            self.errors = {'error': NETWORK_ERROR_MESSAGE}
        elif result.errors:
            self.errors = dict(result.errors)
        else:
            self.errors = {'error': result.message or SERVER_ERROR_MESSAGE}

        return result
