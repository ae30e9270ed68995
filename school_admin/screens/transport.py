"""
HTTP transport used by the admin screens.

PortalClient talks to the portal's REST-ish endpoints with ``requests`` and
turns every response into a TransportResult. Nothing here retries: a
failed call is reported once and the screen decides what to show.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

logger = logging.getLogger(__name__)

CSRF_META_RE = re.compile(
    r'<meta\s+name=["\']csrf-token["\']\s+content=["\']([^"\']+)["\']',
    re.IGNORECASE,
)


class OutcomeKind(Enum):
    SUCCESS = 'success'
    CLIENT_ERROR = 'client_error'
    SERVER_ERROR = 'server_error'
    NETWORK_FAILURE = 'network_failure'


@dataclass
class TransportResult:
    """Outcome of one request/response cycle."""
    kind: OutcomeKind
    status_code: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)
    location: Optional[str] = None

    @property
    def ok(self):
        return self.kind is OutcomeKind.SUCCESS

    @property
    def message(self):
        """Server-provided message, if any ('message' on success, 'error' otherwise)."""
        return self.data.get('message') or self.data.get('error') or self.errors.get('error')


def classify_status(status_code, redirect_is_success=False):
    """
    Maps an HTTP status to an OutcomeKind.

    3xx only counts as success where a redirect is the documented success
    response (login); anywhere else it means the session was lost.
    """
    if 200 <= status_code < 300:
        return OutcomeKind.SUCCESS
    if 300 <= status_code < 400:
        return OutcomeKind.SUCCESS if redirect_is_success else OutcomeKind.CLIENT_ERROR
    if 400 <= status_code < 500:
        return OutcomeKind.CLIENT_ERROR
    return OutcomeKind.SERVER_ERROR


class PortalClient:
    """
    Client for the admin portal endpoints.

    Usage:
        client = PortalClient('https://portal.example.edu.ph')
        client.fetch_csrf_token('/admin/login')
        client.login(Credentials('admin', 'secret'))
        client.store_section(SectionDraft('7-Diamond', 3))
    """

    LOGIN_PATH = '/admin/login'
    SECTION_LIST_PATH = '/admin/section/list'
    SECTION_STORE_PATH = '/admin/section/store'
    SECTION_UPDATE_PATH = '/admin/section/update/{id}'
    SECTION_DELETE_PATH = '/admin/section/delete/{id}'

    def __init__(self, base_url, session=None, timeout=None):
        self.base_url = base_url.rstrip('/') + '/'
        self.session = session or requests.Session()
        # No timeout unless the caller asks for one
        self.timeout = timeout
        self.csrf_token = None

    def _url(self, path):
        return urljoin(self.base_url, path.lstrip('/'))

    def _headers(self):
        headers = {
            'X-Requested-With': 'XMLHttpRequest',
            'Accept': 'application/json',
        }
        if self.csrf_token:
            headers['X-CSRF-TOKEN'] = self.csrf_token
        return headers

    def _request(self, method, path, redirect_is_success=False, **kwargs):
        url = self._url(path)
        try:
            response = self.session.request(
                method, url,
                headers=self._headers(),
                allow_redirects=False,
                timeout=self.timeout,
                **kwargs
            )
        except requests.RequestException as e:
            logger.warning(f"[TRANSPORT] {method} {path} failed: {e}")
            return TransportResult(kind=OutcomeKind.NETWORK_FAILURE)

        kind = classify_status(response.status_code, redirect_is_success=redirect_is_success)
        data = {}
        if 'application/json' in response.headers.get('Content-Type', ''):
            try:
                body = response.json()
            except ValueError:
                logger.debug(f"[TRANSPORT] {method} {path} returned malformed JSON")
            else:
                if isinstance(body, dict):
                    data = body

        errors = data.get('errors') if isinstance(data.get('errors'), dict) else {}
        if kind is not OutcomeKind.SUCCESS:
            logger.info(f"[TRANSPORT] {method} {path} -> {response.status_code} ({kind.value})")

        return TransportResult(
            kind=kind,
            status_code=response.status_code,
            data=data,
            errors={k: str(v) for k, v in errors.items()},
            location=response.headers.get('Location'),
        )

    # ========================================================================
    # Anti-forgery token
    # ========================================================================

    def fetch_csrf_token(self, path=LOGIN_PATH):
        """
        Loads a portal page and reads the token from its csrf-token meta tag.
        Returns the token, or None when the page could not be loaded or has no tag.
        """
        try:
            response = self.session.get(self._url(path), timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"[TRANSPORT] Could not load {path} for CSRF token: {e}")
            return None

        match = CSRF_META_RE.search(response.text or '')
        self.csrf_token = match.group(1) if match else None
        if self.csrf_token is None:
            logger.warning(f"[TRANSPORT] No csrf-token meta tag on {path}")
        return self.csrf_token

    # ========================================================================
    # Endpoints
    # ========================================================================

    def login(self, credentials):
        return self._request(
            'POST', self.LOGIN_PATH,
            redirect_is_success=True,
            data={'username': credentials.username, 'password': credentials.password},
        )

    def list_sections(self):
        return self._request('GET', self.SECTION_LIST_PATH)

    def store_section(self, draft):
        return self._request('POST', self.SECTION_STORE_PATH, data=draft.to_payload())

    def update_section(self, edit):
        # PUT semantics carried over a POST transport
        payload = edit.to_payload()
        payload['_method'] = 'PUT'
        return self._request('POST', self.SECTION_UPDATE_PATH.format(id=edit.section_id), data=payload)

    def delete_section(self, section_id):
        return self._request('DELETE', self.SECTION_DELETE_PATH.format(id=section_id))
