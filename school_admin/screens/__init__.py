"""
Screen state for the admin portal's interactive pages.

Each screen keeps its own form / selection state and talks to the portal
through a transport (``PortalClient`` over HTTP). None of these modules
import Django, so they run the same in a browser-automation harness, a
desktop front end, or the server-rendered pages.
"""

from .transport import PortalClient, TransportResult, OutcomeKind, classify_status
from .feedback import ConfirmPrompt, Notifier
from .login_screen import LoginScreen, LoginState, Credentials
from .archive_browser import ArchiveBrowser, TabSelection
from .section_manager import SectionManager, SectionDraft, SectionEdit
