"""
Security Event Logging Module

Provides configurable security event logging with multiple detail levels.
Authentication and record-mutation events of the admin portal are logged
through this module.

Log Levels:
- 0: Disabled - No security logging
- 1: Basic - Only critical security events (failed logins, blocked markup)
- 2: Standard - Normal security events (logins, logouts, section changes)
- 3: Detailed - All security events with full context (client IP, payloads)
"""

import logging
from django.conf import settings
from typing import Optional

# Get logger for security events
logger = logging.getLogger('security')


def get_client_ip(request) -> str:
    """Best-effort client address, honouring a proxy's X-Forwarded-For."""
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR', 'unknown')


class SecurityLogger:
    """
    Centralized security logging with configurable detail levels.

    Usage:
        SecurityLogger.log_login_success(user_id, username, client_ip)
        SecurityLogger.log_auth_failure(username, reason, client_ip)
        SecurityLogger.log_section_change('delete', section_id, username)
    """

    @staticmethod
    def get_log_level() -> int:
        """
        Get current security log level from settings.

        Returns:
            int: Log level (0=disabled, 1=basic, 2=standard, 3=detailed)
        """
        return getattr(settings, 'SECURITY_LOG_LEVEL', 0)

    @staticmethod
    def is_enabled(min_level: int = 1) -> bool:
        """
        Check if security logging is enabled at given level.

        Args:
            min_level: Minimum level required to log this event

        Returns:
            bool: True if logging is enabled at this level
        """
        return SecurityLogger.get_log_level() >= min_level

    # ========================================================================
    # Authentication Events
    # ========================================================================

    @staticmethod
    def log_login_success(user_id: int, username: str, client_ip: str = 'unknown'):
        """
        Log successful admin login.

        Level 2 (Standard): Logs successful logins
        Level 3 (Detailed): Includes client IP

        Examples:
            Level 2: [LOGIN] User 5 (admin) logged in
            Level 3: [LOGIN] User 5 (admin) logged in from 192.168.1.100
        """
        if SecurityLogger.is_enabled(2):
            if SecurityLogger.get_log_level() >= 3:
                logger.info(f"[LOGIN] User {user_id} ({username}) logged in from {client_ip}")
            else:
                logger.info(f"[LOGIN] User {user_id} ({username}) logged in")

    @staticmethod
    def log_auth_failure(username: str, reason: str, client_ip: str = 'unknown'):
        """
        Log authentication failure.

        Level 1 (Basic): Always logged (security relevant)
        Level 3 (Detailed): Includes client IP

        Examples:
            Level 1: [LOGIN_FAIL] Failed login for user: john - Invalid password
            Level 3: [LOGIN_FAIL] Failed login for user: john from 192.168.1.100 - Invalid password
        """
        if SecurityLogger.is_enabled(1):
            if SecurityLogger.get_log_level() >= 3:
                logger.warning(f"[LOGIN_FAIL] Failed login for user: {username} from {client_ip} - {reason}")
            else:
                logger.warning(f"[LOGIN_FAIL] Failed login for user: {username} - {reason}")

    @staticmethod
    def log_logout(user_id: int, username: str):
        """
        Log admin logout.

        Level 3 (Detailed): Logs all logouts
        """
        if SecurityLogger.is_enabled(3):
            logger.info(f"[LOGOUT] User {user_id} ({username}) logged out")

    # ========================================================================
    # Record Mutation Events
    # ========================================================================

    @staticmethod
    def log_section_change(action: str, section_id: int, username: str, detail: Optional[str] = None):
        """
        Log a section create / update / delete.

        Level 2 (Standard): Logs the action and the acting user
        Level 3 (Detailed): Includes the submitted values

        Examples:
            Level 2: [SECTION_DELETE] Section 12 by admin
            Level 3: [SECTION_UPDATE] Section 12 by admin - name=7-Diamond, grade_level_id=3
        """
        if SecurityLogger.is_enabled(2):
            tag = f"SECTION_{action.upper()}"
            if SecurityLogger.get_log_level() >= 3 and detail:
                logger.info(f"[{tag}] Section {section_id} by {username} - {detail}")
            else:
                logger.info(f"[{tag}] Section {section_id} by {username}")

    # ========================================================================
    # XSS Prevention Events
    # ========================================================================

    @staticmethod
    def log_xss_attempt(content: str, field_name: str = 'unknown'):
        """
        Log markup stripped from user input.

        Level 1 (Basic): Always logged (attack attempt)
        Level 3 (Detailed): Includes a sample of the submitted value

        Examples:
            Level 1: [XSS_BLOCKED] Markup removed from name
            Level 3: [XSS_BLOCKED] Markup removed from name: <script>alert...
        """
        if SecurityLogger.is_enabled(1):
            if SecurityLogger.get_log_level() >= 3:
                # Show first 100 chars of malicious content
                sample = content[:100] + '...' if len(content) > 100 else content
                logger.warning(f"[XSS_BLOCKED] Markup removed from {field_name}: {sample}")
            else:
                logger.warning(f"[XSS_BLOCKED] Markup removed from {field_name}")

    # ========================================================================
    # Generic Security Events
    # ========================================================================

    @staticmethod
    def log_security_event(event_type: str, message: str, level: int = 2, severity: str = 'info'):
        """
        Log generic security event.

        Args:
            event_type: Type of security event
            message: Event message
            level: Minimum log level required (1=basic, 2=standard, 3=detailed)
            severity: Log severity (info, warning, error, critical)
        """
        if SecurityLogger.is_enabled(level):
            log_func = getattr(logger, severity, logger.info)
            log_func(f"[{event_type}] {message}")
