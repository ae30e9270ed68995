from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


class SchoolAdminConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'school_admin'
    verbose_name = 'School Administration'

    def ready(self):
        """Log the database the portal is running against (main process only)."""
        import os
        if os.environ.get('RUN_MAIN') != 'true':
            return

        from django.conf import settings
        db_config = settings.DATABASES['default']
        logger.info(f"[STARTUP] Using {db_config.get('ENGINE', 'unknown')} database: {db_config.get('NAME', 'unknown')}")
