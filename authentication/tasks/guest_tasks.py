"""
Celery Tasks for guest account housekeeping.
"""

import logging

from celery import shared_task
from django.conf import settings

from authentication.domain.services.auth_service import AuthService

logger = logging.getLogger(__name__)


@shared_task(name="authentication.tasks.cleanup_stale_guests_task")
def cleanup_stale_guests_task():
    """Delete guest users idle past MARKETPLACE['GUEST_TTL_HOURS'] that never ordered."""
    ttl_hours = settings.MARKETPLACE["GUEST_TTL_HOURS"]
    logger.info(f"Starting stale guest cleanup (ttl={ttl_hours}h)")
    deleted = AuthService().cleanup_stale_guests(ttl_hours)
    return f"Deleted {deleted} guest rows"
