import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name="infrastructure.cache.tasks.sweep_response_cache_task")
def sweep_response_cache_task():
    """Prune index entries for response cache keys whose TTL has passed."""
    from infrastructure.container import container

    swept = sum(cache.sweep() for cache in container.response_caches().values())
    if swept:
        logger.info(f"Swept {swept} expired response cache index entries")
    return swept
