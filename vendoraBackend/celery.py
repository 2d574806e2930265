"""
Celery Configuration for Vendora Backend

Background work: payout reconciliation after failed payout computation,
stale guest account cleanup and response cache index sweeps.
"""

import os

from celery import Celery


# Set the default Django settings module for the 'celery' program.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "vendoraBackend.settings")

app = Celery("vendoraBackend")

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object("django.conf:settings", namespace="CELERY")

# Load task modules from all registered Django apps.
app.autodiscover_tasks()
app.autodiscover_tasks(["infrastructure.cache"])

app.conf.beat_schedule = {
    "reconcile-failed-payouts": {
        "task": "payment_system.tasks.reconcile_failed_payouts_task",
        "schedule": 15.0 * 60.0,  # Every 15 minutes
        "options": {"expires": 10.0 * 60.0, "queue": "payment_tasks"},
    },
    "cleanup-stale-guests": {
        "task": "authentication.tasks.cleanup_stale_guests_task",
        "schedule": 60.0 * 60.0,  # Every hour
        "options": {"expires": 30.0 * 60.0, "queue": "marketplace_tasks"},
    },
    "sweep-response-cache": {
        "task": "infrastructure.cache.tasks.sweep_response_cache_task",
        "schedule": 5.0 * 60.0,
        "options": {"expires": 5.0 * 60.0, "queue": "marketplace_tasks"},
    },
}

app.conf.update(
    task_routes={
        "payment_system.tasks.*": {"queue": "payment_tasks"},
        "authentication.tasks.*": {"queue": "marketplace_tasks"},
        "infrastructure.cache.tasks.*": {"queue": "marketplace_tasks"},
    },
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    result_expires=60 * 60 * 24,  # Results expire after 24 hours
    worker_max_tasks_per_child=1000,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_time_limit=10 * 60,
    task_soft_time_limit=8 * 60,
)
