from .guest_tasks import cleanup_stale_guests_task

__all__ = ["cleanup_stale_guests_task"]
