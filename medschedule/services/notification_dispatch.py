"""
Notification dispatch producer
Puts appointment notification jobs on the ARQ queue after the appointment write
has committed. The worker consumes them with an idempotent handler.

Routers schedule ``enqueue`` as a background task, so the response never waits
on Redis. When Redis is unreachable the dispatcher fails fast and stops trying
to reconnect for a short backoff window.
"""

import asyncio
import logging
import time
from dataclasses import replace
from typing import Optional

from arq import ArqRedis, create_pool
from arq.connections import RedisSettings

logger = logging.getLogger(__name__)

NOTIFICATION_TASK_NAME = "create_appointment_notification_task"


class NotificationDispatcher:
    """Enqueues notification jobs; enqueue failures never reach the caller"""

    def __init__(
        self,
        redis_settings: Optional[RedisSettings] = None,
        connect_timeout: int = 2,
        reconnect_backoff: float = 30.0,
    ):
        self._redis_settings = redis_settings
        self._connect_timeout = connect_timeout
        self._reconnect_backoff = reconnect_backoff
        self._pool: Optional[ArqRedis] = None
        self._retry_after = 0.0

    async def _get_pool(self) -> ArqRedis:
        if self._pool is None:
            from ..worker import get_redis_settings

            settings = self._redis_settings or get_redis_settings()
            # One connection attempt; the backoff window handles outages
            settings = replace(settings, conn_retries=0, conn_timeout=self._connect_timeout)
            self._pool = await asyncio.wait_for(
                create_pool(settings), timeout=self._connect_timeout + 1
            )
        return self._pool

    async def enqueue(self, appointment_id: int, event: str) -> Optional[str]:
        """
        Queue a notification for an appointment lifecycle event.

        Returns the ARQ job id, or None when the job could not be queued.
        The appointment write is already durable at this point, so a queue
        outage only costs the notification.
        """
        if time.monotonic() < self._retry_after:
            logger.warning(
                f"⚠️ Queue unavailable - dropping {event} notification for appointment {appointment_id}"
            )
            return None

        try:
            pool = await self._get_pool()
            job = await pool.enqueue_job(NOTIFICATION_TASK_NAME, appointment_id, event, _defer_by=0)
        except Exception as e:
            logger.warning(
                f"⚠️ Failed to queue {event} notification for appointment {appointment_id}: {e}"
            )
            self._pool = None
            self._retry_after = time.monotonic() + self._reconnect_backoff
            return None

        if job is None:
            return None
        logger.info(f"📋 Queued {event} notification job {job.job_id} for appointment {appointment_id}")
        return job.job_id

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None


_dispatcher = NotificationDispatcher()


def get_notification_dispatcher() -> NotificationDispatcher:
    """Dependency injection for the shared dispatcher"""
    return _dispatcher
