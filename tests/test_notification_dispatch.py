import asyncio

from arq.connections import RedisSettings

from medschedule.services import notification_dispatch
from medschedule.services.notification_dispatch import NOTIFICATION_TASK_NAME, NotificationDispatcher


class FakeJob:
    job_id = "job-1"


class FakePool:
    def __init__(self):
        self.calls = []
        self.closed = False

    async def enqueue_job(self, name, *args, **kwargs):
        self.calls.append((name, args, kwargs))
        return FakeJob()

    async def close(self):
        self.closed = True


def test_enqueue_puts_job_on_queue(monkeypatch):
    pool = FakePool()
    used_settings = []

    async def fake_create_pool(settings):
        used_settings.append(settings)
        return pool

    monkeypatch.setattr(notification_dispatch, "create_pool", fake_create_pool)
    dispatcher = NotificationDispatcher(redis_settings=RedisSettings(), connect_timeout=2)

    async def scenario():
        job_id = await dispatcher.enqueue(7, "appointment_confirmed")
        await dispatcher.close()
        return job_id

    assert asyncio.run(scenario()) == "job-1"
    assert pool.calls == [(NOTIFICATION_TASK_NAME, (7, "appointment_confirmed"), {"_defer_by": 0})]
    assert pool.closed
    assert used_settings[0].conn_retries == 0
    assert used_settings[0].conn_timeout == 2


def test_enqueue_failure_is_swallowed_and_backs_off(monkeypatch):
    attempts = []

    async def unreachable(settings):
        attempts.append(settings)
        raise ConnectionError("redis down")

    monkeypatch.setattr(notification_dispatch, "create_pool", unreachable)
    dispatcher = NotificationDispatcher(redis_settings=RedisSettings(), reconnect_backoff=60)

    async def scenario():
        return [
            await dispatcher.enqueue(7, "appointment_request"),
            await dispatcher.enqueue(8, "appointment_request"),
        ]

    assert asyncio.run(scenario()) == [None, None]
    assert len(attempts) == 1


def test_reconnects_after_backoff(monkeypatch):
    pool = FakePool()
    outage = [True]

    async def flaky(settings):
        if outage[0]:
            raise ConnectionError("redis down")
        return pool

    monkeypatch.setattr(notification_dispatch, "create_pool", flaky)
    dispatcher = NotificationDispatcher(redis_settings=RedisSettings(), reconnect_backoff=0)

    assert asyncio.run(dispatcher.enqueue(7, "appointment_request")) is None
    outage[0] = False
    assert asyncio.run(dispatcher.enqueue(7, "appointment_request")) == "job-1"
