"""Tests for the background session sweeper."""

# pylint: disable=missing-function-docstring

import asyncio
from unittest.mock import MagicMock

from vicat_keys.core.exceptions import PersistenceError
from vicat_keys.services.sweeper import SessionSweeper


def test_run_once_sweeps_expired_sessions(services, clock):
    user = services.accounts.register("alice1", "pw123")
    services.sessions.create_session(user.id)
    clock.advance(days=31)

    removed = asyncio.run(services.sweeper.run_once())

    assert removed == 1
    assert services.gateway.snapshot().sessions == []


def test_run_once_logs_and_survives_storage_failure():
    sessions = MagicMock()
    sessions.sweep_expired.side_effect = PersistenceError("disk gone")
    sweeper = SessionSweeper(sessions, interval_seconds=3600)

    assert asyncio.run(sweeper.run_once()) == 0
    sessions.sweep_expired.assert_called_once()


def test_start_sweeps_immediately_and_stop_cancels_loop():
    sessions = MagicMock()
    sessions.sweep_expired.return_value = 0
    sweeper = SessionSweeper(sessions, interval_seconds=3600)

    async def _exercise() -> None:
        await sweeper.start()
        assert sweeper.is_running
        await sweeper.stop()
        assert not sweeper.is_running

    asyncio.run(_exercise())
    sessions.sweep_expired.assert_called_once()


def test_loop_retries_after_failure():
    calls: list[int] = []

    def _sweep() -> int:
        calls.append(1)
        if len(calls) == 1:
            raise PersistenceError("locked")
        return 0

    sessions = MagicMock()
    sessions.sweep_expired.side_effect = _sweep
    sweeper = SessionSweeper(sessions, interval_seconds=0.01)

    async def _exercise() -> None:
        await sweeper.start()
        await asyncio.sleep(0.1)
        await sweeper.stop()

    asyncio.run(_exercise())
    assert len(calls) >= 2
