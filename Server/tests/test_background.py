import pytest

from newquiz.services.countdown import Countdown
from newquiz.services.job_scheduler import JobScheduler, JobState


def test_countdown_fires_once_after_deadline(clock):
    fired = []
    countdown = Countdown(10, lambda: fired.append(True), clock=clock).start()

    clock.advance(5)
    assert countdown.remaining() == 5
    assert not countdown.poll()

    clock.advance(5)
    assert countdown.poll()
    assert not countdown.poll()
    assert fired == [True]
    assert countdown.remaining() is None


def test_cancelled_countdown_never_fires(clock):
    fired = []
    countdown = Countdown(1, lambda: fired.append(True), clock=clock).start()
    assert countdown.cancel()
    assert not countdown.cancel()
    clock.advance(5)
    assert not countdown.poll()
    assert fired == []


def test_countdown_needs_positive_duration():
    with pytest.raises(ValueError):
        Countdown(0, lambda: None)


def test_jobs_run_in_order_after_their_predecessor():
    scheduler = JobScheduler()
    calls = []
    first = scheduler.enqueue(lambda: calls.append("maze"), name="maze")
    second = scheduler.enqueue(lambda: calls.append("result"), name="result", after=first)

    counts = scheduler.run_pending()
    assert calls == ["maze", "result"]
    assert counts == {"run": 2, "failed": 0, "dropped": 0}
    assert first.state == JobState.DONE
    assert second.state == JobState.DONE
    assert scheduler.pending_count == 0


def test_failed_predecessor_drops_dependent_job():
    scheduler = JobScheduler()
    calls = []

    def broken():
        raise RuntimeError("store offline")

    first = scheduler.enqueue(broken, name="maze")
    second = scheduler.enqueue(lambda: calls.append("result"), name="result", after=first)

    counts = scheduler.run_pending()
    assert counts == {"run": 1, "failed": 1, "dropped": 1}
    assert first.state == JobState.FAILED
    assert first.error == "store offline"
    assert second.state == JobState.DROPPED
    assert calls == []
