from documentwise_engine.refresh import ANALYSIS_REFRESH_SECONDS, EXTRACTION_REFRESH_SECONDS, DelayedRefresh


def test_delays():
    assert ANALYSIS_REFRESH_SECONDS == 3.0
    assert EXTRACTION_REFRESH_SECONDS == 5.0


def test_pop_due_after_delay(fake_clock):
    refresh = DelayedRefresh(clock=fake_clock)
    refresh.schedule("analysis_42", 3)

    assert refresh.pending("analysis_42")
    assert refresh.remaining("analysis_42") == 3
    assert refresh.pop_due("analysis_42") is False

    fake_clock.advance(3)
    assert refresh.remaining("analysis_42") == 0
    assert refresh.pop_due("analysis_42") is True
    assert refresh.pop_due("analysis_42") is False
    assert not refresh.pending("analysis_42")


def test_keys_are_independent(fake_clock):
    refresh = DelayedRefresh(clock=fake_clock)
    refresh.schedule("a", 1)
    refresh.schedule("b", 5)
    fake_clock.advance(2)
    assert refresh.pop_due("a") is True
    assert refresh.pop_due("b") is False
    assert refresh.remaining("b") == 3


def test_reschedule_and_cancel(fake_clock):
    refresh = DelayedRefresh(clock=fake_clock)
    refresh.schedule("a", 1)
    refresh.schedule("a", 10)
    fake_clock.advance(2)
    assert refresh.pop_due("a") is False
    refresh.cancel("a")
    assert refresh.remaining("a") is None
    refresh.cancel("missing")
