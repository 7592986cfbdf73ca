from collections.abc import Callable

from slot_admin.services.status_banner import StatusBanner


class _FakeTimer:
    def __init__(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        self.delay_seconds = delay_seconds
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.callback()


class _TimerRecorder:
    def __init__(self) -> None:
        self.timers: list[_FakeTimer] = []

    def __call__(self, delay_seconds: float, callback: Callable[[], None]) -> _FakeTimer:
        timer = _FakeTimer(delay_seconds, callback)
        self.timers.append(timer)
        return timer


def test_messages_clear_after_their_own_delays() -> None:
    recorder = _TimerRecorder()
    banner = StatusBanner(timer_factory=recorder)

    banner.show_success("Slots loaded successfully!")
    banner.show_error("Error loading slots: boom")

    success_timer, error_timer = recorder.timers
    assert success_timer.delay_seconds == 3.0
    assert error_timer.delay_seconds == 5.0
    assert banner.success == "Slots loaded successfully!"
    assert banner.error == "Error loading slots: boom"

    success_timer.fire()
    assert banner.success == ""
    assert banner.error == "Error loading slots: boom"

    error_timer.fire()
    assert banner.error == ""


def test_new_message_cancels_pending_clear_of_same_kind() -> None:
    recorder = _TimerRecorder()
    banner = StatusBanner(timer_factory=recorder)

    banner.show_success("Slot added successfully! Client page automatically updated.")
    banner.show_success("Link copied to clipboard!")

    first_timer, second_timer = recorder.timers
    assert first_timer.cancelled is True
    assert second_timer.cancelled is False

    # A stale timer that fires anyway must not clear the newer message.
    first_timer.fire()
    assert banner.success == "Link copied to clipboard!"

    second_timer.fire()
    assert banner.success == ""


def test_cleared_message_does_not_reappear() -> None:
    recorder = _TimerRecorder()
    banner = StatusBanner(timer_factory=recorder)

    banner.show_error("Error deleting slot: boom")
    recorder.timers[0].fire()
    recorder.timers[0].fire()

    assert banner.error == ""
    assert len(recorder.timers) == 1


def test_close_cancels_pending_timers() -> None:
    recorder = _TimerRecorder()
    banner = StatusBanner(success_seconds=1.5, error_seconds=2.5, timer_factory=recorder)

    banner.show_success("Slots loaded successfully!")
    banner.show_error("Error adding slot: boom")
    banner.close()

    assert all(timer.cancelled for timer in recorder.timers)
    assert [timer.delay_seconds for timer in recorder.timers] == [1.5, 2.5]

    banner.show_success("Link copied to clipboard!")
    assert len(recorder.timers) == 2
    assert banner.success == "Link copied to clipboard!"
