import io

import pytest

from syncdemos.interrupts import InterruptController


class Clock:
    """A fake sleep that counts calls and runs an action on chosen calls."""

    def __init__(self, actions=None):
        self.calls = 0
        self.total = 0
        self.actions = dict(actions or {})

    def __call__(self, seconds):
        self.calls += 1
        self.total += seconds
        action = self.actions.get(self.calls)
        if action is not None:
            action()


def make(actions=None):
    out = io.StringIO()
    clock = Clock(actions)
    controller = InterruptController(out, clock)
    return controller, clock, out


def test_single_interrupt_is_serviced_and_state_restored():
    controller, clock, out = make()
    controller.raise_interrupt(2)
    text = out.getvalue()
    assert "Prihvat prekida (prioritet = 2)..." in text
    assert "Dignuta zastavica K_Z[2] = 1" in text
    assert "Obrada prekida (prioritet = 2): 10/10" in text
    assert "Povratak iz prekida (prioritet = 2)..." in text
    assert controller.current == 0
    assert controller.waiting == (0, 0, 0, 0)
    assert controller.context == (0, 0, 0, 0)
    assert clock.calls == 14


@pytest.mark.parametrize("priority", [0, 5, -1])
def test_invalid_priority_rejected(priority):
    controller, _, _ = make()
    with pytest.raises(ValueError):
        controller.raise_interrupt(priority)


def test_higher_priority_preempts_lower():
    seen = {}
    controller, _, out = make()

    def raise_three():
        controller.raise_interrupt(3)

    def record():
        seen["current"] = controller.current
        seen["context"] = controller.context

    controller._sleep.actions = {5: raise_three, 10: record}
    controller.raise_interrupt(1)
    text = out.getvalue()
    assert text.index("(prioritet = 1): 1/10") < text.index("(prioritet = 3): 1/10")
    assert text.index("(prioritet = 3): 10/10") < text.index("(prioritet = 1): 10/10")
    assert seen["current"] == 3
    assert seen["context"][2] == 1
    assert controller.current == 0
    assert controller.context == (0, 0, 0, 0)


def test_lower_priority_waits_for_higher():
    controller, _, out = make()

    def raise_one():
        controller.raise_interrupt(1)

    controller._sleep.actions = {5: raise_one}
    controller.raise_interrupt(3)
    text = out.getvalue()
    assert "Dignuta zastavica K_Z[1] = 1" in text
    assert text.index("(prioritet = 3): 10/10") < text.index("(prioritet = 1): 1/10")
    assert "Obrada prekida (prioritet = 1): 10/10" in text
    assert controller.waiting == (0, 0, 0, 0)
    assert controller.current == 0


def test_interrupt_during_acceptance_is_deferred():
    controller, _, out = make()

    def raise_four():
        controller.raise_interrupt(4)

    controller._sleep.actions = {1: raise_four}
    controller.raise_interrupt(2)
    text = out.getvalue()
    assert text.index("Prihvat prekida (prioritet = 2)") < text.index(
        "Prihvat prekida (prioritet = 4)"
    )
    assert text.index("(prioritet = 4): 10/10") < text.index(
        "Dignuta zastavica K_Z[2] = 1"
    )
    assert "Obrada prekida (prioritet = 2): 10/10" in text
    assert controller.current == 0


def test_request_stop_sets_flag_and_reports():
    controller, _, out = make()
    assert controller.stopped is False
    controller.request_stop()
    assert controller.stopped is True
    assert "Primljen signal SIGQUIT, pospremam prije izlaska..." in out.getvalue()


def test_run_loops_until_stop():
    controller, _, out = make()
    controller._sleep.actions = {3: controller.request_stop}
    iterations = controller.run()
    text = out.getvalue()
    assert iterations == 3
    assert "iteracija 3" in text
    assert "iteracija 4" not in text
    assert "krenuo s radom" in text
    assert text.rstrip().endswith("zavrsio s radom")


def test_run_with_interrupt_in_between():
    controller, _, out = make()

    def raise_two():
        controller.raise_interrupt(2)

    controller._sleep.actions = {1: raise_two, 16: controller.request_stop}
    iterations = controller.run()
    text = out.getvalue()
    assert text.index("iteracija 1") < text.index("Obrada prekida (prioritet = 2)")
    assert text.index("(prioritet = 2): 10/10") < text.index("iteracija 2")
    assert iterations == 2
    assert controller.current == 0