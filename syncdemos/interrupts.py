"""Prioritised interrupt handling with nesting, waiting flags and saved context.

Four interrupt sources have priorities 1 to 4. Each one is first accepted
with the other sources masked. Then its waiting flag is raised. Then every
waiting interrupt with a priority above the current one is serviced, the
highest first. While an interrupt is being serviced the sources are unmasked
again, so a higher priority can pre-empt it. A stop request ends the main
loop.
"""

from __future__ import annotations

import argparse
import os
import signal
import sys
import time
from typing import Callable, TextIO

Sleep = Callable[[float], None]

PRIORITIES = 4

_SIGNAL_PRIORITIES = (
    ("SIGUSR1", 1),
    ("SIGUSR2", 2),
    ("SIGTERM", 3),
    ("SIGINT", 4),
)


class InterruptController:
    """Keeps the waiting flags, the saved context and the current priority."""

    def __init__(self, out: TextIO | None = None, sleep: Sleep = time.sleep) -> None:
        self._out = out
        self._sleep = sleep
        self._waiting = [0] * PRIORITIES
        self._context = [0] * PRIORITIES
        self._current = 0
        self._blocked = False
        self._pending: list[int] = []
        self._stop = False

    @property
    def current(self) -> int:
        """The priority being serviced now, 0 for the main program."""
        return self._current

    @property
    def waiting(self) -> tuple[int, ...]:
        """The waiting flags, one per priority."""
        return tuple(self._waiting)

    @property
    def context(self) -> tuple[int, ...]:
        """The priority saved when each level was entered."""
        return tuple(self._context)

    @property
    def stopped(self) -> bool:
        return self._stop

    def _write(self, text: str) -> None:
        out = self._out if self._out is not None else sys.stdout
        out.write(text)
        out.flush()

    def _pause(self, seconds: int) -> None:
        for _ in range(seconds):
            self._sleep(1)

    def _highest_waiting(self) -> int:
        return max(
            (level for level, flag in enumerate(self._waiting, 1) if flag),
            default=0,
        )

    def _unblock(self) -> None:
        self._blocked = False
        while self._pending and not self._blocked:
            self.raise_interrupt(self._pending.pop(0))

    def _write_context(self) -> None:
        saved = "".join(
            f" KON[{level}] = {value}\n"
            for level, value in enumerate(self._context, 1)
        )
        self._write(
            "-----------\n"
            f"Tekuci prioritet: {self._current}\n"
            "Kontekst:\n"
            f"{saved}"
            "-----------\n"
        )

    def _service(self, priority: int) -> None:
        for step in range(1, 11):
            self._write(f"Obrada prekida (prioritet = {priority}): {step}/10\n")
            self._sleep(1)

    def raise_interrupt(self, priority: int) -> None:
        """Deliver an interrupt of the given priority, or queue it while masked."""
        if not 1 <= priority <= PRIORITIES:
            raise ValueError(f"priority must be between 1 and {PRIORITIES}")
        if self._blocked:
            if priority not in self._pending:
                self._pending.append(priority)
            return

        self._blocked = True
        self._write(f"\nPrihvat prekida (prioritet = {priority})...\n")
        self._pause(2)
        self._unblock()

        self._waiting[priority - 1] = 1
        self._write(
            f"Dignuta zastavica K_Z[{priority}] = {self._waiting[priority - 1]}\n"
        )

        top = self._highest_waiting()
        while top > self._current:
            flags = "".join(
                f" K_Z[{level}] = {flag}\n"
                for level, flag in enumerate(self._waiting, 1)
            )
            self._write(f"Oznake čekanja:\n{flags}")
            self._waiting[top - 1] = 0
            self._context[top - 1] = self._current
            self._current = top

            self._unblock()
            self._write_context()
            self._service(top)
            self._write(f"\nPovratak iz prekida (prioritet = {top})...\n")
            self._pause(2)
            self._blocked = True

            self._current = self._context[top - 1]
            self._context[top - 1] = 0
            top = self._highest_waiting()
            self._write_context()

        self._unblock()

    def request_stop(self) -> None:
        """Ask the main loop to finish after its current iteration."""
        self._write("Primljen signal SIGQUIT, pospremam prije izlaska...\n")
        self._stop = True

    def run(self) -> int:
        """Print an iteration line every second until stopped; return the count."""
        pid = os.getpid()
        self._write(f"Program (PID = {pid}) krenuo s radom\n")
        iterations = 0
        while not self._stop:
            iterations += 1
            self._write(f"Glavni program (PID = {pid}): iteracija {iterations}\n")
            self._sleep(1)
        self._write(f"Program (PID = {pid}) zavrsio s radom\n")
        return iterations


def main(argv: list[str] | None = None) -> int:
    """Map signals to interrupt priorities and run the main loop."""
    parser = argparse.ArgumentParser(
        prog="syncdemos-interrupts",
        description="Prioritised, nested handling of signals.",
    )
    parser.parse_args(argv)

    controller = InterruptController(sys.stdout)
    for name, priority in _SIGNAL_PRIORITIES:
        signum = getattr(signal, name, None)
        if signum is not None:
            signal.signal(
                signum,
                lambda _signum, _frame, p=priority: controller.raise_interrupt(p),
            )
    quit_signal = getattr(signal, "SIGQUIT", None)
    if quit_signal is not None:
        signal.signal(quit_signal, lambda _signum, _frame: controller.request_stop())

    controller.run()
    return 0