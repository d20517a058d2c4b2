"""Input, worker and output threads passing letters through ring buffers.

Input threads drop random capital letters into the input buffers, workers
turn them into lower case and pass them to output buffers, and output
threads print what they find there.
"""

from __future__ import annotations

import argparse
import random
import sys
import threading
import time
from typing import Callable, TextIO

EMPTY = "-"

Sleep = Callable[[float], None]

_PROMPTS = (
    "Unesite broj ulaznih dretvi: ",
    "Unesite broj radnih dretvi: ",
    "Unesite broj izlaznih dretvi: ",
    "Unesite velicinu meduspremnika: ",
)


class RingBuffer:
    """A fixed-size ring of characters that drops its oldest entry when full."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("buffer size must be at least 1")
        self.slots = [EMPTY] * size
        self.write_pos = 0
        self.read_pos = 0
        self.last = "0"
        self.lock = threading.Lock()
        self.available = threading.Semaphore(0)

    def put(self, item: str) -> bool:
        """Store an item; return True when the oldest entry had to be dropped."""
        size = len(self.slots)
        self.slots[self.write_pos] = item
        self.write_pos = (self.write_pos + 1) % size
        if self.write_pos == self.read_pos:
            self.read_pos = (self.read_pos + 1) % size
            return True
        self.available.release()
        return False

    def take(self) -> str:
        """Remove and return the entry at the read position."""
        item = self.slots[self.read_pos]
        self.slots[self.read_pos] = EMPTY
        self.read_pos = (self.read_pos + 1) % len(self.slots)
        return item

    def render(self) -> str:
        return "".join(self.slots)


class Pipeline:
    """Input buffers, one per worker, and output buffers, one per output thread."""

    def __init__(
        self,
        inputs: int,
        workers: int,
        outputs: int,
        size: int,
        rng: random.Random | None = None,
        sleep: Sleep = time.sleep,
        out: TextIO | None = None,
    ) -> None:
        for name, value in (
            ("inputs", inputs),
            ("workers", workers),
            ("outputs", outputs),
            ("size", size),
        ):
            if value < 1:
                raise ValueError(f"{name} must be at least 1")
        self.inputs = inputs
        self.workers = workers
        self.outputs = outputs
        self.input_buffers = [RingBuffer(size) for _ in range(workers)]
        self.output_buffers = [RingBuffer(size) for _ in range(outputs)]
        self._rng = rng if rng is not None else random.Random()
        self._sleep = sleep
        self._out = out
        self._print_lock = threading.Lock()

    def _write(self, text: str) -> None:
        out = self._out if self._out is not None else sys.stdout
        with self._print_lock:
            out.write(text)
            out.flush()

    def _state(self) -> str:
        ums = "".join(buf.render() + " " for buf in self.input_buffers)
        ims = "".join(buf.render() + " " for buf in self.output_buffers)
        return f"\nUMS[]:{ums}\nIMS[]:{ims}"

    def input_step(self, ident: int) -> tuple[str, int]:
        """Fetch a random capital letter and place it in a random input buffer."""
        letter = chr(ord("A") + self._rng.randrange(26))
        target = self._rng.randrange(self.workers)
        buf = self.input_buffers[target]
        with buf.lock:
            if buf.put(letter):
                buf.slots[buf.write_pos] = letter
        self._write(
            f"\nU{ident}: dohvati_ulaz('{ident}')=>'{letter}'; "
            f"obradi_ulaz('{letter}')=>{target}; "
            f"'{letter}' => UMS[{target}]" + self._state()
        )
        return letter, target

    def worker_step(self, ident: int) -> tuple[str, str, int]:
        """Wait for a letter in this worker's buffer, lower it and pass it on."""
        buf = self.input_buffers[ident]
        buf.available.acquire()
        with buf.lock:
            taken = buf.take()
            result = taken.lower()
            target = self._rng.randrange(self.outputs)
            self._sleep(self._rng.randint(2, 3))
        dest = self.output_buffers[target]
        with dest.lock:
            dest.put(result)
            self._write(
                f"\nR{ident}: uzimam iz UMS[{ident}]=>'{taken}' i obradujem"
                + self._state()
            )
        return taken, result, target

    def output_step(self, ident: int) -> str:
        """Print the next letter of this output buffer, or the last one seen."""
        buf = self.output_buffers[ident]
        with buf.lock:
            has_data = any("a" <= c <= "z" for c in buf.slots)
            value = buf.last
            if has_data and buf.slots[buf.read_pos] != EMPTY:
                value = buf.take()
                buf.last = value
            if buf.slots[buf.read_pos] == EMPTY:
                value = buf.last
            self._write(f"\nDretva {ident} ispisuje {value}")
        return value

    def run(self, stop: threading.Event) -> None:
        """Start inputs, workers 30 s later and outputs 10 s after; stop on the event."""

        def loop(step: Callable[[int], object], ident: int, pause) -> None:
            while not stop.is_set():
                step(ident)
                if pause is not None:
                    self._sleep(pause())

        def spawn(step, ident: int, pause) -> threading.Thread:
            thread = threading.Thread(
                target=loop, args=(step, ident, pause), daemon=True
            )
            thread.start()
            return thread

        joined = [
            spawn(self.input_step, ident, lambda: self._rng.randint(5, 10))
            for ident in range(self.inputs)
        ]
        if not stop.wait(30):
            for ident in range(self.workers):
                spawn(self.worker_step, ident, None)
            if not stop.wait(10):
                joined += [
                    spawn(self.output_step, ident, lambda: 3)
                    for ident in range(self.outputs)
                ]
        stop.wait()
        for thread in joined:
            thread.join()


def main(argv: list[str] | None = None) -> int:
    """Ask for the thread counts and buffer size, then run until interrupted."""
    parser = argparse.ArgumentParser(
        prog="syncdemos-semaphores",
        description="Letters passed between threads through ring buffers.",
    )
    parser.parse_args(argv)
    try:
        counts = [int(input(prompt)) for prompt in _PROMPTS]
        pipeline = Pipeline(*counts, rng=random.Random(), out=sys.stdout)
    except (ValueError, EOFError) as exc:
        print(f"invalid input: {exc}", file=sys.stderr)
        return 1
    stop = threading.Event()
    try:
        pipeline.run(stop)
    except KeyboardInterrupt:
        stop.set()
    return 0