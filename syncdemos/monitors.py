"""Readers, writers and deleters sharing one list, coordinated by a monitor.

Readers may read in parallel with each other and with a writer. Writers
exclude each other. A deleter needs the list to itself, and a waiting
deleter holds back new readers and writers.
"""

from __future__ import annotations

import argparse
import itertools
import random
import sys
import threading
import time
from typing import Callable, Iterable, Iterator, TextIO

Sleep = Callable[[float], None]


def _pause(rng: random.Random) -> int:
    return rng.randint(5, 10)


def _rounds(rounds: int | None) -> Iterator[int]:
    return itertools.count() if rounds is None else iter(range(rounds))


class ListMonitor:
    """A shared list guarded by one lock and three waiting queues."""

    def __init__(self, items: Iterable[int] = (), out: TextIO | None = None) -> None:
        self._items = list(items)
        self._out = out
        self._lock = threading.Lock()
        self._readers_queue = threading.Condition(self._lock)
        self._writers_queue = threading.Condition(self._lock)
        self._deleters_queue = threading.Condition(self._lock)
        self._readers_waiting = 0
        self._readers_active = 0
        self._writers_waiting = 0
        self._writers_active = 0
        self._deleters_waiting = 0
        self._deleters_active = 0

    def snapshot(self) -> list[int]:
        """Return a copy of the list as it is now."""
        with self._lock:
            return list(self._items)

    def _report(self, message: str) -> None:
        out = self._out if self._out is not None else sys.stdout
        listing = "".join(f"{item} " for item in self._items)
        out.write(
            f"{message}\n"
            f"Aktivnih: citaca = {self._readers_active}, "
            f"pisaca = {self._writers_active}, "
            f"brisaca = {self._deleters_active}\n"
            f"Lista: {listing}\n"
        )
        out.flush()

    def start_read(self, ident: int, index: int) -> int:
        """Wait until no deleter is active or waiting, then read one element."""
        with self._lock:
            self._report(f"Citac {ident} zeli citati element {index} liste")
            self._readers_waiting += 1
            while self._deleters_active + self._deleters_waiting > 0:
                self._readers_queue.wait()
            self._readers_waiting -= 1
            if not 0 <= index < len(self._items):
                raise IndexError(
                    f"no element {index} in a list of {len(self._items)}"
                )
            self._readers_active += 1
            value = self._items[index]
            self._report(
                f"Citac {ident} cita element {index} liste (vrijednost={value})"
            )
            return value

    def end_read(self, ident: int) -> None:
        """Stop using the list and let a waiting deleter in if it was the last reader."""
        with self._lock:
            if self._readers_active == 0:
                raise RuntimeError("no reader is using the list")
            self._readers_active -= 1
            if self._readers_active == 0 and self._deleters_waiting > 0:
                self._deleters_queue.notify()
            self._report(f"Citac {ident} vise ne koristi listu")

    def start_write(self, ident: int, value: int) -> None:
        """Wait until no deleter and no other writer is in, then begin writing."""
        with self._lock:
            self._report(f"Pisac {ident} zeli dodati vrijednost {value} u listu")
            self._writers_waiting += 1
            while (
                self._deleters_active + self._deleters_waiting > 0
                or self._writers_active > 0
            ):
                self._writers_queue.wait()
            self._writers_active += 1
            self._writers_waiting -= 1
            self._report(
                f"Pisac {ident} zapocinje dodavanje vrijednosti {value} na kraj liste"
            )

    def end_write(self, ident: int, value: int) -> None:
        """Append the value and hand the list on to a deleter or a writer."""
        with self._lock:
            if self._writers_active == 0:
                raise RuntimeError("no writer is using the list")
            self._writers_active -= 1
            if self._writers_active == 0 and self._deleters_waiting > 0:
                self._deleters_queue.notify()
            elif self._writers_waiting > 0:
                self._writers_queue.notify()
            self._items.append(value)
            self._report(f"Pisac {ident} dodao vrijednost {value} na kraj liste")

    def start_delete(self, ident: int, index: int) -> int:
        """Wait for the list to be free, then return the element to be deleted."""
        with self._lock:
            self._report(f"Brisac {ident} zeli obrisati element {index} liste")
            self._deleters_waiting += 1
            while (
                self._writers_active + self._readers_active + self._deleters_active
                > 0
            ):
                self._deleters_queue.wait()
            self._deleters_active += 1
            self._deleters_waiting -= 1
            if not 0 <= index < len(self._items):
                self._release_delete()
                raise IndexError(
                    f"no element {index} in a list of {len(self._items)}"
                )
            value = self._items[index]
            self._report(
                f"Brisac {ident} zapocinje s brisanjem elementa {index} "
                f"liste (vrijednost={value})"
            )
            return value

    def end_delete(self, ident: int, index: int, value: int) -> None:
        """Remove the element and wake the next deleter, writer or reader."""
        with self._lock:
            if self._deleters_active == 0:
                raise RuntimeError("no deleter is using the list")
            del self._items[index]
            self._release_delete()
            self._report(
                f"Brisac {ident} obrisao element liste {index} (vrijednost={value})"
            )

    def _release_delete(self) -> None:
        self._deleters_active -= 1
        if self._deleters_active == 0 and self._deleters_waiting > 0:
            self._deleters_queue.notify()
        elif self._writers_active == 0 and self._writers_waiting > 0:
            self._writers_queue.notify()
        elif self._readers_waiting > 0:
            self._readers_queue.notify()


def reader(
    monitor: ListMonitor,
    ident: int,
    rng: random.Random,
    sleep: Sleep = time.sleep,
    rounds: int | None = None,
) -> None:
    """Repeatedly read a random element; run forever when rounds is None."""
    for _ in _rounds(rounds):
        size = len(monitor.snapshot())
        if size == 0:
            sleep(_pause(rng))
            continue
        index = rng.randrange(size)
        try:
            monitor.start_read(ident, index)
        except IndexError:
            continue
        sleep(_pause(rng))
        monitor.end_read(ident)
        sleep(_pause(rng))


def writer(
    monitor: ListMonitor,
    ident: int,
    rng: random.Random,
    sleep: Sleep = time.sleep,
    rounds: int | None = None,
) -> None:
    """Repeatedly append a random value from 1 to 100."""
    for _ in _rounds(rounds):
        value = rng.randint(1, 100)
        monitor.start_write(ident, value)
        sleep(_pause(rng))
        monitor.end_write(ident, value)
        sleep(_pause(rng))


def deleter(
    monitor: ListMonitor,
    ident: int,
    rng: random.Random,
    sleep: Sleep = time.sleep,
    rounds: int | None = None,
) -> None:
    """Repeatedly delete a random element."""
    for _ in _rounds(rounds):
        size = len(monitor.snapshot())
        if size == 0:
            sleep(_pause(rng))
            continue
        index = rng.randrange(size)
        try:
            value = monitor.start_delete(ident, index)
        except IndexError:
            continue
        sleep(_pause(rng))
        monitor.end_delete(ident, index, value)
        sleep(_pause(rng))


def main(argv: list[str] | None = None) -> int:
    """Run two writers, then ten readers, then one deleter, until interrupted."""
    parser = argparse.ArgumentParser(
        prog="syncdemos-monitors",
        description="Readers, writers and deleters sharing one list.",
    )
    parser.parse_args(argv)

    rng = random.Random()
    monitor = ListMonitor()

    def spawn(role: Callable[..., None], ident: int) -> threading.Thread:
        thread = threading.Thread(
            target=role, args=(monitor, ident, rng, time.sleep, None), daemon=True
        )
        thread.start()
        return thread

    try:
        threads = [spawn(writer, ident) for ident in range(2)]
        time.sleep(25)
        threads += [spawn(reader, ident) for ident in range(10)]
        time.sleep(10)
        threads.append(spawn(deleter, 1))
        for thread in threads:
            thread.join()
    except KeyboardInterrupt:
        pass
    return 0