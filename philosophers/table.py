"""The dining table: philosophers, forks and the monitor that watches them."""

from __future__ import annotations

import itertools
import sys
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TextIO

from .config import Settings

_ODD_START_DELAY = 0.06


class State(Enum):
    """What a philosopher is doing, with the text reported for it."""

    THINK = "is thinking"
    EAT = "is eating"
    SLEEP = "is sleeping"
    DEAD = "died"
    FORK = "has taken a fork"


def timestamp() -> int:
    """Wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


def _pause(milliseconds: int) -> None:
    time.sleep(max(milliseconds, 0) / 1000)


@dataclass
class Fork:
    """A fork shared by two neighbouring philosophers."""

    lock: threading.Lock = field(default_factory=threading.Lock)


@dataclass
class Philosopher:
    """A seat at the table and the forks within reach."""

    id: int
    right_fork: Fork
    left_fork: Fork
    last_meal: int
    meals: int = 0
    holding_right: bool = False
    holding_left: bool = False


class Simulation:
    """Runs one dinner: a thread per philosopher plus a monitor thread."""

    def __init__(self, settings: Settings, out: TextIO | None = None) -> None:
        self.settings = settings
        self._out = out if out is not None else sys.stdout
        self._print_lock = threading.Lock()
        self._death_lock = threading.Lock()
        self._philo_lock = threading.Lock()
        self._died = False
        count = settings.n_philo
        self.forks = [Fork() for _ in range(count)]
        now = timestamp()
        self.philosophers = [
            Philosopher(
                id=seat + 1,
                right_fork=self.forks[seat],
                left_fork=self.forks[(seat + 1) % count],
                last_meal=now,
            )
            for seat in range(count)
        ]

    def someone_died(self) -> bool:
        """Whether the monitor has declared a death."""
        with self._death_lock:
            return self._died

    def report(self, state: State, philosopher: Philosopher) -> None:
        """Write one log line; after a death only the death itself is written."""
        with self._print_lock:
            if state is State.DEAD or not self.someone_died():
                self._out.write(f"{timestamp()} {philosopher.id} {state.value} \n")
                self._out.flush()

    def run(self) -> bool:
        """Run the dinner to its end; return True if a philosopher died."""
        diners = [
            threading.Thread(target=self._live, args=(philosopher,))
            for philosopher in self.philosophers
        ]
        monitor = threading.Thread(target=self._watch)
        for thread in diners:
            thread.start()
        monitor.start()
        for thread in reversed(diners):
            thread.join()
        monitor.join()
        return self.someone_died()

    def _finished(self, philosopher: Philosopher) -> bool:
        return philosopher.meals == self.settings.n_loop

    def _take_fork(self, philosopher: Philosopher, left: bool) -> None:
        if self.someone_died():
            return
        held = philosopher.holding_left if left else philosopher.holding_right
        if held:
            return
        fork = philosopher.left_fork if left else philosopher.right_fork
        fork.lock.acquire()
        if left:
            philosopher.holding_left = True
        else:
            philosopher.holding_right = True
        self.report(State.FORK, philosopher)

    def _put_forks(self, philosopher: Philosopher) -> None:
        if philosopher.holding_right:
            philosopher.holding_right = False
            philosopher.right_fork.lock.release()
        if philosopher.holding_left:
            philosopher.holding_left = False
            philosopher.left_fork.lock.release()

    def _eat(self, philosopher: Philosopher) -> None:
        self.report(State.EAT, philosopher)
        with self._philo_lock:
            philosopher.last_meal = timestamp()
        _pause(self.settings.time_to_eat)
        with self._philo_lock:
            philosopher.meals += 1

    def _live(self, philosopher: Philosopher) -> None:
        if philosopher.id % 2:
            time.sleep(_ODD_START_DELAY)
        while not self.someone_died() and not self._finished(philosopher):
            self._take_fork(philosopher, left=True)
            if philosopher.holding_left and self.settings.n_philo > 1:
                self._take_fork(philosopher, left=False)
            if philosopher.holding_left and philosopher.holding_right:
                self._eat(philosopher)
                self._put_forks(philosopher)
                self.report(State.SLEEP, philosopher)
                _pause(self.settings.time_to_sleep)
                self.report(State.THINK, philosopher)
        self._put_forks(philosopher)

    def _die(self, philosopher: Philosopher) -> None:
        with self._death_lock:
            self._died = True
        self.report(State.DEAD, philosopher)

    def _watch(self) -> None:
        for philosopher in itertools.cycle(self.philosophers):
            with self._philo_lock:
                if self._finished(philosopher):
                    return
                starving = (
                    timestamp() - philosopher.last_meal > self.settings.time_to_die
                )
            if starving:
                self._die(philosopher)
                return