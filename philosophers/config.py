"""Command-line argument parsing for the dining philosophers simulation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

MIN_PHILOSOPHERS = 1
MAX_PHILOSOPHERS = 200


class InvalidInput(ValueError):
    """Raised when the simulation arguments cannot be accepted."""


@dataclass(frozen=True)
class Settings:
    """Parameters of one simulation; all durations are in milliseconds."""

    n_philo: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    n_loop: int | None = None


def parse_number(arg: str) -> int:
    """Read the leading run of decimal digits in ``arg``.

    Returns -1 when ``arg`` does not start with a digit. Parsing stops at the
    first non-digit character, after printing an error notice.
    """
    num = -1
    for char in arg:
        if not ("0" <= char <= "9"):
            print("Error: only positive integers are accepted ")
            break
        num = max(num, 0) * 10 + (ord(char) - ord("0"))
    return num


def parse_args(args: Sequence[str]) -> Settings:
    """Build :class:`Settings` from the four or five positional arguments.

    The arguments are: number of philosophers, time to die, time to eat,
    time to sleep and, optionally, the number of meals each philosopher eats.
    """
    if not 4 <= len(args) <= 5:
        raise InvalidInput("Wrong number of args")
    n_philo = parse_number(args[0])
    if not MIN_PHILOSOPHERS <= n_philo <= MAX_PHILOSOPHERS:
        raise InvalidInput("Invalid input")
    time_to_die = parse_number(args[1])
    time_to_eat = parse_number(args[2])
    time_to_sleep = parse_number(args[3])
    n_loop = None
    if len(args) == 5:
        meals = parse_number(args[4])
        n_loop = meals if meals >= 0 else None
    return Settings(n_philo, time_to_die, time_to_eat, time_to_sleep, n_loop)