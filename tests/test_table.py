import io
from collections import Counter

import pytest

from philosophers.config import Settings
from philosophers.table import Simulation, State, timestamp


def _lines(out):
    return [line for line in out.getvalue().splitlines() if line]


def _parse(line):
    stamp, ident, rest = line.split(" ", 2)
    return int(stamp), int(ident), rest.strip()


def test_timestamp_is_monotone_enough():
    first = timestamp()
    second = timestamp()
    assert second >= first
    assert first > 1_600_000_000_000


def test_forks_are_shared_in_a_ring():
    sim = Simulation(Settings(4, 800, 100, 100, None), io.StringIO())
    philosophers = sim.philosophers
    assert [p.id for p in philosophers] == [1, 2, 3, 4]
    for seat, philosopher in enumerate(philosophers):
        neighbour = philosophers[(seat + 1) % 4]
        assert philosopher.left_fork is neighbour.right_fork
    assert philosophers[-1].left_fork is philosophers[0].right_fork


def test_report_line_format():
    out = io.StringIO()
    sim = Simulation(Settings(2, 800, 100, 100, None), out)
    sim.report(State.EAT, sim.philosophers[1])
    stamp, ident, text = out.getvalue().split(" ", 2)
    assert ident == "2"
    assert text == "is eating \n"
    assert int(stamp) <= timestamp()


def test_zero_meals_finishes_silently():
    out = io.StringIO()
    sim = Simulation(Settings(3, 800, 50, 50, 0), out)
    assert sim.run() is False
    assert out.getvalue() == ""


def test_lone_philosopher_dies():
    out = io.StringIO()
    sim = Simulation(Settings(1, 100, 50, 50, None), out)
    assert sim.run() is True
    assert sim.someone_died() is True
    lines = [_parse(line) for line in _lines(out)]
    assert lines[0][1:] == (1, "has taken a fork")
    assert lines[-1][1:] == (1, "died")
    assert all(text != "is eating" for _, _, text in lines)


@pytest.mark.parametrize("count, meals", [(2, 2), (5, 3)])
def test_everyone_eats_the_required_meals(count, meals):
    out = io.StringIO()
    sim = Simulation(Settings(count, 2000, 30, 30, meals), out)
    assert sim.run() is False
    events = [_parse(line) for line in _lines(out)]
    eaten = Counter(ident for _, ident, text in events if text == "is eating")
    forks = Counter(ident for _, ident, text in events if text == "has taken a fork")
    assert eaten == {ident: meals for ident in range(1, count + 1)}
    assert forks == {ident: 2 * meals for ident in range(1, count + 1)}
    assert all(p.meals == meals for p in sim.philosophers)


def test_timestamps_never_go_backwards():
    out = io.StringIO()
    Simulation(Settings(4, 2000, 20, 20, 2), out).run()
    stamps = [_parse(line)[0] for line in _lines(out)]
    assert stamps == sorted(stamps)


def test_death_is_the_last_line():
    out = io.StringIO()
    sim = Simulation(Settings(4, 30, 200, 100, None), out)
    assert sim.run() is True
    events = [_parse(line) for line in _lines(out)]
    deaths = [event for event in events if event[2] == "died"]
    assert len(deaths) == 1
    assert events[-1] == deaths[0]


def test_forks_are_free_after_run():
    sim = Simulation(Settings(3, 2000, 10, 10, 1), io.StringIO())
    sim.run()
    assert all(not fork.lock.locked() for fork in sim.forks)