# philosophers

A simulation of the dining philosophers problem. Each philosopher runs in its
own thread. It picks up its left fork, then its right fork, eats, puts both
forks down, sleeps and then thinks. A separate monitor thread watches for
anyone who has gone too long without a meal.

## Usage

```
philo NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MEALS]
```

- `NUMBER_OF_PHILOSOPHERS`: from 1 to 200.
- `TIME_TO_DIE`, `TIME_TO_EAT`, `TIME_TO_SLEEP`: in milliseconds.
- `MEALS` (optional): each philosopher stops after eating this many times,
  and the monitor stops watching once it finds a philosopher who has.

Every event is printed as a millisecond timestamp, the philosopher's number
and what happened:

```
$ philo 5 800 200 200 3
1700000000000 2 has taken a fork
1700000000000 2 has taken a fork
1700000000000 2 is eating
...
```

The other events are `is sleeping`, `is thinking` and `died`. Once a
philosopher has died, nothing else is printed and the remaining threads wind
down.

Arguments are read as leading runs of decimal digits. When an argument holds
a character that is not a digit, a notice is printed and only the digits
before it are used; an argument that does not start with a digit reads as -1.

With the wrong number of arguments the command prints `Wrong number of args`
and exits with status 1; with a philosopher count outside 1 to 200 it prints
`Invalid input` and exits with status 1. Otherwise it exits with status 0
when the dinner ends, whether or not a philosopher died.

## Library use

```python
import sys
from philosophers.config import parse_args
from philosophers.table import Simulation

settings = parse_args(["4", "410", "200", "200", "2"])
died = Simulation(settings, sys.stdout).run()
```

- `philosophers.config.parse_args` takes the four or five arguments and
  returns a `Settings` dataclass (`n_philo`, `time_to_die`, `time_to_eat`,
  `time_to_sleep`, `n_loop`). It raises `InvalidInput` (a `ValueError`) for a
  wrong argument count or a philosopher count out of range.
- `philosophers.config.parse_number` reads one argument as described above.
- `philosophers.table.Simulation.run` runs the dinner to its end and returns
  `True` if a philosopher died. Output goes to the stream given as `out`, or
  to standard output.
- `philosophers.table.State` lists the reported events and their text;
  `philosophers.table.timestamp` gives wall-clock time in milliseconds.