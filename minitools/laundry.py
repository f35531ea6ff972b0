"""A laundry-room simulation: students wait a limited time for a free washing machine.

Students are served in order of arrival, ties broken by id. A student who
arrives takes the machine that frees up first, as long as it frees up
within their patience; otherwise they leave without washing.
"""

import argparse
import enum
import heapq
import sys
import time
from dataclasses import dataclass, field

_RESET = "\033[0m"
NEEDS_MORE_PERCENT = 25


class EventKind(enum.Enum):
    """What happens to a student, with the message and colour it is shown in."""

    LEAVES_AFTER_WASHING = (0, "leaves after washing", "\033[1;33m")
    ARRIVES = (1, "arrives", "")
    STARTS_WASHING = (2, "starts washing", "\033[1;32m")
    LEAVES_WITHOUT_WASHING = (3, "leaves without washing", "\033[1;31m")

    def __init__(self, rank, message, colour):
        self.rank = rank
        self.message = message
        self.colour = colour


@dataclass(frozen=True)
class Student:
    """A student: arrival second, washing seconds, patience seconds and id."""

    arrival_time: int
    wash_time: int
    patience: int
    id: int


@dataclass(frozen=True)
class Event:
    """Something that happens to a student at a given second."""

    time: int
    student_id: int
    kind: EventKind

    def message(self, colour=False):
        text = f"Student {self.student_id} {self.kind.message}"
        if colour and self.kind.colour:
            return f"{self.kind.colour}{text}{_RESET}"
        return text


@dataclass
class SimulationResult:
    """The events of a simulation in the order they happen, and its outcome."""

    events: list = field(default_factory=list)
    left_unwashed: int = 0
    students: int = 0

    @property
    def needs_more_machines(self):
        """True when at least a quarter of the students left without washing."""
        if self.students == 0:
            return False
        return self.left_unwashed * 100 // self.students >= NEEDS_MORE_PERCENT

    def report(self, colour=False):
        """Return the full printed report: events, the unwashed count and Yes or No."""
        lines = [event.message(colour) for event in self.events]
        lines.append(str(self.left_unwashed))
        lines.append("Yes" if self.needs_more_machines else "No")
        return "\n".join(lines) + "\n"


def arrange(students):
    """Return ``students`` ordered by arrival time, then by id."""
    return sorted(students, key=lambda student: (student.arrival_time, student.id))


def simulate(students, machines):
    """Run the simulation for ``students`` sharing ``machines`` washing machines."""
    if machines < 0:
        raise ValueError("the number of machines cannot be negative")
    ordered = arrange(students)
    free_at = [0] * machines
    heapq.heapify(free_at)
    keyed = []
    left_unwashed = 0
    for order, student in enumerate(ordered):
        arrival = student.arrival_time
        keyed.append(((arrival, EventKind.ARRIVES.rank, order),
                      Event(arrival, student.id, EventKind.ARRIVES)))
        deadline = arrival + student.patience
        earliest = free_at[0] if free_at else None
        if earliest is not None and max(arrival, earliest) <= deadline:
            heapq.heappop(free_at)
            start = max(arrival, earliest)
            finish = start + student.wash_time
            heapq.heappush(free_at, finish)
            keyed.append(((start, EventKind.STARTS_WASHING.rank, order),
                          Event(start, student.id, EventKind.STARTS_WASHING)))
            # A zero-length wash still ends after it starts.
            leave_rank = EventKind.LEAVES_AFTER_WASHING.rank if finish > start else 4
            keyed.append(((finish, leave_rank, order),
                          Event(finish, student.id, EventKind.LEAVES_AFTER_WASHING)))
        else:
            left_unwashed += 1
            keyed.append(((deadline, EventKind.LEAVES_WITHOUT_WASHING.rank, order),
                          Event(deadline, student.id, EventKind.LEAVES_WITHOUT_WASHING)))
    keyed.sort(key=lambda pair: pair[0])
    return SimulationResult([event for _, event in keyed], left_unwashed, len(ordered))


def parse_input(text):
    """Read ``n m`` followed by ``n`` lines of ``T W P``; return the students and ``m``.

    Students are numbered from 1 in the order given.
    """
    try:
        numbers = [int(word) for word in text.split()]
    except ValueError as exc:
        raise ValueError("input must contain only integers") from exc
    if len(numbers) < 2:
        raise ValueError("expected the number of students and of machines")
    count, machines = numbers[0], numbers[1]
    if count < 0:
        raise ValueError("the number of students cannot be negative")
    values = numbers[2:]
    if len(values) < 3 * count:
        raise ValueError(f"expected {count} students with three values each")
    students = [
        Student(*values[3 * index:3 * index + 3], id=index + 1)
        for index in range(count)
    ]
    return students, machines


def main(argv=None):
    """Read the scenario from standard input, play it out and print the outcome."""
    parser = argparse.ArgumentParser(
        prog="laundry", description="Simulate students sharing washing machines.")
    parser.add_argument("--instant", action="store_true",
                        help="print events at once instead of in real time")
    args = parser.parse_args(argv)
    try:
        students, machines = parse_input(sys.stdin.read())
        result = simulate(students, machines)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    if not result.students:
        print("no students given", file=sys.stderr)
        return 1
    started = time.monotonic()
    for event in result.events:
        if not args.instant:
            delay = event.time - (time.monotonic() - started)
            if delay > 0:
                time.sleep(delay)
        print(event.message(colour=True), flush=True)
    print(result.left_unwashed)
    print("Yes" if result.needs_more_machines else "No")
    return 0


if __name__ == "__main__":
    sys.exit(main())