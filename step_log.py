"""
Step Log for StepCalc
Ordered record of every operand, operation key and variable the user entered
"""
from collections import namedtuple


class Number(namedtuple("Number", "value")):
    __slots__ = ()

    def __str__(self):
        return str(self.value)


class OperationSymbol(namedtuple("OperationSymbol", "symbol")):
    __slots__ = ()

    def __str__(self):
        return self.symbol


class Variable(namedtuple("Variable", "name")):
    __slots__ = ()

    def __str__(self):
        return self.name


class StepLog:
    """Append-only log of steps; undo is a structural truncation."""

    def __init__(self):
        self._steps = []

    def append(self, step):
        """Add a step at the end of the log"""
        self._steps.append(step)

    def remove_last(self):
        """Drop the most recent step and return it (None if the log is empty)"""
        if not self._steps:
            return None
        return self._steps.pop()

    def clear(self):
        """Empty the log"""
        self._steps = []

    def snapshot(self):
        """Read-only view of the steps, oldest first"""
        return tuple(self._steps)

    def __len__(self):
        return len(self._steps)

    def __iter__(self):
        return iter(self.snapshot())

    def __repr__(self):
        return f"StepLog([{', '.join(str(step) for step in self._steps)}])"
