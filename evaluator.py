"""
Evaluator for StepCalc
Replays a step log from the beginning and produces the result,
the pending flag and the human readable description
"""
import logging
import math
from collections import namedtuple

import config
from operations import DIVISION_BY_ZERO, OperationKind, lookup
from step_log import Number, OperationSymbol, Variable

logger = logging.getLogger(__name__)

Evaluation = namedtuple("Evaluation", "result is_pending description")


class CalculationError(Exception):
    """Raised by the checked evaluator; the step log is never modified."""

    reason = "calculation error"

    def __init__(self, operator, operands=(), reason=None):
        self.operator = operator
        self.operands = tuple(operands)
        if reason is not None:
            self.reason = reason
        super().__init__(self._message())

    def _message(self):
        if self.operands:
            values = ", ".join(format_number(value) for value in self.operands)
            return f"{self.operator}: {self.reason} ({values})"
        return f"{self.operator}: {self.reason}"


class MissingOperandError(CalculationError):
    reason = "missing operand"


class DomainError(CalculationError):
    reason = "math domain error"


class DivisionByZeroError(DomainError):
    reason = DIVISION_BY_ZERO


def format_number(value):
    """Render a value for the description: at most 6 decimals, no grouping"""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"

    text = f"{value:.{config.MAX_FRACTION_DIGITS}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


class PendingBinaryOperation(namedtuple("PendingBinaryOperation", "symbol operation first_operand")):
    __slots__ = ()


class _Replay:
    """State carried through one left-to-right fold over the log."""

    def __init__(self, variables, operations, checked, require_operands=True):
        self.variables = variables or {}
        self.operations = operations
        self.checked = checked
        self.require_operands = require_operands
        self.accumulator = None
        self.pending = None
        self.last_kind = None
        self.description = ""

    # ── Description helpers ───────────────────────────────────────────────
    def _write(self, text):
        """Append while an operation is pending, otherwise start over"""
        if self.pending is not None:
            self.description += text
        else:
            self.description = text

    # ── Arithmetic helpers ────────────────────────────────────────────────
    def _fail(self, symbol, operands, reason):
        error_class = DivisionByZeroError if reason == DIVISION_BY_ZERO else DomainError
        error = error_class(symbol, operands, reason)
        logger.warning(f"Evaluation aborted: {error}")
        raise error

    def _apply(self, symbol, operation, *operands):
        if self.checked and operation.domain is not None:
            reason = operation.domain(*operands)
            if reason is not None:
                self._fail(symbol, operands, reason)

        try:
            return operation.function(*operands)
        except OverflowError:
            if self.checked:
                self._fail(symbol, operands, "result out of range")
            return math.inf
        except ValueError:
            if self.checked:
                self._fail(symbol, operands, DomainError.reason)
            return math.nan

    def _resolve_pending(self):
        pending = self.pending
        return self._apply(pending.symbol, pending.operation, pending.first_operand, self.accumulator)

    def _has_operand(self, symbol):
        if self.accumulator is not None:
            return True
        if self.checked and self.require_operands:
            error = MissingOperandError(symbol)
            logger.warning(f"Evaluation aborted: {error}")
            raise error
        return False

    # ── Steps ─────────────────────────────────────────────────────────────
    def number(self, value):
        self.accumulator = value
        # The binary branch already rendered this operand
        if self.last_kind is OperationKind.BINARY:
            return
        self._write(format_number(value))

    def variable(self, name):
        self.accumulator = self.variables.get(name, 0.0)
        self._write(name)
        self.last_kind = OperationKind.MEMORY

    def operation(self, symbol):
        operation = lookup(symbol, self.operations)
        if operation is None:
            logger.debug(f"Skipping unknown operation {symbol!r}")
            return

        kind = operation.kind
        if kind is OperationKind.CONSTANT:
            self.accumulator = operation.value
            self._write(format_number(operation.value))

        elif kind is OperationKind.UNARY:
            if not self._has_operand(symbol):
                return
            if self.pending is not None:
                self.description += f"{symbol}({format_number(self.accumulator)})"
            else:
                self.description = f"{symbol}({self.description})"
            self.accumulator = self._apply(symbol, operation, self.accumulator)

        elif kind is OperationKind.BINARY:
            if not self._has_operand(symbol):
                return
            if self.pending is not None:
                if self.last_kind is OperationKind.MEMORY:
                    # The variable name is already in the description
                    self.description += symbol
                else:
                    self.description += format_number(self.accumulator) + symbol
                self.accumulator = self._resolve_pending()
                self.pending = PendingBinaryOperation(symbol, operation, self.accumulator)
            else:
                self.pending = PendingBinaryOperation(symbol, operation, self.accumulator)
                self.description += symbol
                self.accumulator = None

        elif kind is OperationKind.EQUALS:
            if not self._has_operand(symbol):
                return
            if self.last_kind is OperationKind.BINARY:
                self.description += format_number(self.accumulator)
            if self.pending is not None:
                self.accumulator = self._resolve_pending()
                self.pending = None

        elif kind is OperationKind.CUSTOM:
            value = operation.function()
            self.accumulator = value
            self._write(format_number(value))

        self.last_kind = kind

    def run(self, steps):
        logger.debug(f"Replaying {len(steps)} steps: {' '.join(str(step) for step in steps)}")
        for step in steps:
            if isinstance(step, Number):
                self.number(step.value)
            elif isinstance(step, OperationSymbol):
                self.operation(step.symbol)
            elif isinstance(step, Variable):
                self.variable(step.name)
            else:
                raise TypeError(f"Unknown step type: {type(step).__name__}")

        return Evaluation(self.accumulator, self.pending is not None, self.description)


def evaluate(steps, variables=None, operations=None):
    """Fold the steps into an Evaluation.

    Missing operands and unknown symbols are skipped, out-of-domain
    arithmetic yields inf/NaN; nothing is raised for user input.
    Unbound variables evaluate to 0.0.
    """
    return _Replay(variables, operations, checked=False).run(tuple(steps))


def evaluate_checked(steps, variables=None, operations=None, require_operands=True):
    """Same fold as evaluate(), but a missing operand or an out-of-domain
    operation raises a CalculationError naming the operator.

    With require_operands=False only domain errors are raised and missing
    operands are skipped as in evaluate().
    """
    replay = _Replay(variables, operations, checked=True, require_operands=require_operands)
    return replay.run(tuple(steps))
