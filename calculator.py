"""
Calculator Engine for StepCalc
Records operands, operations and variable references, and evaluates them on demand
"""
import logging
from enum import Enum

from evaluator import evaluate, evaluate_checked
from operations import OPERATIONS, build_operations, lookup
from step_log import Number, OperationSymbol, StepLog, Variable

logger = logging.getLogger(__name__)


class CalculatorState(Enum):
    EMPTY = "empty"
    OPERAND_ONLY = "operand-only"
    OPERATION_PENDING = "operation-pending"
    RESOLVED = "resolved"


class Calculator:
    def __init__(self, operations=None, random_source=None):
        if operations is None:
            operations = OPERATIONS if random_source is None else build_operations(random_source)
        self.operations = operations
        self.log = StepLog()

    def record_operand(self, value):
        """Record a number typed by the user"""
        self.log.append(Number(float(value)))

    def record_operation(self, symbol):
        """Record an operation key; unknown symbols are kept and skipped on replay"""
        if symbol not in self.operations:
            logger.debug(f"Recording unknown operation {symbol!r}")
        self.log.append(OperationSymbol(symbol))

    def record_variable_reference(self, name):
        """Record a variable whose value is looked up at evaluation time"""
        self.log.append(Variable(name))

    def undo_last(self):
        """Remove the most recent step (no-op on an empty log)"""
        return self.log.remove_last()

    def reset(self):
        """Forget every recorded step"""
        self.log.clear()

    @property
    def steps(self):
        return self.log.snapshot()

    def evaluate(self, variables=None):
        """Replay the log; returns Evaluation(result, is_pending, description)"""
        return evaluate(self.log.snapshot(), variables, self.operations)

    def evaluate_checked(self, variables=None, require_operands=True):
        """Replay the log, raising CalculationError on a missing operand or domain error"""
        return evaluate_checked(self.log.snapshot(), variables, self.operations, require_operands)

    def state(self, variables=None):
        """Project the current evaluation onto a CalculatorState"""
        evaluation = self.evaluate(variables)
        if evaluation.is_pending:
            return CalculatorState.OPERATION_PENDING
        if evaluation.result is None:
            return CalculatorState.EMPTY
        # Unknown symbols are skipped on replay, so they do not count as the last step
        for step in reversed(self.log.snapshot()):
            if isinstance(step, OperationSymbol) and lookup(step.symbol, self.operations) is None:
                continue
            if isinstance(step, OperationSymbol):
                return CalculatorState.RESOLVED
            break
        return CalculatorState.OPERAND_ONLY
