"""
Operation Registry for StepCalc
Maps key symbols to the operations the evaluator knows how to replay
"""
import math
import random
from collections import namedtuple
from enum import Enum

import config

DIVISION_BY_ZERO = "division by zero"


class OperationKind(Enum):
    CONSTANT = "constant"
    UNARY = "unary"
    BINARY = "binary"
    EQUALS = "equals"
    CUSTOM = "custom"
    MEMORY = "memory"   # tag of a resolved variable step, never registered


class Constant(namedtuple("Constant", "value")):
    __slots__ = ()
    kind = OperationKind.CONSTANT


class Unary(namedtuple("Unary", "function domain", defaults=(None,))):
    __slots__ = ()
    kind = OperationKind.UNARY


class Binary(namedtuple("Binary", "function domain", defaults=(None,))):
    __slots__ = ()
    kind = OperationKind.BINARY


class Equals(namedtuple("Equals", "")):
    __slots__ = ()
    kind = OperationKind.EQUALS


class Custom(namedtuple("Custom", "function")):
    """Zero-argument generator. Called again on every replay, so not pure."""
    __slots__ = ()
    kind = OperationKind.CUSTOM


# Domain predicates return None when the operands are acceptable,
# otherwise the reason reported by the checked evaluator.

def _non_negative(value):
    if value < 0:
        return "square root of a negative number"
    return None


def _positive(value):
    if value <= 0:
        return "logarithm of a non-positive number"
    return None


def _non_zero(value):
    if value == 0:
        return DIVISION_BY_ZERO
    return None


def _non_zero_divisor(first, second):
    return _non_zero(second)


# The lenient evaluator never raises, so division and logarithms follow
# IEEE 754 instead of raising ZeroDivisionError / ValueError.

def _divide(first, second):
    if second == 0:
        if first == 0 or math.isnan(first):
            return math.nan
        return math.copysign(math.inf, first) * math.copysign(1.0, second)
    return first / second


def _logarithm(function):
    def apply(value):
        if value == 0:
            return -math.inf
        if value < 0:
            return math.nan
        return function(value)
    return apply


def _random_generator(random_source):
    def generate():
        return 1 / random_source.randint(1, config.RANDOM_UPPER_BOUND) * config.RANDOM_SCALE
    return generate


def build_operations(random_source=None):
    """Build the symbol -> operation table.

    ``random_source`` feeds the "Rand" key; pass a seeded ``random.Random``
    to make replays repeatable.
    """
    if random_source is None:
        random_source = random.Random()

    return {
        "π": Constant(math.pi),
        "e": Constant(math.e),
        "eˣ": Unary(math.exp),
        "10ˣ": Unary(lambda x: math.pow(10, x)),
        "√": Unary(math.sqrt, _non_negative),
        "tan": Unary(math.tan),
        "cos": Unary(math.cos),
        "sin": Unary(math.sin),
        "㏑": Unary(_logarithm(math.log), _positive),
        "㏒₁₀": Unary(_logarithm(math.log10), _positive),
        "±": Unary(lambda x: -x),
        "x⁻¹": Unary(lambda x: _divide(1.0, x), _non_zero),
        "x²": Unary(lambda x: x * x),
        "x³": Unary(lambda x: x * x * x),
        "+": Binary(lambda a, b: a + b),
        "−": Binary(lambda a, b: a - b),
        "×": Binary(lambda a, b: a * b),
        "÷": Binary(_divide, _non_zero_divisor),
        "=": Equals(),
        "Rand": Custom(_random_generator(random_source)),
    }


OPERATIONS = build_operations()


def lookup(symbol, operations=None):
    """Return the operation registered for ``symbol``, or None if unknown"""
    if operations is None:
        operations = OPERATIONS
    return operations.get(symbol)


def symbols_by_kind(operations=None):
    """Group registered symbols by operation kind (used by the web API)"""
    if operations is None:
        operations = OPERATIONS

    grouped = {}
    for symbol, operation in operations.items():
        grouped.setdefault(operation.kind.value, []).append(symbol)
    return grouped
