"""
Keypad Controller for StepCalc
Turns key presses into calculator calls and keeps the display and description text
"""
import config
from calculator import Calculator
from evaluator import DomainError, format_number


class Keypad:
    def __init__(self, calculator=None, checked=True):
        self.calculator = calculator if calculator is not None else Calculator()
        self.checked = checked
        self.display = config.DISPLAY_PLACEHOLDER
        self.description = config.DESCRIPTION_PLACEHOLDER
        self.is_pending = False
        self.error = None
        self.variables = None
        self.typing = False

    @property
    def display_value(self):
        """The displayed number, or None if the display does not hold one"""
        try:
            return float(self.display)
        except ValueError:
            return None

    def touch_digit(self, digit):
        """Type a digit or the decimal point"""
        if len(digit) != 1 or digit not in config.DIGIT_KEYS:
            raise ValueError(f"Not a digit key: {digit!r}")

        if self.typing:
            # Only one decimal point per number
            if digit != "." or "." not in self.display:
                self.display += digit
        else:
            self.display = digit
        self.typing = True
        return self.display

    def perform_operation(self, symbol):
        """Commit the typed number (if any) and record an operation key"""
        if self.typing:
            value = self.display_value
            if value is not None:
                self.calculator.record_operand(value)
            self.typing = False

        self.calculator.record_operation(symbol)
        self._refresh()

    def erase(self):
        """Backspace while typing, otherwise undo the last recorded step"""
        if self.typing:
            self.display = self.display[:-1]
            if not self.display:
                self.display = config.DISPLAY_PLACEHOLDER
                self.typing = False
        else:
            self.calculator.undo_last()
            self._refresh()

    def clean(self):
        """Reset calculator, display, description and memory"""
        self.calculator.reset()
        self.display = config.DISPLAY_PLACEHOLDER
        self.description = config.DESCRIPTION_PLACEHOLDER
        self.is_pending = False
        self.error = None
        self.variables = None
        self.typing = False

    def store_memory(self):
        """→M: bind the memory variable to the displayed value"""
        value = self.display_value
        if value is None:
            return
        self.variables = {config.MEMORY_VARIABLE: value}
        self.typing = False
        self._refresh()

    def recall_memory(self):
        """M: use the memory variable as the next operand"""
        self.calculator.record_variable_reference(config.MEMORY_VARIABLE)
        self.typing = False
        self._refresh()

    def _refresh(self):
        self.error = None
        if self.checked:
            # A missing operand is expected while the user is halfway through a sequence
            try:
                evaluation = self.calculator.evaluate_checked(self.variables, require_operands=False)
            except DomainError as e:
                self.error = e
                evaluation = self.calculator.evaluate(self.variables)
        else:
            evaluation = self.calculator.evaluate(self.variables)

        suffix = config.PENDING_SUFFIX if evaluation.is_pending else config.RESOLVED_SUFFIX
        self.description = evaluation.description + suffix
        self.is_pending = evaluation.is_pending

        if self.error is not None:
            self.display = config.ERROR_PREFIX + self.error.reason
        elif evaluation.result is not None:
            self.display = format_number(evaluation.result)

    def snapshot(self):
        """Current keypad state as plain data"""
        return {
            'display': self.display,
            'description': self.description,
            'is_pending': self.is_pending,
            'error': str(self.error) if self.error is not None else None,
            'memory': dict(self.variables or {}),
            'steps': [str(step) for step in self.calculator.steps],
        }
