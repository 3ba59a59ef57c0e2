"""
Calculator Engine for PocketCalc
Handles digit entry, deferred binary operations, error classification,
bounded history and undo/redo of input state
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional

import config
from history_manager import HistoryEntry, HistoryManager
from operations import (ERROR_MESSAGES, ErrorKind, Operation, classify,
                        format_number, is_plain_number, parse_operand,
                        round_display)

logger = logging.getLogger(__name__)

DIGITS = "0123456789"


@dataclass(frozen=True)
class EngineState:
    """The undoable unit of engine state"""
    pending_input: str = ""
    first_operand: Optional[float] = None
    operation: Optional[Operation] = None


class CalculatorEngine:
    def __init__(self, history=None, display=None, history_view=None):
        self.display = display
        self.history_view = history_view
        self.history = HistoryManager(history)

        self.pending_input = ""
        self.first_operand = None
        self.operation = None

        self._undo_stack = []
        self._redo_stack = []

        self._refresh_history()

    # ── State ────────────────────────────────────────────────────────────

    @property
    def state(self):
        return EngineState(
            pending_input=self.pending_input,
            first_operand=self.first_operand,
            operation=self.operation,
        )

    def _restore(self, state):
        self.pending_input = state.pending_input
        self.first_operand = state.first_operand
        self.operation = state.operation

    @property
    def is_error(self):
        return self.pending_input in ERROR_MESSAGES

    @property
    def display_text(self):
        return self.pending_input or config.INITIAL_DISPLAY

    @property
    def expression_text(self):
        """In-progress expression line, e.g. '3 +'"""
        if self.first_operand is not None and self.operation is not None:
            return f"{format_number(self.first_operand)} {self.operation.symbol}"
        return ""

    @property
    def can_undo(self):
        return bool(self._undo_stack)

    @property
    def can_redo(self):
        return bool(self._redo_stack)

    def _mutated(self):
        # Any change other than undo/redo invalidates the redo branch
        self._redo_stack.clear()

    def _refresh_display(self):
        if self.display is not None:
            self.display.render(self.display_text, self.is_error)

    def _refresh_history(self):
        if self.history_view is not None:
            self.history_view.render(self.history.format_calculation_history())

    def _set_error(self, kind):
        logger.info("Calculation error: %s", kind.name)
        self.pending_input = kind.message

    # ── Input ────────────────────────────────────────────────────────────

    def append_digit(self, ch):
        """Append a digit or decimal point to the pending input"""
        if not isinstance(ch, str) or len(ch) != 1 or ch not in DIGITS + ".":
            logger.debug("Rejected digit input %r", ch)
            return
        if self.is_error or not is_plain_number(self.pending_input):
            # error text or exponent-form results are replaced, not extended
            self.pending_input = ""
        if ch == "." and "." in self.pending_input:
            return
        if ch != "." and sum(c in DIGITS for c in self.pending_input) >= config.MAX_DISPLAY_DIGITS:
            return
        self.pending_input += ch
        self._mutated()
        self._refresh_display()

    def set_operation(self, op):
        """Select a binary operation, evaluating a pending one first when chaining"""
        op = Operation.coerce(op)
        if op is None:
            logger.debug("Rejected operation input")
            return

        if self.first_operand is None or self.operation is None:
            value = parse_operand(self.pending_input)
            if value is None:
                return
            self.first_operand = value
        elif self.pending_input:
            if not self.evaluate():
                return
            self.first_operand = parse_operand(self.pending_input)
        # else: no new digits, only the operator changes

        self.operation = op
        self.pending_input = ""
        self._mutated()
        self._refresh_display()

    def evaluate(self):
        """Evaluate the pending operation; returns True on success"""
        if self.first_operand is None or self.operation is None:
            return False
        second = parse_operand(self.pending_input)
        if second is None:
            return False

        before = self.state
        first, operation = self.first_operand, self.operation
        error = None
        try:
            result = operation.apply(first, second)
        except ZeroDivisionError:
            error = ErrorKind.DIVIDE_BY_ZERO
        except OverflowError:
            error = ErrorKind.OVERFLOW
        except (ArithmeticError, ValueError):
            error = ErrorKind.INVALID_INPUT
        else:
            error = classify(result)

        self.first_operand = None
        self.operation = None
        self._mutated()

        if error is not None:
            self._set_error(error)
            self._refresh_display()
            return False

        result = round_display(result)
        self.pending_input = format_number(result)
        self.history.add_calculation(HistoryEntry(first, operation, second, result))
        self._undo_stack.append(before)
        self._refresh_display()
        self._refresh_history()
        return True

    def apply_percentage(self):
        """Divide the pending input by 100"""
        value = parse_operand(self.pending_input)
        if value is None:
            return
        self.pending_input = format_number(value / 100)
        self._mutated()
        self._refresh_display()

    def apply_square_root(self):
        """Replace the pending input with its square root"""
        value = parse_operand(self.pending_input)
        if value is None:
            return
        if value < 0:
            self._set_error(ErrorKind.ERROR)
        else:
            self.pending_input = format_number(math.sqrt(value))
        self._mutated()
        self._refresh_display()

    def backspace(self):
        """Remove the last character; an empty input renders as zero"""
        if self.pending_input:
            if self.is_error:
                self.pending_input = ""
            else:
                self.pending_input = self.pending_input[:-1]
            self._mutated()
        self._refresh_display()

    def clear(self):
        """Reset input and pending operation; history and undo are kept"""
        if self.state != EngineState():
            self._restore(EngineState())
            self._mutated()
        self._refresh_display()

    # ── Undo / redo ──────────────────────────────────────────────────────

    def undo(self):
        if not self._undo_stack:
            return
        self._redo_stack.append(self.state)
        self._restore(self._undo_stack.pop())
        self._refresh_display()

    def redo(self):
        if not self._redo_stack:
            return
        self._undo_stack.append(self.state)
        self._restore(self._redo_stack.pop())
        self._refresh_display()

    # ── History ──────────────────────────────────────────────────────────

    def recall_from_history(self, index):
        """Load a history entry's result into the pending input; returns False for a bad index"""
        entry = self.history.get_entry(index)
        if entry is None:
            logger.debug("No history entry at index %r", index)
            return False
        self.pending_input = entry.result_text
        self._mutated()
        self._refresh_display()
        return True

    def clear_history(self):
        self.history.clear_calculation_history()
        self._refresh_history()

    def history_snapshot(self):
        """Serializable history records, most recent first"""
        return self.history.to_records()
