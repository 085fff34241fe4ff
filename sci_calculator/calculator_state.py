# calculator_state.py
"""Interactive state of one calculator window.

Owns the expression being typed, the angle mode, the answer register and
the history list. The UI calls one method per user action and re-renders
from the public attributes afterwards; nothing here depends on Qt, so the
whole interaction model can be driven from tests.
"""

import logging
from datetime import datetime

from . import MathEngine
from . import input_rules
from .history_store import HistoryEntry
from .ScientificEngine import AngleMode

logger = logging.getLogger(__name__)

HISTORY_CAP = 50
ERROR_TEXT = "Error"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def timestamp_now():
    return datetime.now().strftime(TIMESTAMP_FORMAT)


class CalculatorState:

    def __init__(self, store=None, history_cap=HISTORY_CAP):
        self.store = store
        self.history_cap = history_cap

        self.expression = ""
        self.angle_mode = AngleMode.DEG
        self.history = []
        self.is_history_open = False
        self.is_second_enabled = False
        self.result = None
        self.error_message = None
        self.ans_value = 0.0
        self.last_error = None  # Error outcome of the last failed evaluation

        if self.store is not None:
            persisted = self.store.load()
            self.history = list(persisted.history)[:self.history_cap]
            self.angle_mode = persisted.angle_mode

    # --- Editing ---

    def input(self, text):
        # After an error the next key starts a fresh expression
        base_expression = "" if self.error_message is not None else self.expression
        self.expression = input_rules.apply_input_rules(base_expression, text)
        self.error_message = None

    def clear(self):
        self.expression = ""
        self.result = None
        self.error_message = None

    def backspace(self):
        if self.error_message is not None:
            self.error_message = None
            return
        if self.expression:
            self.expression = input_rules.smart_backspace(self.expression)

    # --- Evaluation ---

    def begin_evaluation(self):
        """Return the trimmed expression to evaluate, or None if there is nothing to do."""
        expression = self.expression.strip()
        return expression or None

    def apply_outcome(self, expression, outcome):
        if isinstance(outcome, MathEngine.Success):
            new_entry = HistoryEntry(
                expression=expression,
                result=outcome.formatted,
                timestamp=timestamp_now(),
            )
            self.history = ([new_entry] + self.history)[:self.history_cap]
            self.expression = outcome.formatted
            self.result = outcome.formatted
            self.error_message = None
            self.last_error = None
            self.ans_value = outcome.value
            self.persist()
        else:
            logger.info("Evaluation of %r failed: %s %s", expression, outcome.code, outcome.message)
            self.error_message = ERROR_TEXT
            self.last_error = outcome

    def equals(self):
        expression = self.begin_evaluation()
        if expression is None:
            return None
        outcome = MathEngine.evaluate(expression, self.angle_mode, self.ans_value)
        self.apply_outcome(expression, outcome)
        return outcome

    # --- Modes and panels ---

    def toggle_angle_mode(self):
        self.angle_mode = AngleMode.RAD if self.angle_mode is AngleMode.DEG else AngleMode.DEG
        self.persist()

    def toggle_history(self):
        self.is_history_open = not self.is_history_open

    def close_history(self):
        self.is_history_open = False

    def toggle_second(self):
        self.is_second_enabled = not self.is_second_enabled

    # --- History ---

    def select_history(self, entry, close_panel=True):
        # The desktop list keeps the panel open so a double click can still reach the row
        self.expression = entry.expression
        self.error_message = None
        if close_panel:
            self.is_history_open = False

    def select_history_result(self, entry):
        value = entry.result
        try:
            self.ans_value = float(value)
        except (TypeError, ValueError):
            logger.debug("History result %r is not a number, keeping ANS", value)
        self.expression = value or ""
        self.result = value
        self.error_message = None
        self.is_history_open = False

    def clear_history(self):
        self.history = []
        self.persist()

    def set_history_cap(self, history_cap):
        self.history_cap = history_cap
        if len(self.history) > history_cap:
            self.history = self.history[:history_cap]
            self.persist()

    def persist(self):
        if self.store is not None:
            self.store.save(self.history, self.angle_mode)

    @property
    def display_text(self):
        if self.error_message is not None:
            return self.error_message
        return self.expression or "0"
