# UI.py
""""PySide6 user interface for the Scientific Calculator.

Structure
---------
- Calculator UI: main window with display, keypad and history panel
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Forward every key to CalculatorState and re-render from it
- Dispatch the expression to MathEngine in a worker thread
- Show the history panel (click = reuse expression, double click or context menu = reuse result)
- Clipboard integration and optional auto-evaluate after paste

Responsibilities (Settings)
---------------------------
- Load Current Settings and Settings Descriptions via config_manager
- Validate user input (e.g. minimum history size)
- Save and apply theme changes immediately

Threading Note
--------------
Evaluation is executed off the UI thread in Worker(QObject). The outcome is
emitted via a Qt signal and applied to CalculatorState back in the UI.
"""""

import logging
import sys
import threading

import pyperclip
from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, QObject, Signal, QTimer

from . import MathEngine
from . import config_manager
from . import error as E
from . import input_rules
from .calculator_state import CalculatorState
from .history_store import HistoryStore

logger = logging.getLogger(__name__)

# Function keys and their inverse under "2nd"
SECOND_FUNCTIONS = {"sin": "asin", "cos": "acos", "tan": "atan"}
FUNCTION_KEYS = ["sin", "cos", "tan", "asin", "acos", "atan", "ln", "log", "sqrt", "abs", "exp"]


class Worker(QObject):
    """""

    Runs one evaluation in a separate thread and emits the outcome
    (MathEngine.Success or MathEngine.Error) back to the Calculator UI.

    """""

    job_finished = Signal(object, str)

    def __init__(self, expression, angle_mode, last_answer):
        super().__init__()
        self.expression = expression
        self.angle_mode = angle_mode
        self.last_answer = last_answer

    def run_Calc(self):
        try:
            outcome = MathEngine.evaluate(self.expression, self.angle_mode, self.last_answer)

        except Exception as e:
            # Unexpected crash (a bug, not bad input): report it like a math error
            logger.exception("Unexpected crash while evaluating %r", self.expression)
            outcome = MathEngine.Error(E.ErrorKind.MATH, "9999", f"Unexpected crash: {e}")

        self.job_finished.emit(outcome, self.expression)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Boolean settings become checkboxes, integer settings
    become input fields. Nothing is written unless every field validates.

    """""

    settings_saved = Signal()  # Signal to tell the main window to update

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(300, 200)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 3. Build Widgets ---
        for key_value, value in self.setting_value_list.items():
            description = config_manager.load_setting_description(key_value)

            # --- 3a. Checkbox Builder (for Boolean settings) ---
            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            # --- 3b. Input Field Builder (for Integer settings) ---
            elif isinstance(value, int):
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                minimum = config_manager.MINIMUM_VALUES.get(key_value)
                label_text = f"{description} (min. {minimum}):" if minimum is not None else f"{description}:"
                label = QtWidgets.QLabel(label_text)
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))

                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok | QtWidgets.QDialogButtonBox.StandardButton.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self):
        new_settings = dict(self.setting_value_list)

        for key_value, widget in self.widgets.items():
            if isinstance(widget, QtWidgets.QCheckBox):
                new_value = widget.isChecked()
            else:
                # If user left it blank, keep the old value
                new_value = widget.text().strip() or new_settings[key_value]

            try:
                new_settings[key_value] = config_manager.validate_setting(key_value, new_value)
            except ValueError as e:
                # Show an error box and STOP the save process
                logger.info("Invalid input for %s: %s", key_value, e)
                QtWidgets.QMessageBox.critical(
                    self, "Invalid Input:",
                    f"Error in input for '{key_value}':\n\n{e}\n\nPlease correct your input.")
                return

        if config_manager.save_setting(new_settings) != {}:
            self.setting_value_list = new_settings
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error", f"Error 5001: {E.describe('5001')}")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"]:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):
    # --- Button hold logic ---
    initial_delay = 500
    repeat_interval = 100

    def __init__(self, state=None):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State ---
        self.state = state or CalculatorState(
            store=HistoryStore(), history_cap=self.setting_value_list["history_limit"])
        self.thread_active = False  # Is a calculation running?
        self.rendered_history = None  # History list currently shown in history_list
        self.was_held = False
        self.held_button_value = None
        self.hold_timer = QTimer(self)
        self.hold_timer.timeout.connect(self.handle_hold_tick)

        # --- 3. Window Setup ---
        self.button_objects = {}
        self.setWindowTitle("Calculator")
        self.resize(420, 620)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Display Setup ---
        self.status_label = QtWidgets.QLabel()
        main_v_layout.addWidget(self.status_label)

        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        font = self.display.font()
        font.setPointSize(36)
        self.display.setFont(font)
        main_v_layout.addWidget(self.display, 1)

        # --- 5. History Panel ---
        self.history_panel = QtWidgets.QWidget()
        history_layout = QtWidgets.QVBoxLayout(self.history_panel)
        history_layout.setContentsMargins(0, 0, 0, 0)
        self.history_list = QtWidgets.QListWidget()
        self.history_list.itemClicked.connect(self.handle_history_clicked)
        self.history_list.itemDoubleClicked.connect(self.handle_history_double_clicked)
        self.history_list.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.history_list.customContextMenuRequested.connect(self.open_history_menu)
        clear_history_button = QtWidgets.QPushButton("Clear history")
        clear_history_button.clicked.connect(self.confirm_clear_history)
        history_layout.addWidget(self.history_list)
        history_layout.addWidget(clear_history_button)
        main_v_layout.addWidget(self.history_panel, 2)

        # --- 6. Button Grid Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 4)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        # (text, row, column)
        self.buttons = [
            ('⚙', 0, 0), ('📋', 0, 1), ('2nd', 0, 2), ('DEG', 0, 3), ('<', 0, 4),
            ('sin', 1, 0), ('cos', 1, 1), ('tan', 1, 2), ('ln', 1, 3), ('log', 1, 4),
            ('sqrt', 2, 0), ('abs', 2, 1), ('exp', 2, 2), ('ANS', 2, 3), ('π', 2, 4),
            ('e', 3, 0), ('(', 3, 1), (')', 3, 2), ('^', 3, 3), ('÷', 3, 4),
            ('!', 4, 0), ('7', 4, 1), ('8', 4, 2), ('9', 4, 3), ('×', 4, 4),
            ('🕘', 5, 0), ('4', 5, 1), ('5', 5, 2), ('6', 5, 3), ('-', 5, 4),
            ('C', 6, 0), ('1', 6, 1), ('2', 6, 2), ('3', 6, 3), ('+', 6, 4),
            (',', 7, 0), ('0', 7, 1), ('.', 7, 2), ('📑', 7, 3), ('=', 7, 4),
        ]

        for i in range(8):
            button_grid.setRowStretch(i, 1)
        for j in range(5):
            button_grid.setColumnStretch(j, 1)

        # Buttons that support "press and hold"
        HOLD_BUTTONS = ['0', '1', '2', '3', '4', '5', '6', '7', '8', '9', '<']

        # --- 7. Button Creation Loop ---
        for text, row, col in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)

            if text == '2nd':
                button.setCheckable(True)

            if text == '⚙':
                button.clicked.connect(self.open_settings)
            elif text in HOLD_BUTTONS:
                button.pressed.connect(lambda val=text: self.handle_button_pressed_hold(val))
                button.released.connect(self.handle_button_released_hold)
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_clicked_hold(val))
            else:
                # The label can change (2nd, DEG/RAD), so look it up at click time
                button.clicked.connect(lambda checked=False, key=text: self.handle_button_press(key))

            button_grid.addWidget(button, row, col)
            self.button_objects[text] = button

        self.update_darkmode()
        self.render()

    # --- Button Hold Logic ---
    def handle_button_pressed_hold(self, value):
        self.was_held = False
        self.held_button_value = value
        self.hold_timer.setInterval(self.initial_delay)
        self.hold_timer.start()

    def handle_button_released_hold(self):
        self.hold_timer.stop()
        self.held_button_value = None

    def handle_button_clicked_hold(self, value):
        # A click right after a hold must not fire again
        if not self.was_held:
            self.handle_button_press(value)

    def handle_hold_tick(self):
        self.was_held = True
        if self.hold_timer.interval() == self.initial_delay:
            self.hold_timer.setInterval(self.repeat_interval)
        if self.held_button_value:
            self.handle_button_press(self.held_button_value)

    # --- Key Event Handlers ---
    def keyPressEvent(self, event):
        key = event.key()
        text = event.text()

        if key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.handle_button_press('=')
        elif key == Qt.Key.Key_Backspace:
            self.handle_button_press('<')
        elif key == Qt.Key.Key_Escape:
            self.handle_button_press('C')
        else:
            typed = input_rules.typed_key_to_input(text)
            if typed is None:
                super().keyPressEvent(event)
            elif not self.thread_active:
                # A typed 'C' is a letter here, not the clear key
                self.state.input(typed)
                self.render()

    def handle_button_press(self, key):
        if self.thread_active:
            logger.info("Error 4002: %s", E.describe("4002"))
            return

        if key == '=':
            self.start_calculation()
            return

        elif key == '<':
            self.state.backspace()
        elif key == 'C':
            self.state.clear()
        elif key == '2nd':
            self.state.toggle_second()
        elif key == 'DEG':
            self.state.toggle_angle_mode()
        elif key == '🕘':
            self.state.toggle_history()
        elif key == '📋':
            pyperclip.copy(self.state.display_text)
        elif key == '📑':
            self.paste_from_clipboard()
            return
        else:
            self.state.input(self.key_to_input(key))

        self.render()

    def key_to_input(self, key):
        if key in FUNCTION_KEYS:
            if self.state.is_second_enabled:
                key = SECOND_FUNCTIONS.get(key, key)
            return key + "("
        return key

    def paste_from_clipboard(self):
        clipboard_text = QtWidgets.QApplication.clipboard().text().strip()
        if not clipboard_text:
            return
        self.state.input(clipboard_text)
        self.render()

        if self.setting_value_list["after_paste_enter"]:
            self.start_calculation()

    # --- Calculation ---
    def start_calculation(self):
        expression = self.state.begin_evaluation()
        if expression is None:
            return

        self.thread_active = True
        self.update_return_button()
        self.display.setText("...")
        QtWidgets.QApplication.processEvents()  # Force UI update *before* starting thread

        # Keep a reference, the signal is delivered after run_Calc returns
        self.worker = Worker(expression, self.state.angle_mode, self.state.ans_value)
        self.worker.job_finished.connect(self.Calc_result)
        threading.Thread(target=self.worker.run_Calc, daemon=True).start()

    def Calc_result(self, outcome, expression):
        self.thread_active = False
        self.update_return_button()
        self.state.apply_outcome(expression, outcome)

        if isinstance(outcome, MathEngine.Error):
            self.display.setToolTip(f"Error {outcome.code}: {E.describe(outcome.code)}\n{outcome.message}")
        else:
            self.display.setToolTip("")
        self.render()

    # --- Rendering ---
    def render(self):
        state = self.state
        self.display.setText(state.display_text)

        mode_button = self.button_objects['DEG']
        mode_button.setText(state.angle_mode.value)
        second_button = self.button_objects['2nd']
        second_button.setChecked(state.is_second_enabled)
        for key, inverse in SECOND_FUNCTIONS.items():
            self.button_objects[key].setText(inverse if state.is_second_enabled else key)

        status = state.angle_mode.value
        if state.result is not None:
            status += f"    ANS = {state.result}"
        self.status_label.setText(status)

        self.history_panel.setVisible(state.is_history_open)
        # Rows are rebuilt only when the history changed, so a double click keeps its item
        if state.history != self.rendered_history:
            self.rendered_history = list(state.history)
            self.history_list.clear()
            for entry in state.history:
                item = QtWidgets.QListWidgetItem(f"{entry.expression} = {entry.result or ''}    {entry.timestamp or ''}")
                item.setData(Qt.ItemDataRole.UserRole, entry)
                self.history_list.addItem(item)

        self.update_font_size_display()

    def update_font_size_display(self):
        # Shrink the display font until the text fits
        MAX_FONT_SIZE = 36
        MIN_FONT_SIZE = 10

        text = self.display.text()
        font = self.display.font()
        current_size = MAX_FONT_SIZE
        available_width = self.display.width() - 10

        font.setPointSize(current_size)
        while QtGui.QFontMetrics(font).horizontalAdvance(text) > available_width and current_size > MIN_FONT_SIZE:
            current_size -= 1
            font.setPointSize(current_size)
        self.display.setFont(font)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.update_font_size_display()

    def update_return_button(self):
        # Red while a calculation is running
        return_button = self.button_objects['=']
        if self.thread_active:
            return_button.setStyleSheet("background-color: #FF0000; color: white; font-weight: bold;")
        else:
            return_button.setStyleSheet("background-color: #007bff; color: white; font-weight: bold;")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"]:
            for text, button in self.button_objects.items():
                if text != '=':
                    button.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.setStyleSheet("background-color: #121212; color: white;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
        else:
            for text, button in self.button_objects.items():
                if text != '=':
                    button.setStyleSheet("font-weight: normal;")
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")
        self.update_return_button()

    # --- History ---
    def handle_history_clicked(self, item):
        # Panel stays open, otherwise the second click of a double click hits the keypad
        self.state.select_history(item.data(Qt.ItemDataRole.UserRole), close_panel=False)
        self.render()

    def open_history_menu(self, position):
        item = self.history_list.itemAt(position)
        if item is None:
            return
        entry = item.data(Qt.ItemDataRole.UserRole)

        menu = QtWidgets.QMenu(self)
        use_expression = menu.addAction("Use expression")
        use_result = menu.addAction("Use result")
        use_result.setEnabled(entry.result is not None)

        chosen = menu.exec(self.history_list.viewport().mapToGlobal(position))
        if chosen == use_expression:
            self.state.select_history(entry)
        elif chosen == use_result:
            self.state.select_history_result(entry)
        else:
            return
        self.render()

    def handle_history_double_clicked(self, item):
        self.state.select_history_result(item.data(Qt.ItemDataRole.UserRole))
        self.render()

    def confirm_clear_history(self):
        answer = QtWidgets.QMessageBox.question(self, "Clear history", "Delete all history entries?")
        if answer == QtWidgets.QMessageBox.StandardButton.Yes:
            self.state.clear_history()
            self.render()

    # --- Settings ---
    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # modal

        # Reload settings after dialog closes
        self.setting_value_list = config_manager.load_setting_value("all")
        self.state.set_history_cap(self.setting_value_list["history_limit"])
        self.update_darkmode()
        self.render()


def main():
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
