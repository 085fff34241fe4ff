import pytest

from sci_calculator import MathEngine
from sci_calculator.calculator_state import ERROR_TEXT, CalculatorState
from sci_calculator.error import ErrorKind
from sci_calculator.history_store import HistoryEntry, HistoryStore
from sci_calculator.ScientificEngine import AngleMode


@pytest.fixture
def store(tmp_path):
    return HistoryStore(tmp_path / "history.json")


@pytest.fixture
def state(store):
    return CalculatorState(store)


def type_keys(state, *keys):
    for key in keys:
        state.input(key)


def test_initial_display(state) -> None:
    assert state.display_text == "0"
    assert state.angle_mode is AngleMode.DEG
    assert state.history == []


def test_equals_records_history_and_answer(state) -> None:
    type_keys(state, "1", "+", "2", "×", "3")
    outcome = state.equals()

    assert outcome == MathEngine.Success(7.0, "7")
    assert state.expression == "7"
    assert state.result == "7"
    assert state.ans_value == 7.0
    assert [entry.expression for entry in state.history] == ["1+2×3"]
    assert state.history[0].result == "7"
    assert state.history[0].timestamp is not None


def test_newest_history_entry_comes_first(state) -> None:
    for expression in ("1+1", "2+2"):
        state.clear()
        state.input(expression)
        state.equals()
    assert [entry.expression for entry in state.history] == ["2+2", "1+1"]


def test_operator_after_result_continues_from_it(state) -> None:
    type_keys(state, "6", "×", "7")
    state.equals()
    state.clear()
    type_keys(state, "+", "1")
    assert state.expression == "ANS+1"
    assert state.equals().formatted == "43"


def test_empty_expression_is_not_evaluated(state) -> None:
    state.input("   ")
    assert state.equals() is None
    assert state.history == []


def test_error_shows_error_text_and_keeps_expression(state) -> None:
    type_keys(state, "2", "÷", "0")
    outcome = state.equals()

    assert isinstance(outcome, MathEngine.Error)
    assert outcome.kind is ErrorKind.MATH
    assert state.display_text == ERROR_TEXT
    assert state.last_error == outcome
    assert state.expression == "2÷0"
    assert state.history == []


def test_key_after_error_starts_fresh(state) -> None:
    state.input("(")
    state.equals()
    state.input("5")
    assert state.display_text == "5"


def test_backspace_after_error_only_clears_the_error(state) -> None:
    state.input("1+")
    state.equals()
    state.backspace()
    assert state.display_text == "1+"


def test_backspace_removes_tokens(state) -> None:
    type_keys(state, "2", "+", "sin(")
    state.backspace()
    assert state.expression == "2+"


def test_clear(state) -> None:
    state.input("12")
    state.clear()
    assert state.display_text == "0"
    assert state.result is None


def test_angle_mode_changes_evaluation_and_is_persisted(state, store) -> None:
    state.toggle_angle_mode()
    assert state.angle_mode is AngleMode.RAD
    state.input("cos(π)")
    assert state.equals().formatted == "-1"
    assert store.load().angle_mode is AngleMode.RAD

    state.toggle_angle_mode()
    assert state.angle_mode is AngleMode.DEG


def test_history_is_restored_by_a_new_state(state, store) -> None:
    state.input("2^10")
    state.equals()
    state.toggle_angle_mode()

    restored = CalculatorState(store)
    assert [entry.result for entry in restored.history] == ["1024"]
    assert restored.angle_mode is AngleMode.RAD


def test_history_cap(store) -> None:
    state = CalculatorState(store, history_cap=3)
    for n in range(5):
        state.clear()
        state.input(str(n))
        state.equals()
    assert [entry.expression for entry in state.history] == ["4", "3", "2"]

    state.set_history_cap(1)
    assert [entry.expression for entry in state.history] == ["4"]
    assert len(store.load().history) == 1


def test_loaded_history_respects_cap(store) -> None:
    store.save([HistoryEntry(str(n), str(n)) for n in range(10)], AngleMode.DEG)
    assert len(CalculatorState(store, history_cap=4).history) == 4


def test_select_history_copies_expression_and_closes_panel(state) -> None:
    state.toggle_history()
    assert state.is_history_open
    state.select_history(HistoryEntry("sqrt(16)", "4"))
    assert state.expression == "sqrt(16)"
    assert not state.is_history_open


def test_select_history_result_sets_answer(state) -> None:
    state.select_history_result(HistoryEntry("2^0.5", "1.41421356237"))
    assert state.expression == "1.41421356237"
    assert state.ans_value == pytest.approx(1.41421356237)


def test_select_history_result_that_is_not_a_number(state) -> None:
    state.ans_value = 3.0
    state.select_history_result(HistoryEntry("x", None))
    assert state.ans_value == 3.0
    assert state.display_text == "0"


def test_clear_history(state, store) -> None:
    state.input("1+1")
    state.equals()
    state.clear_history()
    assert state.history == []
    assert store.load().history == []


def test_panel_toggles(state) -> None:
    state.toggle_second()
    assert state.is_second_enabled
    state.toggle_second()
    assert not state.is_second_enabled

    state.toggle_history()
    state.close_history()
    assert not state.is_history_open


def test_works_without_a_store() -> None:
    state = CalculatorState()
    state.input("3!")
    assert state.equals().formatted == "6"
    state.toggle_angle_mode()
    state.clear_history()


def test_history_click_can_keep_panel_open_for_a_double_click(state) -> None:
    entry = HistoryEntry("2^0.5", "1.41421356237")
    state.toggle_history()

    state.select_history(entry, close_panel=False)
    assert state.expression == "2^0.5"
    assert state.is_history_open

    state.select_history_result(entry)
    assert state.expression == "1.41421356237"
    assert not state.is_history_open
