from dashboard.autocomplete import (
    ARROW_DOWN,
    ARROW_UP,
    ENTER,
    ESCAPE,
    Autocomplete,
    AutocompletePhase,
)

SOURCE = ["Drill", "Drill press", "Projector", "Ladder"]


def make_field(value=""):
    return Autocomplete(lambda: SOURCE, value)


def test_suggestions_filter_case_insensitively():
    field = make_field()
    field.on_input("dRi")
    assert field.suggestions() == ["Drill", "Drill press"]


def test_nothing_visible_until_typed():
    field = make_field()
    field.on_focus()
    assert field.phase is AutocompletePhase.OPEN
    assert field.visible() == []

    field.on_input("o")
    assert field.visible() == ["Projector"]


def test_arrow_navigation_clamps():
    field = make_field()
    field.on_input("r")  # Drill, Drill press, Projector, Ladder

    assert field.on_key(ARROW_UP)
    assert field.index == -1

    for _ in range(10):
        field.on_key(ARROW_DOWN)
    assert field.index == 3
    assert field.highlighted == "Ladder"
    assert field.phase is AutocompletePhase.NAVIGATING

    field.on_key(ARROW_UP)
    assert field.highlighted == "Projector"


def test_enter_commits_highlighted_value():
    field = make_field()
    field.on_input("dr")
    field.on_key(ARROW_DOWN)
    field.on_key(ARROW_DOWN)

    assert field.on_key(ENTER) is True
    assert field.value == "Drill press"
    assert field.phase is AutocompletePhase.COMMITTED
    assert field.is_open is False


def test_enter_without_highlight_is_consumed_but_changes_nothing():
    field = make_field()
    field.on_input("dr")
    assert field.on_key(ENTER) is True
    assert field.value == "dr"
    assert field.is_open is True


def test_escape_cancels():
    field = make_field()
    field.on_input("lad")
    field.on_key(ARROW_DOWN)

    assert field.on_key(ESCAPE)
    assert field.phase is AutocompletePhase.CANCELLED
    assert field.visible() == []
    assert field.value == "lad"


def test_keys_ignored_when_closed_or_empty():
    field = make_field()
    assert field.on_key(ARROW_DOWN) is False

    field.on_input("zzz")
    assert field.on_key(ARROW_DOWN) is False
    assert field.on_key("Tab") is False


def test_typing_again_reopens_with_nothing_highlighted():
    field = make_field()
    field.on_input("dr")
    field.on_key(ARROW_DOWN)
    field.on_key(ENTER)

    field.on_input("Drill p")
    assert field.is_open is True
    assert field.index == -1
    assert field.visible() == ["Drill press"]


def test_pick_and_reset():
    field = make_field()
    field.on_input("p")
    field.pick("Projector")
    assert field.value == "Projector"
    assert field.phase is AutocompletePhase.COMMITTED

    field.reset()
    assert field.value == ""
    assert field.phase is AutocompletePhase.IDLE
