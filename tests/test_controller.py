import json

import pytest

from gpa_calculator.config import SAVE_CONFIRMATION, STORAGE_KEY
from gpa_calculator.controller import RosterController
from gpa_calculator.models import ClassEntry, Draft, ModalMode


def _fill(controller, name="Calc I", grade="A", credits=4, term="Fall", year="24"):
    controller.update_draft(name=name, grade=grade, credits=credits, term=term, year=year)


@pytest.fixture
def controller(roster_store):
    return RosterController(roster_store, clock=lambda: 1000)


def test_starts_closed_with_loaded_roster(kv, roster_store):
    kv.set(STORAGE_KEY, json.dumps([{"id": 7, "name": "Art", "grade": "B", "credits": 2}]))
    controller = RosterController(roster_store)
    assert controller.mode is ModalMode.CLOSED
    assert [e.id for e in controller.roster] == [7]


def test_add_appends_with_unique_id(controller, kv):
    controller.open_add()
    assert controller.mode is ModalMode.ADDING
    _fill(controller)
    assert controller.submit() is True

    controller.open_add()
    _fill(controller, name="Art", grade="B-", credits=2, term="Spring", year="25")
    assert controller.submit() is True

    ids = [e.id for e in controller.roster]
    assert ids == [1000, 1001]
    assert [e.name for e in controller.roster] == ["Calc I", "Art"]
    assert controller.roster[0].semester == "FA 24"
    assert controller.roster[1].semester == "SP 25"
    assert controller.mode is ModalMode.CLOSED
    assert controller.draft == Draft()
    assert kv.writes == 2
    assert controller.gpa() == "3.557"
    assert controller.total_credits() == 6


def test_open_add_resets_draft(controller):
    controller.open_add()
    _fill(controller)
    controller.cancel()
    controller.open_add()
    assert controller.draft == Draft()
    assert controller.is_valid() is False


def test_open_edit_decodes_semester(controller):
    entry = ClassEntry(id=3, name="Bio", grade="C", credits=3, semester="SM 09")
    controller.open_edit(entry)
    assert controller.mode is ModalMode.EDITING
    assert controller.draft == Draft(id=3, name="Bio", grade="C", credits=3, term="Summer", year="09")


def test_open_edit_with_legacy_semester_leaves_term_empty(controller):
    controller.open_edit(ClassEntry(id=3, name="Bio", grade="C", credits=3, semester="Fall2024"))
    assert controller.draft.term == ""
    assert controller.draft.year == ""
    assert controller.is_valid() is False


def test_edit_replaces_in_place(controller, kv):
    for name in ("One", "Two", "Three"):
        controller.open_add()
        _fill(controller, name=name)
        controller.submit()

    target = controller.roster[1]
    controller.open_edit(target)
    controller.update_draft(name="Two (honors)", grade="B+", term="Winter", year="23")
    assert controller.submit() is True

    assert [e.id for e in controller.roster] == [1000, 1001, 1002]
    assert [e.name for e in controller.roster] == ["One", "Two (honors)", "Three"]
    edited = controller.roster[1]
    assert edited.grade == "B+"
    assert edited.semester == "WN 23"
    assert controller.roster[0].grade == "A"
    saved = json.loads(kv.get(STORAGE_KEY))
    assert saved[1]["name"] == "Two (honors)"


@pytest.mark.parametrize("missing", ["name", "grade", "credits", "term", "year"])
def test_submit_incomplete_is_noop(controller, kv, missing):
    controller.open_add()
    _fill(controller)
    controller.update_draft(**{missing: None})
    assert controller.is_valid() is False

    assert controller.submit() is False
    assert controller.roster == []
    assert kv.writes == 0
    assert controller.mode is ModalMode.ADDING


def test_submit_while_closed_is_noop(controller, kv):
    _fill(controller)
    assert controller.submit() is False
    assert controller.roster == []
    assert kv.writes == 0


def test_update_draft_parses_credits_text(controller):
    controller.update_draft(credits="5")
    assert controller.draft.credits == 5
    controller.update_draft(credits="")
    assert controller.draft.credits is None


def test_update_draft_rejects_unknown_field(controller):
    with pytest.raises(ValueError):
        controller.update_draft(semester="FA 24")


def test_delete_entry(controller, kv):
    controller.open_add()
    _fill(controller)
    controller.submit()
    controller.open_add()
    _fill(controller, name="Art")
    controller.submit()

    controller.delete_entry(1000)
    assert [e.name for e in controller.roster] == ["Art"]
    assert kv.writes == 3


def test_delete_missing_id_still_persists(controller, kv):
    controller.open_add()
    _fill(controller)
    controller.submit()
    before = list(controller.roster)

    controller.delete_entry(424242)
    assert controller.roster == before
    assert kv.writes == 2


def test_delete_last_entry_writes_empty_roster(controller, kv):
    controller.open_add()
    _fill(controller)
    controller.submit()
    controller.delete_entry(1000)
    assert kv.get(STORAGE_KEY) == "[]"
    assert controller.gpa() == "0"
    assert controller.total_credits() == 0


def test_delete_does_not_touch_dialog(controller):
    controller.open_add()
    _fill(controller)
    controller.delete_entry(1)
    assert controller.mode is ModalMode.ADDING
    assert controller.draft.name == "Calc I"


def test_save_returns_confirmation(controller, kv):
    assert controller.save() == SAVE_CONFIRMATION
    assert kv.get(STORAGE_KEY) == "[]"


def test_new_ids_stay_above_loaded_ids(kv, roster_store):
    kv.set(STORAGE_KEY, json.dumps([{"id": 5000, "name": "Old", "grade": "A", "credits": 3}]))
    controller = RosterController(roster_store, clock=lambda: 1000)
    controller.open_add()
    _fill(controller)
    controller.submit()
    assert [e.id for e in controller.roster] == [5000, 5001]


def test_import_entries_replaces_roster(controller, kv):
    controller.open_add()
    _fill(controller)
    controller.submit()

    controller.import_entries([
        ClassEntry(id=0, name="History", grade="B", credits=3, semester="FA 22"),
        ClassEntry(id=0, name="Music", grade="A-", credits=1),
    ])
    assert [e.name for e in controller.roster] == ["History", "Music"]
    assert len({e.id for e in controller.roster}) == 2
    assert json.loads(kv.get(STORAGE_KEY))[0]["name"] == "History"


@pytest.mark.parametrize(
    "field, value",
    [
        ("grade", "Z"),
        ("grade", "a"),
        ("credits", 9),
        ("credits", 0),
        ("credits", -1),
    ],
)
def test_submit_out_of_range_is_noop(controller, kv, field, value):
    controller.open_add()
    _fill(controller)
    controller.update_draft(**{field: value})
    assert controller.is_valid() is False

    assert controller.submit() is False
    assert controller.roster == []
    assert kv.writes == 0


def test_legacy_rows_without_ids_get_distinct_ids(kv, roster_store):
    kv.set(STORAGE_KEY, json.dumps([
        {"name": "Old one", "grade": "B", "credits": 3},
        {"name": "Old two", "grade": "A", "credits": 3},
        {"id": 1000, "name": "Newer", "grade": "C", "credits": 2},
    ]))
    controller = RosterController(roster_store, clock=lambda: 1000)
    ids = [e.id for e in controller.roster]
    assert None not in ids
    assert len(set(ids)) == 3
    assert ids[2] == 1000

    controller.delete_entry(ids[0])
    assert [e.name for e in controller.roster] == ["Old two", "Newer"]
