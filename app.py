import logging

import streamlit as st

from gpa_calculator.backend_logic import *
from gpa_calculator.config import (
    CLASS_LIST_HEIGHT,
    CREDIT_OPTIONS,
    GRADE_OPTIONS,
    PAGE_TITLE,
    TERM_OPTIONS,
    data_dir,
    log_level,
)
from gpa_calculator.controller import RosterController
from gpa_calculator.io_csv import *
from gpa_calculator.kv_store import FileKeyValueStore
from gpa_calculator.models import ModalMode
from gpa_calculator.roster_store import RosterStore

logging.basicConfig(
    level=log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("gpa_calculator.app")

# ------------------------
# Streamlit UI
# ------------------------

st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon="🎓",
    layout="centered",
)

# Widget keys for the add/edit dialog
DRAFT_KEYS = {
    "name": "draft_name",
    "grade": "draft_grade",
    "credits": "draft_credits",
    "term": "draft_term",
    "year": "draft_year",
}


def get_controller() -> RosterController:
    # One controller per browser session, loaded from disk on first use
    if "controller" not in st.session_state:
        store = RosterStore(FileKeyValueStore(data_dir()))
        st.session_state["controller"] = RosterController(store)
    return st.session_state["controller"]


def _seed_draft_widgets(controller: RosterController) -> None:
    draft = controller.draft
    st.session_state[DRAFT_KEYS["name"]] = draft.name
    st.session_state[DRAFT_KEYS["grade"]] = draft.grade or None
    st.session_state[DRAFT_KEYS["credits"]] = draft.credits
    st.session_state[DRAFT_KEYS["term"]] = draft.term or None
    st.session_state[DRAFT_KEYS["year"]] = draft.year or None


def _sync_draft(controller: RosterController) -> None:
    controller.update_draft(**{field: st.session_state.get(key) for field, key in DRAFT_KEYS.items()})


def _render_draft_form(controller: RosterController) -> None:
    st.text_input("Class Name *", key=DRAFT_KEYS["name"], placeholder="Enter class name")
    st.selectbox("Grade Received *", GRADE_OPTIONS, key=DRAFT_KEYS["grade"], placeholder="Select grade")
    st.selectbox("Credits *", CREDIT_OPTIONS, key=DRAFT_KEYS["credits"], placeholder="Select credits")

    st.markdown("Semester *")
    term_col, year_col = st.columns(2)
    with term_col:
        st.selectbox("Term", TERM_OPTIONS, key=DRAFT_KEYS["term"], placeholder="Term", label_visibility="collapsed")
    with year_col:
        st.selectbox("Year", year_options(), key=DRAFT_KEYS["year"], placeholder="Year", label_visibility="collapsed")

    _sync_draft(controller)

    cancel_col, submit_col = st.columns(2)
    with cancel_col:
        if st.button("Cancel", use_container_width=True):
            controller.cancel()
            st.rerun()
    with submit_col:
        label = "Update Class" if controller.mode is ModalMode.EDITING else "Add Class"
        if st.button(label, type="primary", disabled=not controller.is_valid(), use_container_width=True):
            if controller.submit():
                st.rerun()


@st.dialog("Add New Class")
def add_class_dialog(controller: RosterController) -> None:
    _render_draft_form(controller)


@st.dialog("Edit Class")
def edit_class_dialog(controller: RosterController) -> None:
    _render_draft_form(controller)


def _on_delete(controller: RosterController, entry_id: int) -> None:
    controller.delete_entry(entry_id)


controller = get_controller()

st.title(f"🎓 {PAGE_TITLE}")

# ------------------------
# GPA and credits
# ------------------------
col_gpa, col_credits = st.columns(2)
with col_gpa:
    st.metric("My GPA", controller.gpa())
with col_credits:
    st.metric("Credits", controller.total_credits())

# ------------------------
# Class list
# ------------------------
# Delete is a sibling button of the row's edit button, so a click only ever
# reaches one of them
with st.container(height=CLASS_LIST_HEIGHT, border=True):
    if len(controller.roster) == 0:
        st.markdown("#### :material/school: No classes added yet")
        st.caption("Click the Add button to get started")
    else:
        for position, entry in enumerate(controller.roster):
            row_main, row_delete, row_grade = st.columns([6, 1, 1], vertical_alignment="center")
            with row_main:
                subtitle = credit_label(entry.credits)
                if entry.semester:
                    subtitle = f"{subtitle} · `{entry.semester}`"
                if st.button(
                    f"**{entry.name}**  \n{subtitle}",
                    key=f"edit_{position}_{entry.id}",
                    use_container_width=True,
                ):
                    controller.open_edit(entry)
                    _seed_draft_widgets(controller)
                    edit_class_dialog(controller)
            with row_delete:
                st.button(
                    ":material/delete:",
                    key=f"delete_{position}_{entry.id}",
                    help="Delete class",
                    on_click=_on_delete,
                    args=(controller, entry.id),
                )
            with row_grade:
                color = grade_color(entry.grade)
                st.markdown(f":{color}-background[**{entry.grade or '?'}**]")

# ------------------------
# Footer
# ------------------------
add_col, save_col = st.columns(2)
with add_col:
    if st.button("Add", icon=":material/add:", use_container_width=True):
        controller.open_add()
        _seed_draft_widgets(controller)
        add_class_dialog(controller)
with save_col:
    if st.button("Save", type="primary", use_container_width=True):
        st.toast(controller.save())

# ------------------------
# CSV import / export
# ------------------------
with st.expander("Import / export CSV"):
    st.download_button(
        "Download classes as CSV",
        data=roster_to_csv(controller.roster),
        file_name="gpa-calculator-classes.csv",
        mime="text/csv",
        disabled=len(controller.roster) == 0,
    )

    roster_csv = st.file_uploader(
        "Upload classes CSV (Name, Grade, Credits, Semester)",
        type=["csv"],
        key="roster_csv",
    )
    if roster_csv is not None:
        try:
            imported = parse_roster(validate_roster_csv(read_csv_upload(roster_csv)))
        except ValueError as e:
            logger.warning("Rejected roster CSV upload: %s", e)
            st.error(f"CSV error: {e}")
        else:
            st.caption(f"{len(imported)} classes ready to import. This replaces your current list.")
            if st.button("Replace my classes"):
                controller.import_entries(imported)
                st.rerun()
