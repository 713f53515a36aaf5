import json
from datetime import date

from promptdeck.catalogue.export import (
    NO_STEPS_PLACEHOLDER,
    build_prompt_text,
    catalogue_filename,
    export_catalogue_json,
    export_selection_json,
    export_task_json,
    sanitize_filename,
    task_filename,
)
from promptdeck.catalogue.loader import load


def test_prompt_text_layout(raw_catalogue):
    task = load(raw_catalogue).get_task("Alpha", "t1")

    assert build_prompt_text(task) == "\n".join(
        [
            "# t1",
            "**Description:** Parse CSV reports",
            "## Implementation Steps:",
            "1. Read the csv file",
            "2. Print totals",
            "---",
            "*Generated from Python Prompts Collection*",
        ]
    )


def test_prompt_text_without_description_or_steps(raw_catalogue):
    catalogue = load(raw_catalogue)

    assert build_prompt_text(catalogue.get_task("Beta", "b2")) == (
        "# b2\n" f"{NO_STEPS_PLACEHOLDER}\n" "---\n" "*Generated from Python Prompts Collection*"
    )
    text = build_prompt_text(catalogue.get_task("Beta", "b1"))
    assert text.splitlines()[:3] == ["# b1", "**Description:** Scrape a web page", NO_STEPS_PLACEHOLDER]


def test_task_export_shape(raw_catalogue):
    task = load(raw_catalogue).get_task("Beta", "b1")

    exported = export_task_json(task)

    assert json.loads(exported) == {"b1": {"description": "Scrape a web page"}}
    assert exported.startswith('{\n  "b1": {')


def test_task_export_keeps_unknown_fields_and_unicode():
    catalogue = load({"Cat": {"Café ±": {"steps": ["±2 lines"], "difficulty": "easy"}}})

    exported = export_task_json(catalogue.get_task("Cat", "Café ±"))

    assert "±2 lines" in exported
    assert json.loads(exported) == {"Café ±": {"steps": ["±2 lines"], "difficulty": "easy"}}


def test_selection_export_round_trips_through_load(raw_catalogue):
    task = load(raw_catalogue).get_task("Alpha", "t1")

    reloaded = load(json.loads(export_selection_json("Alpha", task)))

    assert reloaded.category_names == ("Alpha",)
    assert reloaded.categories["Alpha"].task_keys == ("t1",)
    again = reloaded.get_task("Alpha", "t1")
    assert again == task
    assert again.to_dict() == raw_catalogue["Alpha"]["t1"]


def test_catalogue_export_matches_loaded_document(raw_catalogue):
    exported = export_catalogue_json(load(raw_catalogue))

    assert json.loads(exported) == raw_catalogue
    assert list(json.loads(exported)) == ["Alpha", "PDF Tools", "Beta"]


def test_filenames():
    assert sanitize_filename("1.1 Text File Inspector & Reporter.json") == "1.1_Text_File_Inspector___Reporter.json"
    assert task_filename("a/b") == "a_b.json"
    assert catalogue_filename(date(2024, 3, 9)) == "python-prompts-2024-03-09.json"
