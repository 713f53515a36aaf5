from promptdeck.catalogue.loader import load
from promptdeck.catalogue.state import Selection, SessionState, initial_state, set_query
from promptdeck.catalogue.view import (
    NO_CATEGORIES_MESSAGE,
    NO_DESCRIPTION,
    NO_MATCHES_MESSAGE,
    build_task_detail,
    build_view,
    summarize,
)


def test_default_view(raw_catalogue):
    catalogue = load(raw_catalogue)
    view = build_view(catalogue, initial_state(catalogue))

    assert view.counter == "3 categories, 5 tasks"
    assert view.searching is False
    assert view.empty_message is None
    assert [category.name for category in view.categories] == ["Alpha", "PDF Tools", "Beta"]
    alpha = view.categories[0]
    assert alpha.expanded is True
    assert alpha.task_count == 2
    assert [(task.key, task.active) for task in alpha.tasks] == [("t1", True), ("t2", False)]
    assert view.categories[1].expanded is False
    assert view.selection.category == "Alpha"
    assert view.selection.task_key == "t1"


def test_search_view_omits_hidden_branches(raw_catalogue):
    catalogue = load(raw_catalogue)
    state = set_query(initial_state(catalogue), catalogue, "images")

    view = build_view(catalogue, state)

    assert view.searching is True
    assert view.counter == "Search: 1 categories, 1 tasks"
    assert [category.name for category in view.categories] == ["Alpha"]
    assert [task.key for task in view.categories[0].tasks] == ["t2"]
    # The selection stays even though its task is filtered out.
    assert view.selection.task_key == "t1"


def test_view_messages_for_empty_results():
    empty = load({})
    assert build_view(empty, SessionState()).empty_message == NO_CATEGORIES_MESSAGE
    assert build_view(empty, SessionState()).counter == "0 categories, 0 tasks"

    catalogue = load({"Cat": {"t": {"description": "one"}}})
    view = build_view(catalogue, set_query(SessionState(), catalogue, "zzz"))
    assert view.categories == []
    assert view.empty_message == NO_MATCHES_MESSAGE


def test_categories_without_tasks_are_not_rendered():
    catalogue = load({"Empty": {}, "Full": {"t": {}}})

    view = build_view(catalogue, SessionState())

    assert [category.name for category in view.categories] == ["Full"]


def test_summaries_are_truncated():
    long_text = "x" * 90
    catalogue = load({"Cat": {"t": {"description": long_text}, "u": {}}})

    tasks = build_view(catalogue, SessionState()).categories[0].tasks

    assert tasks[0].summary == "x" * 80 + "..."
    assert tasks[1].summary is None
    assert summarize("short", 10) == "short"
    assert summarize("abcdef", 3) == "abc..."


def test_task_detail(raw_catalogue):
    catalogue = load(raw_catalogue)

    detail = build_task_detail(catalogue, Selection("Alpha", "t1"))
    assert detail.title == "t1"
    assert detail.category == "Alpha"
    assert detail.steps == ["Read the csv file", "Print totals"]
    assert detail.step_count == 2
    assert detail.has_steps is True

    bare = build_task_detail(catalogue, Selection("Beta", "b2"))
    assert bare.description == NO_DESCRIPTION
    assert bare.has_steps is False

    assert build_task_detail(catalogue, None) is None
    assert build_task_detail(catalogue, Selection("Gone", "t")) is None


def test_counter_and_message_agree_with_rendered_tree():
    catalogue = load({"Empty Tools": {}, "Other": {"t": {}}})

    searched = build_view(catalogue, set_query(SessionState(), catalogue, "empty"))
    assert searched.categories == []
    assert searched.counter == "Search: 0 categories, 0 tasks"
    assert searched.empty_message == NO_MATCHES_MESSAGE

    only_empty = load({"A": {}, "B": {}})
    idle = build_view(only_empty, SessionState())
    assert idle.categories == []
    assert idle.empty_message == NO_CATEGORIES_MESSAGE
