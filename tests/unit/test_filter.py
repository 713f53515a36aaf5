from promptdeck.catalogue.filter import compute_visibility, task_matches, visible_counts
from promptdeck.catalogue.loader import load


def test_empty_query_shows_everything(raw_catalogue):
    catalogue = load(raw_catalogue)

    for query in ("", "   ", None):
        visibility = compute_visibility(catalogue, query)
        assert list(visibility) == ["Alpha", "PDF Tools", "Beta"]
        for category in catalogue:
            entry = visibility[category.name]
            assert entry.visible is True
            assert entry.matched_directly is False
            assert entry.visible_tasks == category.task_keys


def test_name_match_keeps_every_task(raw_catalogue):
    catalogue = load(raw_catalogue)

    entry = compute_visibility(catalogue, "alpha")["Alpha"]

    assert entry.visible is True
    assert entry.matched_directly is True
    assert entry.visible_tasks == ("t1", "t2")


def test_content_match_keeps_only_matching_tasks(raw_catalogue):
    catalogue = load(raw_catalogue)

    visibility = compute_visibility(catalogue, "  CSV ")

    assert visibility["Alpha"].visible is True
    assert visibility["Alpha"].matched_directly is False
    assert visibility["Alpha"].visible_tasks == ("t1",)
    assert visibility["PDF Tools"].visible is False
    assert visibility["PDF Tools"].visible_tasks == ()
    assert visibility["Beta"].visible is False


def test_task_match_covers_key_description_and_steps(raw_catalogue):
    catalogue = load(raw_catalogue)
    task = catalogue.get_task("Alpha", "t1")

    assert task_matches(task, "T1")
    assert task_matches(task, "parse csv")
    assert task_matches(task, "print totals")
    # Fields are joined with single spaces before matching.
    assert task_matches(task, "reports read")
    assert not task_matches(task, "images")


def test_name_match_on_shared_word(raw_catalogue):
    catalogue = load(raw_catalogue)

    visibility = compute_visibility(catalogue, "pdf")

    assert visibility["PDF Tools"].matched_directly is True
    assert visibility["PDF Tools"].visible_tasks == ("Merge",)
    assert visibility["Alpha"].visible is False


def test_visible_counts(raw_catalogue):
    catalogue = load(raw_catalogue)

    assert visible_counts(compute_visibility(catalogue, "")) == (3, 5)
    assert visible_counts(compute_visibility(catalogue, "csv")) == (1, 1)
    assert visible_counts(compute_visibility(catalogue, "zzz")) == (0, 0)


def test_visible_counts_skip_categories_without_tasks():
    catalogue = load({"Empty Tools": {}, "Other": {"t": {"description": "tools"}}})

    visibility = compute_visibility(catalogue, "tools")

    assert visibility["Empty Tools"].visible is True
    assert visible_counts(visibility) == (1, 1)
    assert visible_counts(compute_visibility(catalogue, "empty")) == (0, 0)
