"""
Tests for client-side view derivation.
"""
import pytest

from client.view import TrackerView, count_by_status, derive_view

APPS = [
    {"id": 1, "company": "Google", "role": "Senior Frontend Developer", "date": "2026-01-10", "status": "Interview"},
    {"id": 2, "company": "Meta", "role": "Full Stack Engineer Intern", "date": "2026-01-08", "status": "Applied"},
    {"id": 3, "company": "Netflix", "role": "Software Engineer", "date": "2026-01-05", "status": "Offer"},
    {"id": 4, "company": "Amazon", "role": "SDE Intern", "date": "2026-01-03", "status": "Rejected"},
    {"id": 5, "company": "Microsoft", "role": "Cloud Engineer", "date": "2026-01-12", "status": "Applied"},
]


def test_default_view_is_everything_newest_first():
    assert [a["id"] for a in derive_view(APPS)] == [5, 1, 2, 3, 4]


def test_ascending_sort():
    assert [a["id"] for a in derive_view(APPS, sort_order="asc")] == [4, 3, 2, 1, 5]


def test_status_filter():
    assert [a["id"] for a in derive_view(APPS, status_filter="Applied")] == [5, 2]


def test_search_matches_company_or_role_case_insensitively():
    assert [a["id"] for a in derive_view(APPS, search="INTERN")] == [2, 4]
    assert [a["id"] for a in derive_view(APPS, search="goo")] == [1]
    assert derive_view(APPS, search="nobody") == []


def test_filter_and_search_combine():
    view = derive_view(APPS, status_filter="Applied", search="engineer", sort_order="asc")
    assert [a["id"] for a in view] == [2, 5]


def test_derivation_does_not_mutate_input():
    original = [dict(a) for a in APPS]
    derive_view(APPS, sort_order="asc")
    assert APPS == original


def test_counts_cover_whole_collection():
    assert count_by_status(APPS) == {"total": 5, "applied": 2, "interview": 1, "offer": 1, "rejected": 1}
    assert count_by_status([]) == {"total": 0, "applied": 0, "interview": 0, "offer": 0, "rejected": 0}


def test_tracker_view_counts_ignore_filters():
    view = TrackerView(APPS)
    view.status_filter = "Offer"
    view.search = "net"

    assert [a["id"] for a in view.visible] == [3]
    assert view.counts["total"] == 5


def test_tracker_view_recomputes_only_on_change():
    view = TrackerView(APPS)
    view.visible
    view.visible
    assert view.recomputations == 1

    view.search = "intern"
    assert [a["id"] for a in view.visible] == [2, 4]
    assert view.recomputations == 2

    view.toggle_sort()
    assert [a["id"] for a in view.visible] == [4, 2]
    assert view.recomputations == 3

    view.applications = APPS[:2]
    assert [a["id"] for a in view.visible] == [2]
    assert view.recomputations == 4


def test_tracker_view_collection_changes_only_through_assignment():
    view = TrackerView(APPS[:1])
    assert [a["id"] for a in view.visible] == [1]

    with pytest.raises(AttributeError):
        view.applications.append(APPS[1])

    view.applications = list(view.applications) + [APPS[1]]
    assert [a["id"] for a in view.visible] == [1, 2]
    assert view.counts["total"] == 2


def test_tracker_view_rejects_unknown_controls():
    view = TrackerView()
    with pytest.raises(ValueError):
        view.status_filter = "Ghosted"
    with pytest.raises(ValueError):
        view.sort_order = "random"
