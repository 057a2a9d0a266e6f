"""
Tests for the command-line client.
"""
import pytest
from click.testing import CliRunner

from client.cli import cli


@pytest.fixture
def run(api):
    runner = CliRunner()

    def invoke(*args, input=None):
        return runner.invoke(cli, list(args), obj={"api": api}, input=input)

    return invoke


@pytest.fixture
def seeded(api):
    rows = [
        ("Google", "Frontend Developer", "2026-01-10", "Interview"),
        ("Meta", "Engineer Intern", "2026-01-08", "Applied"),
        ("Netflix", "Software Engineer", "2026-01-05", "Offer"),
    ]
    return [
        api.create_application({"company": c, "role": r, "date": d, "status": s})
        for c, r, d, s in rows
    ]


def test_list_shows_counts_and_rows(run, seeded):
    result = run("list")

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "Total 3 | Applied 1 | Interview 1 | Offer 1 | Rejected 0"
    assert [line.split("\t")[3] for line in lines[1:]] == ["Google", "Meta", "Netflix"]


def test_list_filters_and_sorts(run, seeded):
    result = run("list", "--search", "engineer", "--sort", "asc")

    assert result.exit_code == 0
    lines = result.output.splitlines()
    # counts still describe the whole collection
    assert lines[0].startswith("Total 3")
    assert [line.split("\t")[3] for line in lines[1:]] == ["Netflix", "Meta"]


def test_list_empty(run):
    result = run("list", "--status", "Offer")
    assert result.exit_code == 0
    assert "No applications found" in result.output


def test_add(run, api):
    result = run("add", "--company", "Acme", "--role", "SWE", "--date", "2026-02-01", "--location", "Remote")

    assert result.exit_code == 0, result.output
    assert result.output.startswith("Created application ")
    [created] = api.list_applications()
    assert created["company"] == "Acme"
    assert created["status"] == "Applied"
    assert created["location"] == "Remote"


def test_add_prompts_for_missing_fields(run, api):
    result = run("add", "--date", "2026-02-01", input="Acme\nSWE\n")

    assert result.exit_code == 0, result.output
    assert api.list_applications()[0]["role"] == "SWE"


def test_add_reports_server_validation(run, api):
    result = run("add", "--company", "Acme", "--role", "SWE", "--date", "2026-02-30", "--status", "Ghosted")

    assert result.exit_code == 1
    assert "Validation failed" in result.output
    assert "Valid date is required" in result.output
    assert "Status must be one of" in result.output
    assert api.list_applications() == []


def test_edit_keeps_unspecified_fields(run, api, seeded):
    target = seeded[1]

    result = run("edit", str(target["id"]), "--status", "Offer")

    assert result.exit_code == 0, result.output
    assert "(Offer)" in result.output
    updated = api.get_application(target["id"])
    assert updated["status"] == "Offer"
    assert updated["company"] == "Meta"
    assert updated["date"] == "2026-01-08"


def test_edit_missing(run):
    result = run("edit", "999", "--status", "Offer")
    assert result.exit_code == 1
    assert "Application not found" in result.output


def test_show(run, seeded):
    result = run("show", str(seeded[0]["id"]))
    assert result.exit_code == 0
    assert "Google" in result.output
    assert "Interview" in result.output


def test_delete_asks_for_confirmation(run, api, seeded):
    target = seeded[0]["id"]

    declined = run("delete", str(target), input="n\n")
    assert declined.exit_code == 0
    assert "Cancelled" in declined.output
    assert len(api.list_applications()) == 3

    confirmed = run("delete", str(target), input="y\n")
    assert confirmed.exit_code == 0
    assert f"Deleted application {target}" in confirmed.output
    assert len(api.list_applications()) == 2


def test_delete_yes_skips_prompt(run, api, seeded):
    result = run("delete", str(seeded[2]["id"]), "--yes")
    assert result.exit_code == 0
    assert "Delete this application?" not in result.output
    assert len(api.list_applications()) == 2


def test_delete_missing(run):
    result = run("delete", "999", "--yes")
    assert result.exit_code == 1
    assert "Application not found" in result.output


def test_stats(run, seeded):
    result = run("stats")
    assert result.exit_code == 0
    assert "33.33%" in result.output


def test_health(run):
    result = run("health")
    assert result.exit_code == 0
    assert result.output.startswith("ok")
