from unittest.mock import patch

from prep_planner.app import (
    cmd_log, cmd_reset, cmd_search, main, show_import_result, styled,
)
from prep_planner.sessions import get_sessions


def test_styled_wraps_known_values():
    assert styled("done", {"done": "green"}) == "[green]done[/green]"
    assert styled("other", {}) == "[white]other[/white]"
    assert styled(None, {}) == ""


def test_show_import_result_failure(capsys):
    show_import_result({"success": False, "error": "Workbook not found"})
    assert "Import failed: Workbook not found" in capsys.readouterr().out


def test_show_import_result_lists_errors(capsys):
    data = {
        "plan": {"inserted": 2, "updated": 0, "errors": []},
        "problems": {"inserted": 0, "updated": 1, "errors": ["Row 4: bad"]},
    }
    show_import_result({"success": True, "data": data})
    out = capsys.readouterr().out
    assert "Import Summary" in out
    assert "Row 4: bad" in out


def test_cmd_search_prints_results(store, capsys):
    store.insert("problems", {"week": 1, "category": "DP", "name": "LCS", "difficulty": "Medium"})
    with patch("prep_planner.app.Prompt.ask", side_effect=["lcs", "all"]):
        cmd_search(store)
    out = capsys.readouterr().out
    assert "LCS" in out
    assert "100" in out


def test_cmd_search_no_results(store, capsys):
    with patch("prep_planner.app.Prompt.ask", side_effect=["nothing", "problem"]):
        cmd_search(store)
    assert "No results" in capsys.readouterr().out


def test_cmd_log_saves_session(store):
    with patch("prep_planner.app.Prompt.ask", side_effect=["drill", "two mediums", "none"]), \
         patch("prep_planner.app.IntPrompt.ask", return_value=25):
        cmd_log(store)
    sessions = get_sessions(store)
    assert len(sessions) == 1
    assert sessions[0]["kind"] == "drill"
    assert sessions[0]["duration_mins"] == 25


def test_cmd_reset_requires_confirmation(store):
    store.insert("resources", {"week": 1, "area": "LLM", "title": "Paper"})
    with patch("prep_planner.app.Confirm.ask", return_value=False):
        cmd_reset(store)
    assert store.count("resources") == 1
    with patch("prep_planner.app.Confirm.ask", return_value=True):
        cmd_reset(store)
    assert store.count("resources") == 0


def test_main_quits(tmp_db, capsys):
    with patch("prep_planner.app.DEFAULT_DB_PATH", tmp_db), \
         patch("prep_planner.app.setup_logging"), \
         patch("prep_planner.app.Prompt.ask", side_effect=["bogus", "quit"]):
        main()
    out = capsys.readouterr().out
    assert "Unknown command" in out
    assert "Good luck" in out
