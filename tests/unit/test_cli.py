"""
Unit tests for notekeeper/cli/

Coverage plan
─────────────
arg parsing     → 4 tests  (add / list / delete / defaults)
cmd_* helpers   → 4 tests  (add, list empty, list newest first, delete)
main()          → 4 tests  (round trip, no-op delete, bad id, open failure)
"""

import pytest


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _parse(args: list[str]):
    """Call the CLI argument parser and return the parsed namespace."""
    from notekeeper.cli.main import build_parser
    return build_parser().parse_args(args)


# ─────────────────────────────────────────────────────────────────────────────
# 1. Argument parsing
# ─────────────────────────────────────────────────────────────────────────────

class TestArgParsing:

    def test_add_parses_title_and_body(self):
        ns = _parse(["add", "--title", "Shopping", "--body", "Milk,Eggs"])
        assert ns.subcommand == "add"
        assert (ns.title, ns.body) == ("Shopping", "Milk,Eggs")

    def test_add_title_and_body_default_to_empty(self):
        ns = _parse(["add"])
        assert (ns.title, ns.body) == ("", "")

    def test_delete_keeps_raw_id_for_coercion(self):
        ns = _parse(["delete", "--id", "3"])
        assert ns.subcommand == "delete"
        assert ns.note_id == "3"

    def test_db_and_debug_defaults(self):
        from notekeeper.store.db import DEFAULT_DB_PATH
        ns = _parse(["list"])
        assert ns.db == DEFAULT_DB_PATH
        assert ns.debug is False


# ─────────────────────────────────────────────────────────────────────────────
# 2. Command helpers
# ─────────────────────────────────────────────────────────────────────────────

class TestCommands:

    def test_cmd_add_prints_new_id(self, repo, capsys):
        from notekeeper.cli.main import cmd_add
        note_id = cmd_add(repo, "T", "B")
        assert f"Added note {note_id}" in capsys.readouterr().out

    def test_cmd_list_empty_prints_sentinel(self, repo, capsys):
        from notekeeper.cli.main import cmd_list
        assert cmd_list(repo) == 0
        assert "No entries stored." in capsys.readouterr().out

    def test_cmd_list_prints_newest_first(self, repo, capsys):
        from notekeeper.cli.main import cmd_list
        repo.add("Shopping", "Milk,Eggs")
        repo.add("Todo", "Call plumber")
        assert cmd_list(repo) == 2
        out = capsys.readouterr().out
        assert out.index("Todo") < out.index("Shopping")

    def test_cmd_delete_reports_noop(self, repo, capsys):
        from notekeeper.cli.main import cmd_delete
        assert cmd_delete(repo, "12") == 0
        assert "nothing deleted" in capsys.readouterr().out


# ─────────────────────────────────────────────────────────────────────────────
# 3. main()
# ─────────────────────────────────────────────────────────────────────────────

class TestMain:

    def test_add_list_delete_round_trip(self, tmp_path, capsys):
        from notekeeper.cli.main import main
        db = str(tmp_path / "cli.db")
        assert main(["--db", db, "add", "--title", "Shopping", "--body", "Milk"]) == 0
        assert main(["--db", db, "list"]) == 0
        assert "Shopping" in capsys.readouterr().out
        assert main(["--db", db, "delete", "--id", "1"]) == 0
        assert main(["--db", db, "list"]) == 0
        assert "No entries stored." in capsys.readouterr().out

    def test_delete_of_missing_id_exits_zero(self, tmp_path):
        from notekeeper.cli.main import main
        assert main(["--db", str(tmp_path / "cli.db"), "delete", "--id", "99"]) == 0

    def test_non_numeric_id_exits_one(self, tmp_path, capsys):
        from notekeeper.cli.main import main
        code = main(["--db", str(tmp_path / "cli.db"), "delete", "--id", "abc"])
        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_open_failure_exits_one(self, tmp_path, capsys):
        from notekeeper.cli.main import main
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        code = main(["--db", str(blocker / "cli.db"), "list"])
        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_no_subcommand_prints_help(self, capsys):
        from notekeeper.cli.main import main
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()
