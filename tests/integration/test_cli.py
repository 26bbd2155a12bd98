"""Command line entry points, run against a temporary database."""

import pytest

from src.ai_notes import AiNoteResult
from src.ai_notes import __main__ as ai_notes_cli
from src.db import AiShowNote, Show, session_scope
from src.ingestion import __main__ as ingestion_cli


@pytest.fixture
def use_database(session_factory, monkeypatch):
    monkeypatch.setattr(ingestion_cli, "get_session_factory", lambda: session_factory)
    monkeypatch.setattr(ai_notes_cli, "get_session_factory", lambda: session_factory)
    return session_factory


class TestSyncCli:
    def test_full_sync(self, use_database, shows_dir, write_show, capsys) -> None:
        write_show("1 - intro.md", title="Intro", guest={"name": "Ada"})

        assert ingestion_cli.main(["--shows-dir", str(shows_dir), "--workers", "2"]) == 0

        assert "Completed: 1 processed, 0 skipped, 0 guest errors" in capsys.readouterr().out
        with session_scope(use_database) as session:
            assert session.query(Show).count() == 1

    def test_changed_only(self, use_database, shows_dir, write_show, capsys) -> None:
        write_show("1 - intro.md", title="Intro")
        ingestion_cli.main(["--shows-dir", str(shows_dir)])

        assert ingestion_cli.main(["--shows-dir", str(shows_dir), "--changed-only"]) == 0
        assert "0 processed, 1 skipped" in capsys.readouterr().out

    def test_guest_errors_exit_non_zero(self, use_database, shows_dir, write_show) -> None:
        write_show("1 - intro.md", title="Intro", guest={"twitter": "nameless"})
        assert ingestion_cli.main(["--shows-dir", str(shows_dir)]) == 1

    def test_failed_pass(self, use_database, shows_dir, write_show, capsys) -> None:
        write_show("intro.md", title="Intro")

        assert ingestion_cli.main(["--shows-dir", str(shows_dir)]) == 1
        assert "Error Importing Shows" in capsys.readouterr().out


class StaticGenerator:
    def __call__(self, show):
        return AiNoteResult(title=f"Notes for {show.number}")


class TestAiNotesCli:
    @pytest.fixture(autouse=True)
    def fake_generator(self, monkeypatch):
        monkeypatch.setattr(ai_notes_cli, "OpenAINoteGenerator", StaticGenerator)

    def test_invalid_show_number(self, use_database, capsys) -> None:
        assert ai_notes_cli.main(["--show-number", "abc"]) == 1
        assert "Invalid Show Number" in capsys.readouterr().out

    def test_next_without_candidates(self, use_database, capsys) -> None:
        assert ai_notes_cli.main(["--next"]) == 0
        assert "No shows without AI Show notes found." in capsys.readouterr().out

    def test_show_number(
        self, use_database, shows_dir, write_show, add_transcript, capsys
    ) -> None:
        write_show("712 - css.md", title="CSS")
        ingestion_cli.main(["--shows-dir", str(shows_dir)])
        add_transcript(712, [(0, "Wes", "Welcome")])

        assert ai_notes_cli.main(["--show-number", "712"]) == 0
        assert "AI Notes Created" in capsys.readouterr().out
        with session_scope(use_database) as session:
            assert session.query(AiShowNote).one().title == "Notes for 712"

    def test_requires_a_mode(self) -> None:
        with pytest.raises(SystemExit):
            ai_notes_cli.main([])
