"""
Tests for batch mode: submit a program file, write .log / .lst beside it.

Run with: pytest tests/test_batch.py -v
"""

import os

import pytest

from session.batch import output_paths, submit_file
from session.errors import NoActiveSession


# ── output_paths ─────────────────────────────────────────────────────────────

class TestOutputPaths:
    def test_siblings_of_program(self):
        assert output_paths(os.path.join("work", "a.sas")) == (
            os.path.join("work", "a.log"),
            os.path.join("work", "a.lst"),
        )

    def test_only_last_suffix_replaced(self):
        assert output_paths("run.v2.sas") == ("run.v2.log", "run.v2.lst")

    def test_no_suffix(self):
        assert output_paths("prog") == ("prog.log", "prog.lst")


# ── submit_file ──────────────────────────────────────────────────────────────

class TestSubmitFile:
    def test_writes_log_and_listing(self, connected, tmp_path):
        program = tmp_path / "a.sas"
        program.write_text("proc print; run;")
        log_path, lst_path = submit_file(str(program))
        assert log_path == str(tmp_path / "a.log")
        assert lst_path == str(tmp_path / "a.lst")
        assert (tmp_path / "a.log").read_text() == "proc print; run;"
        assert (tmp_path / "a.lst").read_text() == "PROC PRINT; RUN;"
        assert connected.submitted == ["proc print; run;"]

    def test_existing_outputs_are_truncated(self, connected, tmp_path):
        program = tmp_path / "a.sas"
        program.write_text("x")
        (tmp_path / "a.log").write_text("stale log " * 100)
        (tmp_path / "a.lst").write_text("stale listing " * 100)
        submit_file(str(program))
        assert (tmp_path / "a.log").read_text() == "x"
        assert (tmp_path / "a.lst").read_text() == "X"

    def test_empty_output_still_creates_files(self, connected, tmp_path):
        program = tmp_path / "empty.sas"
        program.write_text("")
        (tmp_path / "empty.lst").write_text("old")
        submit_file(str(program))
        assert (tmp_path / "empty.log").read_text() == ""
        assert (tmp_path / "empty.lst").read_text() == ""

    def test_chunks_written_in_order(self, connected, tmp_path):
        program = tmp_path / "big.sas"
        code = "".join(chr(ord("a") + i % 26) for i in range(100))
        program.write_text(code)
        submit_file(str(program), flush_size=7)
        assert (tmp_path / "big.log").read_text() == code
        assert (tmp_path / "big.lst").read_text() == code.upper()

    def test_each_chunk_on_disk_before_next_flush(self, connected, tmp_path):
        program = tmp_path / "a.sas"
        program.write_text("abcdefg")
        log_file = tmp_path / "a.log"
        on_disk = []
        flush_log = connected.flush_log

        def recording_flush_log(size):
            on_disk.append(log_file.read_text())
            return flush_log(size)

        connected.flush_log = recording_flush_log
        submit_file(str(program), flush_size=3)
        assert on_disk == ["", "abc", "abcdef", "abcdefg"]

    def test_log_complete_on_disk_while_listing_drains(self, connected, tmp_path):
        program = tmp_path / "a.sas"
        program.write_text("abcdef")
        log_file = tmp_path / "a.log"
        seen = []
        flush_list = connected.flush_list

        def recording_flush_list(size):
            seen.append(log_file.read_text())
            return flush_list(size)

        connected.flush_list = recording_flush_list
        submit_file(str(program), flush_size=4)
        assert seen == ["abcdef"] * 3

    @pytest.mark.parametrize("name", ["job.lst", "job.log"])
    def test_program_named_like_its_output_is_rejected(self, connected, tmp_path, name):
        program = tmp_path / name
        program.write_text("data x; run;")
        with pytest.raises(ValueError, match="overwritten"):
            submit_file(str(program))
        assert program.read_text() == "data x; run;"
        assert connected.submitted == []

    def test_non_positive_flush_size_writes_nothing(self, connected, tmp_path):
        program = tmp_path / "a.sas"
        program.write_text("x")
        with pytest.raises(ValueError, match="positive"):
            submit_file(str(program), flush_size=0)
        assert not (tmp_path / "a.log").exists()
        assert connected.submitted == []

    def test_missing_file_raises_and_writes_nothing(self, connected, tmp_path):
        with pytest.raises(FileNotFoundError):
            submit_file(str(tmp_path / "missing.sas"))
        assert not (tmp_path / "missing.log").exists()
        assert not (tmp_path / "missing.lst").exists()
        assert connected.submitted == []

    def test_without_session_raises_and_writes_nothing(self, tmp_path):
        program = tmp_path / "a.sas"
        program.write_text("x")
        (tmp_path / "a.log").write_text("keep")
        with pytest.raises(NoActiveSession):
            submit_file(str(program))
        assert (tmp_path / "a.log").read_text() == "keep"
        assert not (tmp_path / "a.lst").exists()

    def test_session_stays_open(self, connected, tmp_path):
        from session.manager import current_session
        program = tmp_path / "a.sas"
        program.write_text("x")
        submit_file(str(program))
        assert current_session() is connected
