"""Tests for logging module."""

import json
from datetime import date

from muninbox.core.logging import Invocation, get_log_path, query_logs, record_invocation
from muninbox.core.mode import Mode


class TestGetLogPath:
    """Tests for get_log_path function."""

    def test_returns_path_with_date_and_plugin(self, tmp_path):
        """Returns path in format {base}/{date}/{plugin}.jsonl."""
        path = get_log_path("open_files", base_path=tmp_path / "logs")

        today = date.today().isoformat()
        assert path == tmp_path / "logs" / today / "open_files.jsonl"


class TestInvocation:
    """Tests for Invocation entries."""

    def test_success_entry(self):
        entry = Invocation(
            "open_files", Mode.FETCH, 0, summary="used=10 max=100"
        ).to_entry()

        assert entry["level"] == "info"
        assert entry["plugin"] == "open_files"
        assert entry["mode"] == "fetch"
        assert entry["returncode"] == 0
        assert entry["summary"] == "used=10 max=100"
        assert "errors" not in entry

    def test_failure_entry(self):
        entry = Invocation(
            "open_files", Mode.CONFIG, 1, errors=["cannot open /proc/sys/fs/file-nr"]
        ).to_entry()

        assert entry["level"] == "error"
        assert entry["mode"] == "config"
        assert entry["errors"] == ["cannot open /proc/sys/fs/file-nr"]
        assert "summary" not in entry

    def test_errors_mark_failure_despite_returncode(self):
        assert Invocation("open_files", Mode.FETCH, 0, errors=["late"]).failed

    def test_timestamp_is_iso(self):
        entry = Invocation("open_files", Mode.AUTOCONF, 0).to_entry()

        assert "T" in entry["timestamp"]


class TestRecordInvocation:
    """Tests for record_invocation."""

    def test_creates_parent_directories(self, tmp_path):
        base = tmp_path / "deep" / "logs"

        log_path = record_invocation(base, Invocation("open_files", Mode.FETCH, 0))

        assert log_path == get_log_path("open_files", base)
        assert log_path.exists()

    def test_appends_one_line_per_invocation(self, tmp_path):
        record_invocation(tmp_path, Invocation("open_files", Mode.CONFIG, 0, summary="a"))
        log_path = record_invocation(
            tmp_path, Invocation("open_files", Mode.FETCH, 1, errors=["b"])
        )

        entries = [json.loads(line) for line in log_path.read_text().splitlines()]
        assert [e["mode"] for e in entries] == ["config", "fetch"]
        assert [e["level"] for e in entries] == ["info", "error"]


class TestQueryLogs:
    """Tests for query_logs function."""

    def _write(self, tmp_path, entries, day=None):
        day = day or date.today()
        log_file = tmp_path / day.isoformat() / "open_files.jsonl"
        log_file.parent.mkdir(parents=True)
        log_file.write_text("\n".join(entries) + "\n")

    def test_returns_empty_when_missing(self, tmp_path):
        assert query_logs(tmp_path, "open_files") == []

    def test_reads_recorded_invocations(self, tmp_path):
        record_invocation(tmp_path, Invocation("open_files", Mode.FETCH, 0, summary="ok"))

        results = query_logs(tmp_path, "open_files")

        assert [r["summary"] for r in results] == ["ok"]

    def test_filters_by_mode(self, tmp_path):
        self._write(tmp_path, [
            json.dumps({"level": "info", "mode": "config", "n": 0}),
            json.dumps({"level": "info", "mode": "fetch", "n": 1}),
        ])

        results = query_logs(tmp_path, "open_files", mode=Mode.FETCH)

        assert [r["n"] for r in results] == [1]

    def test_errors_only(self, tmp_path):
        self._write(tmp_path, [
            json.dumps({"level": "info", "n": 0}),
            json.dumps({"level": "error", "n": 1}),
        ])

        results = query_logs(tmp_path, "open_files", errors_only=True)

        assert [r["n"] for r in results] == [1]

    def test_limit(self, tmp_path):
        self._write(tmp_path, [json.dumps({"level": "info", "n": i}) for i in range(5)])

        results = query_logs(tmp_path, "open_files", limit=2)

        assert [r["n"] for r in results] == [0, 1]

    def test_skips_corrupt_and_blank_lines(self, tmp_path):
        self._write(tmp_path, [
            "{not json",
            "",
            json.dumps({"level": "info", "summary": "ok"}),
        ])

        results = query_logs(tmp_path, "open_files")

        assert len(results) == 1

    def test_specific_date(self, tmp_path):
        day = date(2024, 1, 15)
        self._write(tmp_path, [json.dumps({"level": "info"})], day=day)

        assert len(query_logs(tmp_path, "open_files", log_date=day)) == 1
        assert query_logs(tmp_path, "open_files") == []
