import io
import json
import logging
import sys

import pytest
from pydantic import ValidationError

from run_canceller.core.output_formatter import format_summary
from run_canceller.models.run_outcome import CancelSummary, RunOutcome
from run_canceller.models.workflow_run import WorkflowRun
from run_canceller.services.report_writer import ReportWriter
from run_canceller.utils.logging_config import ColoredFormatter, setup_logging
from run_canceller.utils.repo_path import extract_repo_path


class TestWorkflowRun:
    def test_from_api_ignores_unknown_keys(self):
        run = WorkflowRun.from_api({"id": 1, "status": "queued", "head_sha": "abc", "event": "push"})
        assert run.id == 1
        assert run.is_cancelable
        assert not run.is_pre_queue

    @pytest.mark.parametrize("status", ["requested", "waiting", "pending"])
    def test_pre_queue_statuses(self, status):
        run = WorkflowRun.from_api({"id": 1, "status": status})
        assert run.is_pre_queue
        assert not run.is_cancelable

    def test_null_labels(self):
        run = WorkflowRun.from_api({"id": 1, "status": None})
        assert run.status_label == "null"
        assert run.conclusion_label == "null"

    def test_missing_id_is_rejected(self):
        with pytest.raises(ValidationError):
            WorkflowRun.from_api({"status": "queued"})


class TestCancelSummary:
    def test_counts_and_failures(self):
        summary = CancelSummary(repository="octo/demo", dry_run=False)
        summary.add(RunOutcome(run_id=1, action="cancel_accepted"))
        summary.add(RunOutcome(run_id=2, action="cancel_accepted"))
        summary.add(RunOutcome(run_id=3, action="conflict"))
        assert summary.counts == {"cancel_accepted": 2, "conflict": 1}
        assert not summary.has_failures

        summary.add(RunOutcome(run_id=4, action="delete_failed"))
        assert summary.has_failures

    def test_unknown_action_rejected(self):
        with pytest.raises(ValidationError):
            RunOutcome(run_id=1, action="exploded")

    def test_summary_lines(self):
        lines = format_summary({"would_cancel": 3}, dry_run=True)
        assert "dry-run" in lines[1]
        assert any("Would cancel:" in line and line.endswith("3") for line in lines)

    def test_summary_lines_empty(self):
        assert format_summary({}, dry_run=False)[-1] == "  No runs needed action."


class TestRepoPath:
    @pytest.mark.parametrize(
        "value",
        [
            "octo/demo",
            " octo/demo ",
            "https://github.com/octo/demo",
            "https://github.com/octo/demo/",
            "https://github.com/octo/demo.git",
            "git@github.com:octo/demo.git",
        ],
    )
    def test_accepted_forms(self, value):
        assert extract_repo_path(value) == "octo/demo"

    @pytest.mark.parametrize("value", ["", "octo", "octo/demo/extra", "octo/de mo", "/demo"])
    def test_rejected_forms(self, value):
        with pytest.raises(ValueError):
            extract_repo_path(value)


class TestReportWriter:
    def test_write_report(self, tmp_path):
        summary = CancelSummary(repository="octo/demo", total_count=1)
        summary.add(RunOutcome(run_id=1, action="would_cancel", status="queued"))
        path = tmp_path / "report.json"

        assert ReportWriter.write_report(summary, str(path)) is True
        data = json.loads(path.read_text())
        assert data["counts"] == {"would_cancel": 1}
        assert data["has_failures"] is False
        assert data["outcomes"][0]["status"] == "queued"

    def test_write_report_unwritable(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        summary = CancelSummary(repository="octo/demo")

        assert ReportWriter.write_report(summary, str(blocker / "report.json")) is False


class TestLogging:
    def test_setup_logging_replaces_handlers(self, tmp_path):
        log_file = tmp_path / "logs" / "cancel.log"
        setup_logging(level="DEBUG", log_file=str(log_file))
        setup_logging(level="DEBUG", log_file=str(log_file))

        root = logging.getLogger()
        assert len(root.handlers) == 2
        assert root.level == logging.DEBUG

        logging.getLogger("run_canceller.test").info("hello")
        for handler in root.handlers:
            handler.flush()
            handler.close()
        assert "hello" in log_file.read_text()

    def test_plain_formatter_has_no_color(self):
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", None, None)
        assert "\x1b[" not in ColoredFormatter(use_color=False).format(record)
        assert "\x1b[31m" in ColoredFormatter(use_color=True).format(record)

    @staticmethod
    def _console_formatter():
        handlers = [h for h in logging.getLogger().handlers if isinstance(h.formatter, ColoredFormatter)]
        assert len(handlers) == 1
        return handlers[0].formatter

    def test_tty_stderr_gets_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setattr(sys, "stderr", _TtyStream())
        setup_logging(level=logging.INFO)

        assert self._console_formatter().use_color is True

    def test_no_color_env_disables_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        monkeypatch.setattr(sys, "stderr", _TtyStream())
        setup_logging(level=logging.INFO)

        assert self._console_formatter().use_color is False

    def test_non_tty_stderr_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setattr(sys, "stderr", io.StringIO())
        setup_logging(level=logging.INFO)

        assert self._console_formatter().use_color is False


class _TtyStream(io.StringIO):
    def isatty(self):
        return True
