"""
Unit tests for the process entry point.
"""

import json
from unittest.mock import Mock, patch

from pr_review_bot.config import AppConfig
from pr_review_bot.main import main
from pr_review_bot.models.review import ReviewRunResult, RunState


def write_event(tmp_path, action="opened"):
    path = tmp_path / "event.json"
    path.write_text(json.dumps({
        "action": action,
        "number": 3,
        "repository": {"name": "demo", "owner": {"login": "octo"}},
    }), encoding="utf-8")
    return path


def make_config(event_path, token="ghs_test"):
    return AppConfig.from_env({
        "GITHUB_TOKEN": token,
        "OPENAI_API_KEY": "sk-test",
        "GITHUB_EVENT_PATH": str(event_path),
    })


class TestMain:
    """Unit tests for exit status handling."""

    @patch("pr_review_bot.main.ReviewOrchestrator")
    def test_success_exit_code(self, orchestrator_cls, tmp_path):
        orchestrator_cls.from_config.return_value.run.return_value = ReviewRunResult(state=RunState.SUBMITTED)

        assert main(make_config(write_event(tmp_path))) == 0

        event = orchestrator_cls.from_config.return_value.run.call_args[0][0]
        assert event.owner == "octo"
        assert event.number == 3

    @patch("pr_review_bot.main.ReviewOrchestrator")
    def test_skipped_run_exits_zero(self, orchestrator_cls, tmp_path):
        orchestrator_cls.from_config.return_value.run.return_value = ReviewRunResult(
            state=RunState.SKIPPED, reason="unsupported_event"
        )

        assert main(make_config(write_event(tmp_path, action="closed"))) == 0

    @patch("pr_review_bot.main.ReviewOrchestrator")
    def test_pipeline_error_exits_one(self, orchestrator_cls, tmp_path):
        orchestrator_cls.from_config.return_value.run.side_effect = RuntimeError("submit failed")

        assert main(make_config(write_event(tmp_path))) == 1

    @patch("pr_review_bot.main.ReviewOrchestrator")
    def test_invalid_config_exits_one(self, orchestrator_cls, tmp_path):
        assert main(make_config(write_event(tmp_path), token="")) == 1
        orchestrator_cls.from_config.assert_not_called()

    @patch("pr_review_bot.main.ReviewOrchestrator")
    def test_missing_event_file_exits_one(self, orchestrator_cls, tmp_path):
        assert main(make_config(tmp_path / "missing.json")) == 1
        orchestrator_cls.from_config.assert_not_called()

    def test_reads_environment_when_no_config(self, tmp_path, monkeypatch):
        for name in (
            "GITHUB_TOKEN", "OPENAI_API_KEY", "INPUT_GITHUB_TOKEN", "INPUT_OPENAI_API_KEY", "PR_REVIEW_BOT_CONFIG",
        ):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("GITHUB_EVENT_PATH", str(write_event(tmp_path)))

        with patch("pr_review_bot.main.ReviewOrchestrator", Mock()) as orchestrator_cls:
            assert main() == 1
            orchestrator_cls.from_config.assert_not_called()

    def test_reads_yaml_config_from_path_variable(self, tmp_path, monkeypatch):
        config_file = tmp_path / "local.yaml"
        config_file.write_text(
            "github:\n"
            "  token: ghs_yaml\n"
            f"  event_path: {write_event(tmp_path)}\n"
            "llm:\n"
            "  api_key: sk-yaml\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("PR_REVIEW_BOT_CONFIG", str(config_file))

        with patch("pr_review_bot.main.ReviewOrchestrator") as orchestrator_cls:
            orchestrator_cls.from_config.return_value.run.return_value = ReviewRunResult(state=RunState.SUBMITTED)

            assert main() == 0

            config = orchestrator_cls.from_config.call_args[0][0]
            assert config.github.token == "ghs_yaml"
            assert config.llm.api_key == "sk-yaml"

    @patch("pr_review_bot.main.ReviewOrchestrator")
    def test_unset_event_path_exits_one(self, orchestrator_cls):
        config = AppConfig.from_env({"GITHUB_TOKEN": "ghs_test", "OPENAI_API_KEY": "sk-test"})

        assert main(config) == 1
        orchestrator_cls.from_config.assert_not_called()
