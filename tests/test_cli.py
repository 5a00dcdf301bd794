"""Tests for the Click CLI interface.

These tests verify that:
1. Facts are reported as JSON or as a table
2. Property options reach IDE and TeamCity detection
3. Invalid configuration exits with code 1
4. Help and version options work
"""

import json
import unittest
from unittest.mock import patch

import click
from click.testing import CliRunner

from build_scan_enricher import __version__
from build_scan_enricher.cli.main import build_config, cli, parse_key_values
from build_scan_enricher.exceptions import ConfigurationError

from .fakes import GIT_VERSION, FakeRunner


def run_cli(args, env=None):
    runner = CliRunner()
    with patch.dict("os.environ", env or {}, clear=True):
        return runner.invoke(cli, args)


class TestParseKeyValues(unittest.TestCase):
    def test_parses_pairs(self):
        self.assertEqual(
            parse_key_values(("a=1", "b=x=y", "c="), "-P"),
            {"a": "1", "b": "x=y", "c": ""},
        )

    def test_rejects_missing_separator(self):
        with self.assertRaises(click.BadParameter):
            parse_key_values(("novalue",), "-P")

    def test_rejects_empty_key(self):
        with self.assertRaises(click.BadParameter):
            parse_key_values(("=1",), "-P")


class TestBuildConfig(unittest.TestCase):
    def test_cli_values_override_environment(self):
        env = {"BUILD_SCAN_SERVER": "https://env.example.com", "DISABLE_GIT_METADATA": "true"}
        with patch.dict("os.environ", env):
            config = build_config("https://cli.example.com", 3.0, True, "debug")
        self.assertEqual(config.server_url, "https://cli.example.com")
        self.assertEqual(config.command_timeout, 3.0)
        self.assertTrue(config.git_metadata)
        self.assertEqual(config.log_level, "DEBUG")

    def test_environment_used_as_fallback(self):
        with patch.dict("os.environ", {"DISABLE_GIT_METADATA": "true"}):
            config = build_config(None, None, None, None)
        self.assertFalse(config.git_metadata)

    def test_invalid_override(self):
        with self.assertRaises(ConfigurationError):
            build_config(None, -5.0, None, None)


class TestCli(unittest.TestCase):
    """Tests for the cli command."""

    def test_json_output_local_build(self):
        result = run_cli(["--json", "--no-git", "-D", "os.name=Linux"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(
            json.loads(result.stdout),
            [
                {"kind": "tag", "label": "Linux"},
                {"kind": "tag", "label": "LOCAL"},
                {"kind": "tag", "label": "Cmd Line"},
            ],
        )

    def test_json_output_github_actions(self):
        env = {
            "GITHUB_ACTIONS": "true",
            "GITHUB_REPOSITORY": "acme/widget",
            "GITHUB_RUN_ID": "42",
        }
        result = run_cli(["--json", "--no-git"], env)
        self.assertEqual(result.exit_code, 0, result.output)
        facts = json.loads(result.stdout)
        self.assertIn({"kind": "tag", "label": "CI"}, facts)
        self.assertIn(
            {
                "kind": "link",
                "label": "GitHub Actions build",
                "url": "https://github.com/acme/widget/actions/runs/42",
            },
            facts,
        )

    def test_project_properties_and_test_tasks(self):
        args = [
            "--json",
            "--no-git",
            "-P",
            "android.injected.invoked.from.ide=true",
            "-P",
            "android.injected.studio.version=2024.1.1",
            "--test-task",
            ":app:test=4",
        ]
        result = run_cli(args)
        self.assertEqual(result.exit_code, 0, result.output)
        facts = json.loads(result.stdout)
        self.assertIn({"kind": "tag", "label": "Android Studio"}, facts)
        self.assertIn({"kind": "value", "key": "Android Studio version", "value": "2024.1.1"}, facts)
        self.assertIn({"kind": "value", "key": ":app:test#maxParallelForks", "value": "4"}, facts)

    def test_server_enables_search_links(self):
        env = {"GITHUB_ACTIONS": "true", "GITHUB_WORKFLOW": "build"}
        result = run_cli(["--json", "--no-git", "--server", "https://scans.example.com"], env)
        self.assertEqual(result.exit_code, 0, result.output)
        labels = [fact.get("label") for fact in json.loads(result.stdout) if fact["kind"] == "link"]
        self.assertEqual(labels, ["GitHub workflow build scans"])

    def test_table_output(self):
        result = run_cli(["--no-git"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("LOCAL", result.output)

    def test_bad_key_value(self):
        result = run_cli(["--no-git", "-P", "oops"])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("Expected key=value", result.output)

    def test_bad_fork_count(self):
        result = run_cli(["--no-git", "--test-task", ":app:test=many"])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("must be an integer", result.output)

    def test_invalid_server_exits_with_error(self):
        with patch("build_scan_enricher.cli.main.logger") as mock_logger:
            result = run_cli(["--server", "not-a-url"])
        self.assertEqual(result.exit_code, 1)
        mock_logger.error.assert_called_once()
        self.assertIn("Configuration error", mock_logger.error.call_args[0][0])

    def test_invalid_environment_timeout_exits_with_error(self):
        result = run_cli(["--no-git"], {"ENRICHER_COMMAND_TIMEOUT": "later"})
        self.assertEqual(result.exit_code, 1)

    def test_help(self):
        result = run_cli(["-h"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("--project-property", result.output)

    def test_version(self):
        result = run_cli(["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)

    def test_table_output_with_bracketed_job_name(self):
        result = run_cli(["--no-git"], {"JENKINS_URL": "https://jenkins", "JOB_NAME": "deploy [/prod]"})
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("deploy [/prod]", result.output)

    def test_missing_git_logs_install_hint(self):
        runner = FakeRunner(installed=False)
        with patch("build_scan_enricher.cli.main.ProcessRunner", return_value=runner):
            with self.assertLogs("build_scan_enricher", level="INFO") as logs:
                result = run_cli(["--json"])
        self.assertEqual(result.exit_code, 0, result.output)
        output = "\n".join(logs.output)
        self.assertIn("Missing tools: Git", output)
        self.assertIn("brew install git", output)
        self.assertNotIn("Git commit id", result.stdout)

    def test_no_git_skips_tool_probe(self):
        runner = FakeRunner(installed=False)
        with patch("build_scan_enricher.cli.main.ProcessRunner", return_value=runner):
            result = run_cli(["--json", "--no-git"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertNotIn(GIT_VERSION, runner.calls)
