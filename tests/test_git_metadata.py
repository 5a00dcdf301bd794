"""Tests for git metadata collection and source links."""

import unittest

from build_scan_enricher.facts import Link, RecordingSink, Tag, Value, build_search_url
from build_scan_enricher.git_metadata import (
    GITHUB,
    GITLAB,
    GitState,
    browse_link,
    capture_git_metadata,
    collect_git_state,
)

from .fakes import GIT_BRANCH, GIT_COMMIT, GIT_ORIGIN, GIT_STATUS, GIT_VERSION, FakeRunner

SERVER = "https://scans.example.com"
COMMIT = "1a2b3c4d"


class TestBrowseLink(unittest.TestCase):
    """Tests for host pattern matching."""

    def test_github_scp_and_https_forms(self):
        expected = ("Github source", f"https://github.com/org/repo/tree/{COMMIT}")
        for origin in (
            "git@github.com:org/repo.git",
            "https://github.com/org/repo.git",
            "https://github.com/org/repo",
            "ssh://git@github.com/org/repo.git",
        ):
            with self.subTest(origin=origin):
                self.assertEqual(browse_link(origin, COMMIT), expected)

    def test_gitlab_scp_and_https_forms(self):
        expected = ("GitLab Source", f"https://gitlab.com/org/repo/-/commit/{COMMIT}")
        for origin in ("git@gitlab.com:org/repo.git", "https://gitlab.com/org/repo.git"):
            with self.subTest(origin=origin):
                self.assertEqual(browse_link(origin, COMMIT), expected)

    def test_gitlab_subgroups_are_kept(self):
        self.assertEqual(
            browse_link("git@gitlab.com:org/team/repo.git", COMMIT),
            ("GitLab Source", f"https://gitlab.com/org/team/repo/-/commit/{COMMIT}"),
        )

    def test_unknown_host_yields_nothing(self):
        for origin in ("git@bitbucket.org:org/repo.git", "https://git.example.com/org/repo.git", "github.com"):
            with self.subTest(origin=origin):
                self.assertIsNone(browse_link(origin, COMMIT))

    def test_only_trailing_git_suffix_is_stripped(self):
        self.assertEqual(
            browse_link("https://github.com/org/repo.github.io.git", COMMIT),
            ("Github source", f"https://github.com/org/repo.github.io/tree/{COMMIT}"),
        )

    def test_host_pattern_repo_path(self):
        self.assertEqual(GITHUB.repo_path("git@github.com:org/repo.git"), "org/repo")
        self.assertIsNone(GITLAB.repo_path("https://github.com/org/repo"))
        self.assertFalse(GITLAB.applies_to("https://github.com/org/repo"))

    def test_custom_pattern_order(self):
        self.assertIsNone(browse_link("git@github.com:org/repo.git", COMMIT, patterns=(GITLAB,)))


class TestCollectGitState(unittest.TestCase):
    """Tests for collect_git_state."""

    def test_git_not_installed(self):
        runner = FakeRunner({GIT_COMMIT: COMMIT}, installed=False)
        state = collect_git_state(runner)
        self.assertEqual(state, GitState())
        self.assertFalse(state.has_data())
        self.assertEqual(runner.calls, [GIT_VERSION])

    def test_collects_all_fields(self):
        runner = FakeRunner(
            {
                GIT_COMMIT: COMMIT,
                GIT_BRANCH: "main",
                GIT_STATUS: " M build.gradle",
                GIT_ORIGIN: "git@github.com:org/repo.git",
            }
        )
        self.assertEqual(
            collect_git_state(runner),
            GitState(commit_id=COMMIT, branch="main", status=" M build.gradle", origin_url="git@github.com:org/repo.git"),
        )

    def test_origin_not_queried_without_commit(self):
        runner = FakeRunner({GIT_BRANCH: "main", GIT_ORIGIN: "git@github.com:org/repo.git"})
        state = collect_git_state(runner)
        self.assertIsNone(state.commit_id)
        self.assertIsNone(state.origin_url)
        self.assertNotIn(GIT_ORIGIN, runner.calls)

    def test_failed_step_does_not_abort_siblings(self):
        runner = FakeRunner({GIT_COMMIT: COMMIT, GIT_STATUS: "?? new.txt"})
        state = collect_git_state(runner)
        self.assertEqual(state.commit_id, COMMIT)
        self.assertIsNone(state.branch)
        self.assertEqual(state.status, "?? new.txt")


class TestCaptureGitMetadata(unittest.TestCase):
    """Tests for capture_git_metadata."""

    def setUp(self):
        self.sink = RecordingSink(server=SERVER)

    def test_full_capture(self):
        runner = FakeRunner(
            {
                GIT_COMMIT: COMMIT,
                GIT_BRANCH: "feature/login",
                GIT_STATUS: " M app.py\n?? notes.txt",
                GIT_ORIGIN: "https://github.com/org/repo.git",
            }
        )
        capture_git_metadata(self.sink, runner)
        self.assertEqual(
            self.sink.facts,
            [
                Value("Git commit id", COMMIT),
                Link("Git commit id build scans", build_search_url(SERVER, "Git commit id", COMMIT)),
                Link("Github source", f"https://github.com/org/repo/tree/{COMMIT}"),
                Tag("feature/login"),
                Value("Git branch", "feature/login"),
                Tag("Dirty"),
                Value("Git status", " M app.py\n?? notes.txt"),
            ],
        )

    def test_clean_tree_has_no_dirty_tag(self):
        runner = FakeRunner({GIT_COMMIT: COMMIT, GIT_BRANCH: "main", GIT_STATUS: ""})
        capture_git_metadata(self.sink, runner)
        self.assertNotIn("Dirty", self.sink.tags())
        self.assertNotIn("Git status", [key for key, _ in self.sink.values()])

    def test_detached_head_passes_through(self):
        runner = FakeRunner({GIT_COMMIT: COMMIT, GIT_BRANCH: "HEAD"})
        capture_git_metadata(self.sink, runner)
        self.assertIn("HEAD", self.sink.tags())
        self.assertIn(("Git branch", "HEAD"), self.sink.values())

    def test_unknown_origin_skips_only_browse_link(self):
        runner = FakeRunner({GIT_COMMIT: COMMIT, GIT_BRANCH: "main", GIT_ORIGIN: "git@bitbucket.org:org/repo.git"})
        capture_git_metadata(self.sink, runner)
        labels = [label for label, _ in self.sink.links()]
        self.assertEqual(labels, ["Git commit id build scans"])
        self.assertIn(("Git branch", "main"), self.sink.values())

    def test_empty_origin_skips_browse_link(self):
        runner = FakeRunner({GIT_COMMIT: COMMIT, GIT_ORIGIN: ""})
        capture_git_metadata(self.sink, runner)
        self.assertEqual([label for label, _ in self.sink.links()], ["Git commit id build scans"])

    def test_git_missing_writes_nothing(self):
        runner = FakeRunner({GIT_COMMIT: COMMIT, GIT_BRANCH: "main", GIT_STATUS: " M a"}, installed=False)
        state = capture_git_metadata(self.sink, runner)
        self.assertEqual(self.sink.facts, [])
        self.assertFalse(state.has_data())

    def test_all_commands_failing_writes_nothing(self):
        capture_git_metadata(self.sink, FakeRunner({}))
        self.assertEqual(self.sink.facts, [])
