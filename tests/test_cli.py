# test_cli.py -- tests for cli.py
# Copyright (C) 2026 The gitinternals developers
#
# SPDX-License-Identifier: Apache-2.0 OR GPL-2.0-or-later
# gitinternals is dual-licensed under the Apache License, Version 2.0 and the
# GNU General Public License as published by the Free Software Foundation;
# version 2.0 or (at your option) any later version. You can redistribute it
# and/or modify it under the terms of either of these two licenses.
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# You should have received a copy of the licenses; if not, see
# <http://www.gnu.org/licenses/> for a copy of the GNU General Public License
# and <http://www.apache.org/licenses/LICENSE-2.0> for a copy of the Apache
# License, Version 2.0.
#

"""Tests for gitinternals.cli."""

import io
import logging
import os
import sys
from unittest.mock import patch

from gitinternals import cli

from . import TestCase
from .utils import D, F, make_blob, make_commit, make_tree, write_ref

MISSING_SHA = "1" * 40


class CliTestCase(TestCase):
    """Base class for CLI tests."""

    def setUp(self) -> None:
        super().setUp()
        self.git_dir = self.make_git_dir()
        self.blob = make_blob(self.git_dir, b"hello\n")
        sub = make_tree(self.git_dir, [(F, "b.txt", self.blob)])
        self.tree = make_tree(self.git_dir, [(F, "a.txt", self.blob), (D, "dir", sub)])
        self.first = make_commit(self.git_dir, self.tree, message="First\n")
        self.second = make_commit(self.git_dir, self.tree, [self.first], message="Second\n")
        write_ref(self.git_dir, "refs/heads/master", self.second)
        write_ref(self.git_dir, "refs/heads/topic", self.first)
        patcher = patch.object(cli, "default_logging_config")
        self.logging_config = patcher.start()
        self.addCleanup(patcher.stop)

    def _run_cli(self, *args: str) -> tuple[object, str]:
        """Run a CLI command against the test git directory."""
        old_stdout = sys.stdout
        sys.stdout = io.StringIO()
        try:
            result = cli.main(["--git-dir", self.git_dir, *args])
            return result, sys.stdout.getvalue()
        finally:
            sys.stdout = old_stdout


class CatFileCommandTest(CliTestCase):
    def test_blob(self) -> None:
        result, stdout = self._run_cli("cat-file", self.blob)
        self.assertIsNone(result)
        self.assertEqual("*BLOB*\nhello\n", stdout)

    def test_tree(self) -> None:
        _, stdout = self._run_cli("cat-file", self.tree)
        self.assertTrue(stdout.startswith("*TREE*\n100644 "))

    def test_missing_object(self) -> None:
        with self.assertLogs("gitinternals.cli", level="ERROR") as cm:
            result, stdout = self._run_cli("cat-file", MISSING_SHA)
        self.assertEqual(1, result)
        self.assertEqual("", stdout)
        self.assertIn("File not found: ", cm.output[0])
        self.assertIn(os.path.join("objects", "11", "1" * 38), cm.output[0])

    def test_invalid_sha(self) -> None:
        with self.assertLogs("gitinternals.cli", level="ERROR"):
            result, _ = self._run_cli("cat-file", "master")
        self.assertEqual(1, result)


class ListBranchesCommandTest(CliTestCase):
    def test_list(self) -> None:
        _, stdout = self._run_cli("list-branches")
        self.assertEqual("* master\n  topic\n", stdout)


class LogCommandTest(CliTestCase):
    def test_head(self) -> None:
        _, stdout = self._run_cli("log")
        self.assertEqual(2, stdout.count("Commit: "))
        self.assertTrue(stdout.startswith(f"Commit: {self.second}\n"))

    def test_branch(self) -> None:
        _, stdout = self._run_cli("log", "topic")
        self.assertEqual(f"Commit: {self.first}\n", stdout.splitlines(True)[0])
        self.assertEqual(1, stdout.count("Commit: "))

    def test_max_count(self) -> None:
        _, stdout = self._run_cli("log", "-n", "1")
        self.assertEqual(1, stdout.count("Commit: "))

    def test_missing_branch(self) -> None:
        with self.assertLogs("gitinternals.cli", level="ERROR") as cm:
            result, _ = self._run_cli("log", "nope")
        self.assertEqual(1, result)
        self.assertIn(os.path.join("refs", "heads", "nope"), cm.output[0])


class CommitTreeCommandTest(CliTestCase):
    def test_commit(self) -> None:
        _, stdout = self._run_cli("commit-tree", self.second)
        self.assertEqual("a.txt\ndir/b.txt\n", stdout)

    def test_missing_object(self) -> None:
        tree = make_tree(self.git_dir, [(F, "gone", MISSING_SHA), (F, "a.txt", self.blob)])
        with self.assertLogs("gitinternals.cli", level="ERROR"):
            result, stdout = self._run_cli("commit-tree", tree)
        self.assertEqual(1, result)

    def test_emit_partial_path(self) -> None:
        tree = make_tree(self.git_dir, [(F, "gone", MISSING_SHA), (F, "a.txt", self.blob)])
        with self.assertLogs("gitinternals.walk", level="WARNING"):
            result, stdout = self._run_cli(
                "commit-tree", tree, "--on-missing-object", "emit_partial_path"
            )
        self.assertIsNone(result)
        self.assertEqual("gone\na.txt\n", stdout)

    def test_policy_from_environment(self) -> None:
        self.overrideEnv("GITINTERNALS_ON_MISSING_OBJECT", "emit_partial_path")
        tree = make_tree(self.git_dir, [(F, "gone", MISSING_SHA)])
        with self.assertLogs("gitinternals.walk", level="WARNING"):
            _, stdout = self._run_cli("commit-tree", tree)
        self.assertEqual("gone\n", stdout)

    def test_invalid_policy_in_environment(self) -> None:
        self.overrideEnv("GITINTERNALS_ON_MISSING_OBJECT", "sometimes")
        with self.assertLogs("gitinternals.cli", level="ERROR"):
            result, _ = self._run_cli("commit-tree", self.tree)
        self.assertEqual(1, result)


class MainTest(CliTestCase):
    def test_no_command(self) -> None:
        result, stdout = self._run_cli()
        self.assertEqual(1, result)
        self.assertIn("usage: gitinternals", stdout)
        self.logging_config.assert_not_called()

    def test_unknown_command(self) -> None:
        with self.assertLogs(level=logging.CRITICAL):
            result, _ = self._run_cli("frobnicate")
        self.assertEqual(1, result)

    def test_verbose(self) -> None:
        self._run_cli("-v", "list-branches")
        self.logging_config.assert_called_once_with(verbose=True)

    def test_git_dir_from_environment(self) -> None:
        self.overrideEnv("GIT_DIR", self.git_dir)
        old_stdout = sys.stdout
        sys.stdout = io.StringIO()
        try:
            result = cli.main(["cat-file", self.blob])
            stdout = sys.stdout.getvalue()
        finally:
            sys.stdout = old_stdout
        self.assertIsNone(result)
        self.assertEqual("*BLOB*\nhello\n", stdout)

    def test_commands(self) -> None:
        self.assertEqual(
            ["cat-file", "commit-tree", "list-branches", "log"], sorted(cli.commands)
        )
