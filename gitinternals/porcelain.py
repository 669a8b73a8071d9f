# porcelain.py -- Human readable views of a git directory
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

"""Simple wrapper that provides porcelain-like functions on top of gitinternals.

Currently implemented:
 * cat_file
 * commit_tree
 * list_branches
 * log

Each function takes the path of a git directory and writes to ``outstream``.
"""

__all__ = [
    "cat_file",
    "commit_tree",
    "list_branches",
    "log",
    "print_commit",
    "print_log_entry",
]

import os
import sys
from typing import Optional, TextIO, Union

from . import refs
from .config import InspectorConfig, MissingObjectPolicy
from .object_store import LooseObjectStore
from .objects import Blob, Commit, Identity, ShaFile, Tree
from .walk import CommitWalker, iter_tree_paths

RepoPath = Union[str, "os.PathLike[str]"]


def _describe(identity: Identity, label: str) -> str:
    return f"{identity.name} {identity.email} {label} timestamp: {identity.formatted_time}"


def print_commit(commit: Commit, outstream: TextIO = sys.stdout) -> None:
    """Write every field of a commit, one ``key: value`` line each.

    Args:
      commit: A `Commit` object
      outstream: A stream file to write to
    """
    outstream.write(f"tree: {commit.tree}\n")
    for parent in commit.parents:
        outstream.write(f"parents: {parent}\n")
    outstream.write(f"author: {_describe(commit.author, 'original')}\n")
    outstream.write(f"committer: {_describe(commit.committer, 'commit')}\n")
    for key, value in commit.extra:
        outstream.write(f"{key}: {value}\n")
    outstream.write("commit message:\n")
    if commit.message:
        outstream.write(commit.message + "\n")


def print_log_entry(commit: Commit, outstream: TextIO = sys.stdout) -> None:
    """Write a commit the way it appears in ``log`` output."""
    outstream.write(f"Commit: {commit.id}\n")
    if len(commit.parents) > 1:
        outstream.write("Merged: " + " ".join(commit.parents[1:]) + "\n")
    outstream.write(_describe(commit.committer, "commit") + "\n")
    if commit.message:
        outstream.write(commit.message + "\n")
    outstream.write("\n")


def _print_object(obj: ShaFile, outstream: TextIO) -> None:
    if isinstance(obj, Blob):
        text = obj.text
        outstream.write(text)
        if not text.endswith("\n"):
            outstream.write("\n")
    elif isinstance(obj, Commit):
        print_commit(obj, outstream)
    elif isinstance(obj, Tree):
        outstream.writelines(f"{entry}\n" for entry in obj)
    else:
        raise AssertionError(f"unexpected object {obj!r}")


def cat_file(
    repo: RepoPath,
    sha: str,
    outstream: TextIO = sys.stdout,
    config: Optional[InspectorConfig] = None,
) -> None:
    """Write the type and decoded contents of an object.

    Args:
      repo: Path to the git directory
      sha: Hex SHA of the object
      outstream: Stream to write to
      config: Settings for reading objects
    """
    obj = LooseObjectStore(repo, config).read_object(sha)
    outstream.write(f"*{obj.type_name.upper()}*\n")
    _print_object(obj, outstream)


def list_branches(repo: RepoPath, outstream: TextIO = sys.stdout) -> None:
    """Write the local branches, marking the one HEAD points at with ``*``.

    Args:
      repo: Path to the git directory
      outstream: Stream to write to
    """
    current = refs.read_head(repo)
    for name in refs.list_branches(repo):
        marker = "*" if name == current else " "
        outstream.write(f"{marker} {name}\n")


def log(
    repo: RepoPath,
    branch: Optional[str] = None,
    outstream: TextIO = sys.stdout,
    max_entries: Optional[int] = None,
    config: Optional[InspectorConfig] = None,
) -> None:
    """Write the first-parent history of a branch.

    Args:
      repo: Path to the git directory
      branch: Branch to start from; defaults to what HEAD points at
      outstream: Stream to write log output to
      max_entries: Optional maximum number of entries to display
      config: Settings for reading objects
    """
    if branch is None:
        sha = refs.resolve_head(repo)
    else:
        sha = refs.read_branch(repo, branch)
    store = LooseObjectStore(repo, config)
    for commit in CommitWalker(store, sha, max_entries=max_entries):
        print_log_entry(commit, outstream)


def commit_tree(
    repo: RepoPath,
    sha: str,
    outstream: TextIO = sys.stdout,
    on_missing_object: Optional[MissingObjectPolicy] = None,
    config: Optional[InspectorConfig] = None,
) -> None:
    """Write the path of every file in a commit or tree, one per line.

    Args:
      repo: Path to the git directory
      sha: Hex SHA of a commit or tree
      outstream: Stream to write to
      on_missing_object: Overrides the configured missing object policy
      config: Settings for reading objects
    """
    store = LooseObjectStore(repo, config)
    for path in iter_tree_paths(store, sha, on_missing_object=on_missing_object):
        outstream.write(path + "\n")
