# walk.py -- Walking commit history and tree contents.
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

"""Walking commit history and tree contents.

Both walks iterate with explicit state instead of recursing, so deep
histories and deeply nested trees do not grow the Python stack.
"""

__all__ = [
    "CommitWalker",
    "WalkState",
    "iter_tree_paths",
    "resolve_tree",
]

from collections.abc import Iterator
from enum import Enum
from typing import Optional

from . import log_utils
from .config import MissingObjectPolicy
from .errors import MalformedObject, ObjectNotFound
from .object_store import LooseObjectStore
from .objects import Commit, ObjectKind, RawObject, Tree, TreeEntry, check_hexsha

logger = log_utils.getLogger(__name__)


class WalkState(Enum):
    """State of a CommitWalker."""

    ACTIVE = "active"
    TERMINATED = "terminated"


class CommitWalker:
    """Follow first parents from a commit back to a root commit.

    Secondary parents of merge commits are never visited. The walker is
    ACTIVE while it has a current commit to read and TERMINATED once it has
    emitted a commit without parents (or ``max_entries`` commits).
    """

    def __init__(
        self,
        store: LooseObjectStore,
        sha: str,
        max_entries: Optional[int] = None,
    ) -> None:
        """Constructor.

        Args:
          store: Store to read commits from
          sha: Hex SHA of the commit to start at
          max_entries: Stop after emitting this many commits
        """
        self.store = store
        self.max_entries = max_entries
        self.current: Optional[str] = check_hexsha(sha)
        self.state = WalkState.ACTIVE
        self._count = 0
        self._seen: set[str] = set()
        if max_entries is not None and max_entries <= 0:
            self._terminate()

    def _terminate(self) -> None:
        self.current = None
        self.state = WalkState.TERMINATED

    def step(self) -> Optional[Commit]:
        """Read the current commit and move on to its first parent.

        Returns: The commit read, or None if the walk has terminated
        Raises:
          ObjectNotFound: if a commit in the chain is missing
          MalformedObject: if a commit cannot be decoded, an object in the
            chain is not a commit, or the chain loops
        """
        if self.state is WalkState.TERMINATED:
            return None
        sha = self.current
        assert sha is not None
        if sha in self._seen:
            raise MalformedObject(f"Commit {sha} is its own ancestor")
        self._seen.add(sha)
        commit = Commit.from_raw(self.store.read_raw(sha))
        self._count += 1
        if commit.is_root:
            logger.debug("Reached root commit %s", sha)
            self._terminate()
        elif self.max_entries is not None and self._count >= self.max_entries:
            self._terminate()
        else:
            self.current = commit.parents[0]
        return commit

    def __iter__(self) -> Iterator[Commit]:
        while True:
            commit = self.step()
            if commit is None:
                return
            yield commit


def resolve_tree(store: LooseObjectStore, sha: str) -> RawObject:
    """Read the tree (or blob) a walk starts from.

    A commit is replaced by its tree; any other object is returned as is.
    """
    raw = store.read_raw(sha)
    if raw.kind is ObjectKind.COMMIT:
        commit = Commit.from_raw(raw)
        logger.debug("Commit %s has tree %s", sha, commit.tree)
        raw = store.read_raw(commit.tree)
    return raw


def _push_entries(
    todo: list[tuple[str, TreeEntry]], path: str, tree: Tree
) -> None:
    # Reversed, so entries pop off the stack in declaration order.
    todo.extend((entry.in_path(path), entry) for entry in reversed(tree.entries))


def iter_tree_paths(
    store: LooseObjectStore,
    sha: str,
    on_missing_object: Optional[MissingObjectPolicy] = None,
) -> Iterator[str]:
    """Iterate over the paths of all blobs reachable from a tree.

    Iteration is depth-first pre-order, in the order entries are declared
    in each tree. Submodule entries are yielded as paths without being read.

    Args:
      store: Store to read objects from
      sha: Hex SHA of a tree, or of a commit whose tree to walk
      on_missing_object: What to do when an object below the starting tree
        is missing; defaults to the store's configured policy
    Returns: Iterator over ``/``-separated relative paths
    Raises:
      ObjectNotFound: if the starting object is missing, or an object below
        it is missing and the policy is FAIL
      MalformedObject: if an object cannot be decoded or an entry points at
        something other than a blob or tree
    """
    if on_missing_object is None:
        on_missing_object = store.config.on_missing_object
    raw = resolve_tree(store, sha)
    if raw.kind is ObjectKind.BLOB:
        yield ""
        return
    todo: list[tuple[str, TreeEntry]] = []
    _push_entries(todo, "", Tree.from_raw(raw))
    while todo:
        path, entry = todo.pop()
        if entry.is_gitlink:
            yield path
            continue
        try:
            raw = store.read_raw(entry.sha)
        except ObjectNotFound:
            if on_missing_object is not MissingObjectPolicy.EMIT_PARTIAL_PATH:
                raise
            logger.warning("Object %s for %s is missing", entry.sha, path)
            yield path
            continue
        if raw.kind is ObjectKind.BLOB:
            yield path
        elif raw.kind is ObjectKind.TREE:
            _push_entries(todo, path, Tree.from_raw(raw))
        else:
            raise MalformedObject(
                f"{entry.sha} at {path} is a {raw.type_name}, not a blob or tree"
            )
