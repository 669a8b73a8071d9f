# utils.py -- Test utilities for gitinternals
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

"""Utility functions common to gitinternals tests.

The helpers write real loose objects (zlib-compressed, named by the SHA-1
of header plus payload) without going through the code under test.
"""

import hashlib
import os
import zlib
from collections.abc import Sequence

# Plain files and directories are very frequently used in tests, so let the
# modes be very short.
F = "100644"
D = "40000"
GITLINK = "160000"

DEFAULT_AUTHOR = "A U Thor <author@example.com> 1112911993 +0200"
DEFAULT_COMMITTER = "C O Mitter <committer@example.com> 1112912053 -0700"


def object_text(type_name: str, payload: bytes) -> bytes:
    """Return an object's uncompressed form: header, NUL and payload."""
    return type_name.encode("ascii") + b" %d\0" % len(payload) + payload


def write_file(root: str, sha: str, data: bytes) -> str:
    """Store arbitrary bytes as the loose object file for ``sha``."""
    dirname = os.path.join(root, "objects", sha[:2])
    os.makedirs(dirname, exist_ok=True)
    with open(os.path.join(dirname, sha[2:]), "wb") as f:
        f.write(data)
    return sha


def write_object(root: str, type_name: str, payload: bytes) -> str:
    """Compress and store an object, returning its hex SHA."""
    text = object_text(type_name, payload)
    sha = hashlib.sha1(text).hexdigest()
    return write_file(root, sha, zlib.compress(text))


def tree_payload(entries: Sequence[tuple[str, str, str]]) -> bytes:
    """Serialize (mode, name, sha) triples as a tree payload."""
    return b"".join(
        mode.encode("ascii") + b" " + name.encode("utf-8") + b"\0" + bytes.fromhex(sha)
        for mode, name, sha in entries
    )


def commit_payload(
    tree: str,
    parents: Sequence[str] = (),
    message: str = "Test message.\n",
    author: str = DEFAULT_AUTHOR,
    committer: str = DEFAULT_COMMITTER,
    extra: Sequence[str] = (),
) -> bytes:
    """Build a commit payload from its parts."""
    lines = [f"tree {tree}"]
    lines.extend(f"parent {p}" for p in parents)
    lines.append(f"author {author}")
    lines.append(f"committer {committer}")
    lines.extend(extra)
    return ("\n".join(lines) + "\n\n" + message).encode("utf-8")


def make_blob(root: str, data: bytes) -> str:
    return write_object(root, "blob", data)


def make_tree(root: str, entries: Sequence[tuple[str, str, str]]) -> str:
    return write_object(root, "tree", tree_payload(entries))


def make_commit(root: str, tree: str, parents: Sequence[str] = (), **kwargs: str) -> str:
    return write_object(root, "commit", commit_payload(tree, parents, **kwargs))


def make_chain(root: str, length: int) -> list[str]:
    """Create ``length`` commits, each the only parent of the next.

    Returns: The commit SHAs, newest first
    """
    tree = make_tree(root, [(F, "a.txt", make_blob(root, b"a\n"))])
    shas: list[str] = []
    for i in range(length):
        parents = shas[:1]
        shas.insert(0, make_commit(root, tree, parents, message=f"Commit {i}\n"))
    return shas


def write_ref(root: str, name: str, value: str) -> None:
    """Write a ref file such as ``refs/heads/master`` or ``HEAD``."""
    path = os.path.join(root, *name.split("/"))
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as f:
        f.write(value + "\n")
