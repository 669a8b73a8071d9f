# refs.py -- Reading HEAD and branch refs
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

"""Reading HEAD and the branch refs below refs/heads.

Only loose ref files are understood; packed-refs is not read.
"""

__all__ = [
    "HEADREF",
    "LOCAL_BRANCH_PREFIX",
    "list_branches",
    "read_branch",
    "read_head",
    "resolve_head",
]

import os
from typing import Optional, Union

from .errors import RefNotFound

HEADREF = "HEAD"
SYMREF = "ref: "
LOCAL_BRANCH_PREFIX = "refs/heads/"

PathLike = Union[str, "os.PathLike[str]"]


def _read_ref_file(root: PathLike, name: str) -> str:
    path = os.path.abspath(os.path.join(root, *name.split("/")))
    try:
        with open(path, encoding="utf-8") as f:
            return f.readline().rstrip("\r\n")
    except (FileNotFoundError, NotADirectoryError, IsADirectoryError):
        raise RefNotFound(path) from None


def read_head(root: PathLike) -> Optional[str]:
    """Return the branch HEAD points at.

    Args:
      root: The git directory
    Returns: Branch name without the ``refs/heads/`` prefix, or None if
      HEAD is detached (holds a SHA rather than ``ref: refs/heads/<name>``)
    Raises:
      RefNotFound: if there is no HEAD file
    """
    contents = _read_ref_file(root, HEADREF)
    if not contents.startswith(SYMREF):
        return None
    target = contents[len(SYMREF) :].strip()
    if target.startswith(LOCAL_BRANCH_PREFIX):
        return target[len(LOCAL_BRANCH_PREFIX) :]
    return None


def list_branches(root: PathLike) -> list[str]:
    """List local branch names, sorted.

    Branches in subdirectories are returned with ``/`` separators, e.g.
    ``feature/login``.

    Raises:
      RefNotFound: if there is no refs/heads directory
    """
    heads = os.path.abspath(os.path.join(root, "refs", "heads"))
    if not os.path.isdir(heads):
        raise RefNotFound(heads)
    names = []
    for dirpath, _, filenames in os.walk(heads):
        rel = os.path.relpath(dirpath, heads)
        for filename in filenames:
            if rel == os.curdir:
                names.append(filename)
            else:
                names.append("/".join(rel.split(os.sep) + [filename]))
    names.sort()
    return names


def read_branch(root: PathLike, name: str) -> str:
    """Return the SHA a branch points at.

    Raises:
      RefNotFound: if the branch does not exist
    """
    return _read_ref_file(root, LOCAL_BRANCH_PREFIX + name).strip()


def resolve_head(root: PathLike) -> str:
    """Return the SHA HEAD points at, following a symbolic ref.

    Raises:
      RefNotFound: if HEAD or the branch it names does not exist
    """
    contents = _read_ref_file(root, HEADREF)
    if contents.startswith(SYMREF):
        return _read_ref_file(root, contents[len(SYMREF) :].strip()).strip()
    return contents.strip()
