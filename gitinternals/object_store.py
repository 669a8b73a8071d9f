# object_store.py -- Read-only access to a directory of loose objects
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

"""Read-only access to the loose objects of a git directory."""

__all__ = [
    "LooseObjectStore",
    "object_path",
]

import os
from typing import Optional, Union

from . import log_utils
from .config import InspectorConfig
from .errors import ObjectNotFound
from .objects import (
    RawObject,
    ShaFile,
    check_hexsha,
    decode_object,
    decompress_object_file,
    hex_to_filename,
    parse_raw_object,
    valid_hexsha,
)

logger = log_utils.getLogger(__name__)

OBJECTDIR = "objects"


def object_path(root: Union[str, "os.PathLike[str]"], sha: str) -> str:
    """Return the absolute path a loose object is stored at.

    Args:
      root: The git directory (the one holding ``objects/``)
      sha: Hex SHA of the object
    Returns: ``<root>/objects/<sha[:2]>/<sha[2:]>`` as an absolute path
    """
    sha = check_hexsha(sha)
    return os.path.abspath(hex_to_filename(os.path.join(root, OBJECTDIR), sha))


class LooseObjectStore:
    """Loose objects below ``<root>/objects``.

    Nothing is cached: every lookup opens and inflates the object file again.
    """

    def __init__(
        self,
        root: Union[str, "os.PathLike[str]"],
        config: Optional[InspectorConfig] = None,
    ) -> None:
        """Open a store.

        Args:
          root: The git directory (the one holding ``objects/``)
          config: Settings; defaults to ``InspectorConfig()``
        """
        self.root = os.fspath(root)
        self.config = config if config is not None else InspectorConfig()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.root!r})"

    def object_path(self, sha: str) -> str:
        return object_path(self.root, sha)

    def __contains__(self, sha: object) -> bool:
        if not isinstance(sha, str) or not valid_hexsha(sha):
            return False
        return os.path.isfile(self.object_path(sha))

    def read_raw(self, sha: str) -> RawObject:
        """Read and inflate an object, without decoding its payload.

        Args:
          sha: Hex SHA of the object
        Returns: A RawObject
        Raises:
          InvalidObjectId: if ``sha`` is not a 40 character hex string
          ObjectNotFound: if there is no file for ``sha``
          MalformedObject: if the file cannot be inflated or its header parsed
        """
        sha = check_hexsha(sha)
        path = self.object_path(sha)
        logger.debug("Reading loose object %s from %s", sha, path)
        try:
            with open(path, "rb") as f:
                text = decompress_object_file(f)
        except (FileNotFoundError, NotADirectoryError):
            raise ObjectNotFound(sha, path) from None
        return parse_raw_object(text, sha, verify_size=self.config.verify_size)

    def read_object(self, sha: str) -> ShaFile:
        """Read an object and decode it into a Blob, Commit or Tree."""
        return decode_object(self.read_raw(sha))

    def __getitem__(self, sha: str) -> ShaFile:
        return self.read_object(sha)
