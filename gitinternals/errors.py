# errors.py -- errors for gitinternals
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

"""Exception classes raised while reading a loose object store."""

__all__ = [
    "FileFormatException",
    "InvalidObjectId",
    "MalformedObject",
    "NotBlobError",
    "NotCommitError",
    "NotTreeError",
    "ObjectNotFound",
    "RefNotFound",
    "UnsupportedType",
    "WrongObjectException",
]


class ObjectNotFound(Exception):
    """Indicates that a hash does not resolve to a loose object file."""

    def __init__(self, sha: str, path: str) -> None:
        """Initialize an ObjectNotFound exception.

        Args:
            sha: Hex SHA of the object that was looked up.
            path: Absolute path of the file that was expected to hold it.
        """
        self.sha = sha
        self.path = path
        Exception.__init__(self, f"File not found: {path}")


class RefNotFound(Exception):
    """Indicates that a ref file (HEAD or a branch) does not exist."""

    def __init__(self, path: str) -> None:
        """Initialize a RefNotFound exception.

        Args:
            path: Absolute path of the missing ref file.
        """
        self.path = path
        Exception.__init__(self, f"File not found: {path}")


class InvalidObjectId(ValueError):
    """A string is not a 40 character hex object id."""

    def __init__(self, sha: object) -> None:
        self.sha = sha
        ValueError.__init__(self, f"Invalid object id: {sha!r}")


class FileFormatException(Exception):
    """Base class for exceptions relating to reading git file formats."""


class MalformedObject(FileFormatException):
    """Indicates an error inflating or parsing an object."""


class UnsupportedType(MalformedObject):
    """An object header names a type other than blob, commit or tree."""

    def __init__(self, type_name: str) -> None:
        """Initialize an UnsupportedType exception.

        Args:
            type_name: The type token found in the object header.
        """
        self.type_name = type_name
        MalformedObject.__init__(self, f"Unsupported object type: {type_name}")


class WrongObjectException(MalformedObject):
    """Baseclass for all the _ is not a _ exceptions on objects.

    Do not instantiate directly.

    Subclasses should define a type_name attribute that indicates what
    was expected if they were raised.
    """

    type_name: str

    def __init__(self, sha: str) -> None:
        """Initialize a WrongObjectException.

        Args:
            sha: The SHA of the object that was not of the expected type.
        """
        self.sha = sha
        MalformedObject.__init__(self, f"{sha} is not a {self.type_name}")


class NotCommitError(WrongObjectException):
    """Indicates that the sha requested does not point to a commit."""

    type_name = "commit"


class NotTreeError(WrongObjectException):
    """Indicates that the sha requested does not point to a tree."""

    type_name = "tree"


class NotBlobError(WrongObjectException):
    """Indicates that the sha requested does not point to a blob."""

    type_name = "blob"
