# objects.py -- Decoding of loose git objects
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

"""Decoding of loose git objects.

A loose object is a zlib stream holding ``<type> <size>\\0<payload>``. This
module turns the inflated bytes into a :class:`RawObject` and the payload
into a :class:`Blob`, :class:`Commit` or :class:`Tree`.
"""

__all__ = [
    "Blob",
    "Commit",
    "Identity",
    "ObjectKind",
    "RawObject",
    "ShaFile",
    "Tree",
    "TreeEntry",
    "check_hexsha",
    "decode_object",
    "decompress_object_file",
    "format_time",
    "format_timezone",
    "hex_to_filename",
    "parse_commit",
    "parse_identity",
    "parse_raw_object",
    "parse_timezone",
    "parse_tree",
    "serialize_tree",
    "sha_to_hex",
    "valid_hexsha",
]

import binascii
import os
import posixpath
import re
import stat
import zlib
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import IO, ClassVar, NamedTuple, Optional, TypeVar, Union

from .errors import (
    InvalidObjectId,
    MalformedObject,
    NotBlobError,
    NotCommitError,
    NotTreeError,
    UnsupportedType,
    WrongObjectException,
)

# Header fields for commits
_TREE_HEADER = b"tree"
_PARENT_HEADER = b"parent"
_AUTHOR_HEADER = b"author"
_COMMITTER_HEADER = b"committer"
_ENCODING_HEADER = b"encoding"

RAW_SHA_LENGTH = 20
HEXSHA_LENGTH = 40

S_IFGITLINK = 0o160000

_HEXSHA_RE = re.compile(r"[0-9a-fA-F]{40}")
_MODE_RE = re.compile(rb"[0-7]+")
_IDENTITY_RE = re.compile(
    r"(?P<name>[^<>]*?) ?<(?P<email>[^<>]*)> (?P<time>\d+) (?P<timezone>[+-]\d{4})"
)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

DEFAULT_BUFSIZE = 64 * 1024


def S_ISGITLINK(m: int) -> bool:
    """Check if a mode indicates a submodule.

    Args:
      m: Mode to check
    Returns: a ``boolean``
    """
    return stat.S_IFMT(m) == S_IFGITLINK


def valid_hexsha(hex: Union[str, bytes]) -> bool:
    """Check whether a value is a 40 character hex object id."""
    if isinstance(hex, bytes):
        try:
            hex = hex.decode("ascii")
        except UnicodeDecodeError:
            return False
    return _HEXSHA_RE.fullmatch(hex) is not None


def check_hexsha(sha: Union[str, bytes]) -> str:
    """Normalise an object id to lower case hex.

    Raises:
      InvalidObjectId: if ``sha`` is not 40 hex characters
    """
    if not valid_hexsha(sha):
        raise InvalidObjectId(sha)
    if isinstance(sha, bytes):
        sha = sha.decode("ascii")
    return sha.lower()


def sha_to_hex(sha: bytes) -> str:
    """Takes a raw 20 byte digest and returns its 40 character hex form."""
    if len(sha) != RAW_SHA_LENGTH:
        raise ValueError(f"Incorrect length of raw sha: {len(sha)}")
    return binascii.hexlify(sha).decode("ascii")


def hex_to_filename(path: Union[str, "os.PathLike[str]"], hex: str) -> str:
    """Takes a hex sha and returns its filename relative to the given path.

    The first two characters name a fan-out directory and the remaining
    38 the file inside it.
    """
    return os.path.join(path, hex[:2], hex[2:])


class ObjectKind(Enum):
    """The object types a loose object header may name."""

    BLOB = "blob"
    COMMIT = "commit"
    TREE = "tree"


_KIND_BY_NAME = {kind.value.encode("ascii"): kind for kind in ObjectKind}


@dataclass(frozen=True)
class RawObject:
    """An inflated object: its type and the bytes after the header."""

    kind: ObjectKind
    payload: bytes
    sha: Optional[str] = None

    @property
    def type_name(self) -> str:
        return self.kind.value


def decompress_object_file(f: IO[bytes], bufsize: int = DEFAULT_BUFSIZE) -> bytes:
    """Inflate the whole zlib stream read from ``f``.

    Raises:
      MalformedObject: if the data is not a complete zlib stream
    """
    decomp = zlib.decompressobj()
    chunks = []
    try:
        while True:
            data = f.read(bufsize)
            if not data:
                break
            chunks.append(decomp.decompress(data))
        chunks.append(decomp.flush())
    except zlib.error as e:
        raise MalformedObject(f"Unable to decompress object: {e}") from e
    if not decomp.eof:
        raise MalformedObject("Compressed object data is truncated")
    return b"".join(chunks)


def parse_raw_object(
    text: bytes, sha: Optional[str] = None, verify_size: bool = True
) -> RawObject:
    """Split inflated object bytes into header and payload.

    Args:
      text: Inflated object, ``<type> <size>\\0<payload>``
      sha: Hex SHA the object was looked up by, if known
      verify_size: Reject objects whose declared size differs from the
        payload length
    Returns: A RawObject
    Raises:
      MalformedObject: if the header is not of the form ``<type> <size>``
      UnsupportedType: if the type is not blob, commit or tree
    """
    header_end = text.find(b"\0")
    if header_end < 0:
        raise MalformedObject("Invalid object header, no \\0")
    header = text[:header_end]
    type_name, sep, size_text = header.partition(b" ")
    if not sep or not type_name or not size_text.isdigit():
        raise MalformedObject(f"Invalid object header: {header!r}")
    try:
        kind = _KIND_BY_NAME[type_name]
    except KeyError:
        raise UnsupportedType(type_name.decode("ascii", "replace")) from None
    payload = text[header_end + 1 :]
    if verify_size and int(size_text) != len(payload):
        raise MalformedObject(
            f"Object size mismatch: header says {int(size_text)}, "
            f"payload has {len(payload)} bytes"
        )
    return RawObject(kind, payload, sha)


def parse_timezone(text: Union[str, bytes]) -> int:
    """Parse a timezone text fragment (e.g. '+0100').

    Args:
      text: Text to parse.
    Returns: Offset from UTC in seconds
    """
    if isinstance(text, bytes):
        text = text.decode("ascii")
    if len(text) != 5 or text[0] not in "+-" or not text[1:].isdigit():
        raise ValueError(f"Invalid timezone: {text!r}")
    signum = -1 if text[0] == "-" else 1
    hours = int(text[1:3])
    minutes = int(text[3:5])
    return signum * (hours * 3600 + minutes * 60)


def format_timezone(offset: int, separator: str = "") -> str:
    """Format a timezone offset.

    Args:
      offset: Timezone offset as seconds difference to UTC
      separator: Text put between hours and minutes, ``":"`` gives the
        ``+02:00`` display form
    Returns: e.g. ``+0200``
    """
    if offset % 60 != 0:
        raise ValueError("Unable to handle non-minute offset.")
    sign = "-" if offset < 0 else "+"
    offset = abs(offset)
    return f"{sign}{offset // 3600:02d}{separator}{(offset // 60) % 60:02d}"


def format_time(time: int, offset: int) -> str:
    """Render a timestamp as ``YYYY-MM-DD HH:MM:SS ±HH:MM``.

    Args:
      time: Seconds since the epoch
      offset: Offset from UTC, in seconds, to express the time in
    """
    tz = timezone(timedelta(seconds=offset))
    local = (_EPOCH + timedelta(seconds=time)).astimezone(tz)
    return local.strftime("%Y-%m-%d %H:%M:%S ") + format_timezone(offset, ":")


@dataclass(frozen=True)
class Identity:
    """Who authored or committed a commit, and when."""

    name: str
    email: str
    time: int
    timezone: int

    @property
    def formatted_time(self) -> str:
        return format_time(self.time, self.timezone)

    def as_raw(self) -> str:
        """Render the identity the way it appears in a commit header."""
        return f"{self.name} <{self.email}> {self.time} {format_timezone(self.timezone)}"

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


def parse_identity(value: str) -> Identity:
    """Parse an author or committer header value.

    The value must look like ``A U Thor <author@example.com> 1112911993 +0200``.

    Raises:
      MalformedObject: if the value does not match that shape
    """
    m = _IDENTITY_RE.fullmatch(value)
    if m is None:
        raise MalformedObject(f"Invalid identity line: {value!r}")
    offset = parse_timezone(m.group("timezone"))
    identity = Identity(m.group("name"), m.group("email"), int(m.group("time")), offset)
    try:
        format_time(identity.time, identity.timezone)
    except (OverflowError, ValueError) as e:
        raise MalformedObject(f"Invalid timestamp in identity line {value!r}: {e}") from e
    return identity


T = TypeVar("T", bound="ShaFile")


class ShaFile:
    """Base class for decoded objects."""

    kind: ClassVar[ObjectKind]
    not_type_error: ClassVar[type[WrongObjectException]]

    id: Optional[str] = None

    @property
    def type_name(self) -> str:
        return self.kind.value

    @classmethod
    def from_raw(cls: type[T], raw: RawObject) -> T:
        """Decode a raw object of this class's type.

        Raises:
          WrongObjectException: if ``raw`` holds another type of object
          MalformedObject: if the payload cannot be decoded
        """
        if raw.kind is not cls.kind:
            raise cls.not_type_error(raw.sha or "object")
        obj = cls._deserialize(raw.payload)
        obj.id = raw.sha
        return obj

    @classmethod
    def _deserialize(cls: type[T], payload: bytes) -> T:
        raise NotImplementedError(cls._deserialize)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.id}>"


class Blob(ShaFile):
    """A blob: opaque file contents."""

    kind = ObjectKind.BLOB
    not_type_error = NotBlobError

    def __init__(self, data: bytes = b"") -> None:
        self.data = data

    @classmethod
    def _deserialize(cls, payload: bytes) -> "Blob":
        return cls(payload)

    @property
    def text(self) -> str:
        return self.data.decode("utf-8", "replace")


class Commit(ShaFile):
    """A commit: a tree, its parents, who made it and why."""

    kind = ObjectKind.COMMIT
    not_type_error = NotCommitError

    def __init__(
        self,
        tree: str,
        parents: Sequence[str],
        author: Identity,
        committer: Identity,
        message: str = "",
        extra: Iterable[tuple[str, str]] = (),
        encoding: Optional[str] = None,
    ) -> None:
        self.tree = tree
        self.parents = list(parents)
        self.author = author
        self.committer = committer
        self.message = message
        self.extra = list(extra)
        self.encoding = encoding

    @classmethod
    def _deserialize(cls, payload: bytes) -> "Commit":
        return parse_commit(payload)

    @property
    def is_root(self) -> bool:
        """True if the commit has no parents."""
        return not self.parents

    def serialize_headers(self) -> str:
        """Render the header block, one ``key value`` line per field."""
        lines = [f"tree {self.tree}"]
        lines.extend(f"parent {p}" for p in self.parents)
        lines.append(f"author {self.author.as_raw()}")
        lines.append(f"committer {self.committer.as_raw()}")
        if self.encoding is not None:
            lines.append(f"encoding {self.encoding}")
        for key, value in self.extra:
            lines.append(f"{key} {value}".replace("\n", "\n "))
        return "".join(line + "\n" for line in lines)

    def as_raw_string(self) -> bytes:
        """Render the commit payload."""
        message = self.message.encode(self.encoding or "utf-8")
        if message:
            message += b"\n"
        return self.serialize_headers().encode("utf-8") + b"\n" + message


def _parse_message(payload: bytes) -> tuple[list[tuple[bytes, bytes]], list[bytes]]:
    """Split a commit payload into header fields and message lines.

    Header lines starting with a space continue the previous field.
    """
    lines = payload.split(b"\n")
    fields: list[tuple[bytes, bytes]] = []
    i = 0
    while i < len(lines) and lines[i]:
        line = lines[i]
        i += 1
        if line.startswith(b" "):
            if not fields:
                raise MalformedObject("Commit starts with a continuation line")
            key, value = fields[-1]
            fields[-1] = (key, value + b"\n" + line[1:])
            continue
        key, _, value = line.partition(b" ")
        fields.append((key, value))
    message = lines[i + 1 :]
    while message and not message[-1]:
        message.pop()
    return fields, message


def _header_sha(value: str, field: str) -> str:
    try:
        return check_hexsha(value)
    except InvalidObjectId as e:
        raise MalformedObject(f"Invalid {field} in commit: {value!r}") from e


def parse_commit(payload: bytes) -> Commit:
    """Parse a commit payload.

    Args:
      payload: Bytes following the object header
    Returns: A Commit
    Raises:
      MalformedObject: if a required field is missing, duplicated or
        unparseable
    """
    fields, message_lines = _parse_message(payload)
    tree = None
    parents = []
    author = committer = None
    encoding = None
    extra = []
    for key, raw_value in fields:
        value = raw_value.decode("utf-8", "replace")
        if key == _TREE_HEADER:
            if tree is not None:
                raise MalformedObject("Commit has more than one tree")
            tree = _header_sha(value, "tree")
        elif key == _PARENT_HEADER:
            parents.append(_header_sha(value, "parent"))
        elif key == _AUTHOR_HEADER:
            author = parse_identity(value)
        elif key == _COMMITTER_HEADER:
            committer = parse_identity(value)
        elif key == _ENCODING_HEADER:
            encoding = value
        else:
            extra.append((key.decode("utf-8", "replace"), value))
    if tree is None:
        raise MalformedObject("Commit has no tree")
    if author is None:
        raise MalformedObject("Commit has no author")
    if committer is None:
        raise MalformedObject("Commit has no committer")
    try:
        message = b"\n".join(message_lines).decode(encoding or "utf-8", "replace")
    except LookupError as e:
        raise MalformedObject(f"Unknown commit encoding: {encoding}") from e
    return Commit(tree, parents, author, committer, message, extra, encoding)


class TreeEntry(NamedTuple):
    """Named tuple encapsulating a single tree entry."""

    name: str
    mode: str
    sha: str

    @property
    def mode_int(self) -> int:
        return int(self.mode, 8)

    @property
    def is_tree(self) -> bool:
        return stat.S_ISDIR(self.mode_int)

    @property
    def is_gitlink(self) -> bool:
        return S_ISGITLINK(self.mode_int)

    def in_path(self, path: str) -> str:
        """Return the entry's name joined onto a parent path."""
        if not path:
            return self.name
        return posixpath.join(path, self.name)

    def __str__(self) -> str:
        return f"{self.mode} {self.sha} {self.name}"


def parse_tree(text: bytes) -> list[TreeEntry]:
    """Parse a tree payload.

    Each record is ``<mode> <name>\\0`` followed by a 20 byte digest; the
    next record starts right after the digest.

    Args:
      text: Serialized text to parse
    Returns: list of TreeEntry, in payload order
    Raises:
      MalformedObject: if the object was malformed in some way
    """
    entries = []
    count = 0
    length = len(text)
    while count < length:
        name_end = text.find(b"\0", count)
        if name_end < 0:
            raise MalformedObject(f"Tree entry at offset {count} is not terminated")
        mode_text, sep, name = text[count:name_end].partition(b" ")
        if not sep or not mode_text or not name:
            raise MalformedObject(
                f"Invalid tree entry at offset {count}: {text[count:name_end]!r}"
            )
        if not _MODE_RE.fullmatch(mode_text):
            raise MalformedObject(f"Invalid mode {mode_text!r}")
        count = name_end + 1 + RAW_SHA_LENGTH
        sha = text[name_end + 1 : count]
        if len(sha) != RAW_SHA_LENGTH:
            raise MalformedObject("Sha has invalid length")
        entries.append(
            TreeEntry(
                name.decode("utf-8", "replace"),
                mode_text.decode("ascii"),
                sha_to_hex(sha),
            )
        )
    return entries


def serialize_tree(items: Iterable[tuple[str, str, str]]) -> Iterator[bytes]:
    """Serialize (name, mode, sha) items as tree payload chunks."""
    for name, mode, sha in items:
        yield (
            mode.encode("ascii")
            + b" "
            + name.encode("utf-8")
            + b"\0"
            + binascii.unhexlify(sha)
        )


class Tree(ShaFile):
    """A tree: an ordered directory listing."""

    kind = ObjectKind.TREE
    not_type_error = NotTreeError

    def __init__(self, entries: Iterable[TreeEntry] = ()) -> None:
        self.entries = list(entries)

    @classmethod
    def _deserialize(cls, payload: bytes) -> "Tree":
        return cls(parse_tree(payload))

    def __iter__(self) -> Iterator[TreeEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, name: str) -> TreeEntry:
        for entry in self.entries:
            if entry.name == name:
                return entry
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return any(entry.name == name for entry in self.entries)

    def as_raw_string(self) -> bytes:
        return b"".join(serialize_tree(self.entries))


OBJECT_CLASSES = (
    Commit,
    Tree,
    Blob,
)

_TYPE_MAP: dict[ObjectKind, type[ShaFile]] = {cls.kind: cls for cls in OBJECT_CLASSES}


def decode_object(raw: RawObject) -> ShaFile:
    """Decode a raw object into a Blob, Commit or Tree."""
    return _TYPE_MAP[raw.kind].from_raw(raw)
