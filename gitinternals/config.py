# config.py -- Runtime settings for reading an object store
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

"""Runtime settings for reading an object store.

Settings come from keyword arguments or from the environment:

``GITINTERNALS_ON_MISSING_OBJECT``
    ``fail`` (default) or ``emit_partial_path``; see :class:`MissingObjectPolicy`.
``GITINTERNALS_VERIFY_SIZE``
    Set to ``0``, ``false`` or ``no`` to accept objects whose header size
    does not match the payload length.
"""

__all__ = [
    "InspectorConfig",
    "MissingObjectPolicy",
]

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Optional

ON_MISSING_OBJECT_ENV = "GITINTERNALS_ON_MISSING_OBJECT"
VERIFY_SIZE_ENV = "GITINTERNALS_VERIFY_SIZE"

_FALSE_VALUES = ("0", "false", "no", "off")


class MissingObjectPolicy(Enum):
    """What a tree walk does when an entry's object file is absent."""

    #: Raise ObjectNotFound.
    FAIL = "fail"
    #: Yield the path built so far as if the entry were a file.
    EMIT_PARTIAL_PATH = "emit_partial_path"

    @classmethod
    def parse(cls, value: str) -> "MissingObjectPolicy":
        """Parse a policy name, accepting dashes in place of underscores.

        Raises:
          ValueError: if the name is unknown
        """
        try:
            return cls(value.strip().lower().replace("-", "_"))
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise ValueError(
                f"Unknown missing object policy {value!r} (expected one of {choices})"
            ) from None


@dataclass(frozen=True)
class InspectorConfig:
    """Settings shared by the object store and the graph walkers."""

    on_missing_object: MissingObjectPolicy = MissingObjectPolicy.FAIL
    verify_size: bool = True

    @classmethod
    def from_environ(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "InspectorConfig":
        """Build a configuration from environment variables.

        Args:
          environ: Mapping to read from, defaults to ``os.environ``
        Returns: InspectorConfig with unset variables left at their defaults
        """
        if environ is None:
            environ = os.environ
        policy = MissingObjectPolicy.FAIL
        value = environ.get(ON_MISSING_OBJECT_ENV)
        if value:
            policy = MissingObjectPolicy.parse(value)
        verify_size = environ.get(VERIFY_SIZE_ENV, "1").lower() not in _FALSE_VALUES
        return cls(on_missing_object=policy, verify_size=verify_size)
