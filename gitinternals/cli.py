#!/usr/bin/env python3
#
# gitinternals - Inspect the loose objects of a git directory
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

"""Simple command-line interface to gitinternals.

Each command reads a git directory (``--git-dir``, ``$GIT_DIR`` or
``.git``) and writes to stdout; failures are logged as ``error: ...``
and give exit status 1.
"""

import argparse
import logging
import os
import signal
import sys
import types
from collections.abc import Sequence
from typing import ClassVar, Optional, TextIO

from . import porcelain
from .config import InspectorConfig, MissingObjectPolicy
from .errors import FileFormatException, InvalidObjectId, ObjectNotFound, RefNotFound
from .log_utils import default_logging_config

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

logger = logging.getLogger(__name__)

_ERRORS = (FileFormatException, InvalidObjectId, ObjectNotFound, RefNotFound)


def signal_int(signal: int, frame: Optional[types.FrameType]) -> None:
    """Handle interrupt signal by exiting.

    Args:
      signal: Signal number
      frame: Current stack frame
    """
    sys.exit(1)


class Command:
    """A gitinternals subcommand."""

    #: Name the command is invoked as.
    name: ClassVar[str]

    def __init__(
        self,
        git_dir: str,
        config: InspectorConfig,
        outstream: Optional[TextIO] = None,
    ) -> None:
        self.git_dir = git_dir
        self.config = config
        self.outstream = outstream if outstream is not None else sys.stdout

    def run(self, args: Sequence[str]) -> Optional[int]:
        """Run the command."""
        raise NotImplementedError(self.run)


class cmd_cat_file(Command):
    """Show the type and contents of an object."""

    name = "cat-file"

    @override
    def run(self, args: Sequence[str]) -> None:
        parser = argparse.ArgumentParser(prog=self.name)
        parser.add_argument("sha", help="Hash of the object to show")
        parsed_args = parser.parse_args(args)
        porcelain.cat_file(
            self.git_dir, parsed_args.sha, outstream=self.outstream, config=self.config
        )


class cmd_list_branches(Command):
    """List branches, marking the current one."""

    name = "list-branches"

    @override
    def run(self, args: Sequence[str]) -> None:
        parser = argparse.ArgumentParser(prog=self.name)
        parser.parse_args(args)
        porcelain.list_branches(self.git_dir, outstream=self.outstream)


class cmd_log(Command):
    """Show the first-parent history of a branch."""

    name = "log"

    @override
    def run(self, args: Sequence[str]) -> None:
        parser = argparse.ArgumentParser(prog=self.name)
        parser.add_argument(
            "branch", nargs="?", help="Branch to show; defaults to HEAD"
        )
        parser.add_argument(
            "-n",
            "--max-count",
            type=int,
            dest="max_entries",
            help="Limit the number of commits to output",
        )
        parsed_args = parser.parse_args(args)
        porcelain.log(
            self.git_dir,
            parsed_args.branch,
            outstream=self.outstream,
            max_entries=parsed_args.max_entries,
            config=self.config,
        )


class cmd_commit_tree(Command):
    """List every file in a commit or tree."""

    name = "commit-tree"

    @override
    def run(self, args: Sequence[str]) -> None:
        parser = argparse.ArgumentParser(prog=self.name)
        parser.add_argument("sha", help="Hash of a commit or tree")
        parser.add_argument(
            "--on-missing-object",
            type=MissingObjectPolicy.parse,
            metavar="{" + ",".join(p.value for p in MissingObjectPolicy) + "}",
            help="Fail, or list the path, when an object below the tree is missing",
        )
        parsed_args = parser.parse_args(args)
        porcelain.commit_tree(
            self.git_dir,
            parsed_args.sha,
            outstream=self.outstream,
            on_missing_object=parsed_args.on_missing_object,
            config=self.config,
        )


commands: dict[str, type[Command]] = {
    cls.name: cls
    for cls in (cmd_cat_file, cmd_commit_tree, cmd_list_branches, cmd_log)
}


def main(argv: Optional[Sequence[str]] = None) -> Optional[int]:
    """Main entry point for the gitinternals CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code or None
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(
        prog="gitinternals",
        description="Inspect the loose objects of a git directory",
    )
    parser.add_argument(
        "--git-dir",
        default=os.environ.get("GIT_DIR", ".git"),
        help="Path to the git directory (default: $GIT_DIR or .git)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every object read"
    )
    parser.add_argument(
        "command",
        nargs="?",
        help=f"Command to run. Available: {', '.join(sorted(commands))}",
    )
    global_args, remaining = parser.parse_known_args(argv)

    if global_args.command is None:
        parser.print_help()
        return 1

    default_logging_config(verbose=global_args.verbose)

    try:
        cmd_kls = commands[global_args.command]
    except KeyError:
        logging.fatal("No such subcommand: %s", global_args.command)
        return 1

    try:
        config = InspectorConfig.from_environ()
    except ValueError as e:
        logger.error("error: %s", e)
        return 1

    try:
        return cmd_kls(global_args.git_dir, config).run(remaining)
    except _ERRORS as e:
        logger.error("error: %s", e)
        return 1


def _main() -> None:
    signal.signal(signal.SIGINT, signal_int)
    sys.exit(main())


if __name__ == "__main__":
    _main()
