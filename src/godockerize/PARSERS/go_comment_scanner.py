# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Lexer that finds the comments of a Go source file.

Only comments are produced. String, raw string and rune literals are skipped so
that comment markers inside them are not mistaken for comments.
"""
import bisect
from dataclasses import dataclass
from typing import Iterator, List

from ..MODELS.directive import SourcePosition
from ..UTILS.errors import SourceReadError, SourceScanError


@dataclass
class Comment:
    """A single `//` or `/* */` comment and where it starts."""

    text: str
    position: SourcePosition


class GoCommentScanner:
    """
    Scans Go source text for comments, in source order.
    """

    def scan_file(self, path: str) -> List[Comment]:
        """
        Reads a Go file and returns its comments.

        Args:
            path: Path to the `.go` file.

        Returns:
            List of comments in source order.

        Raises:
            SourceReadError: If the file cannot be read.
            SourceScanError: If the file is not valid UTF-8 or a comment or literal is unterminated.
        """
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise SourceReadError(path, e.strerror or str(e)) from e
        try:
            content = data.decode("utf-8")
        except UnicodeDecodeError as e:
            # Everything before e.start decoded cleanly
            prefix = data[:e.start].decode("utf-8")
            line = prefix.count("\n") + 1
            column = len(prefix) - (prefix.rfind("\n") + 1) + 1
            position = SourcePosition(filename=path, line=line, column=column)
            raise SourceScanError(position, "illegal UTF-8 encoding") from e
        return self.scan_string(content, filename=path)

    def scan_string(self, content: str, filename: str = "<string>") -> List[Comment]:
        """
        Returns the comments of Go source text.

        Args:
            content: Go source code.
            filename: Name used in positions and error messages.

        Returns:
            List of comments in source order.

        Raises:
            SourceScanError: On an unterminated comment or literal.
        """
        return list(self._iter_comments(content, filename))

    def _iter_comments(self, content: str, filename: str) -> Iterator[Comment]:
        line_starts = [0]
        for i, ch in enumerate(content):
            if ch == "\n":
                line_starts.append(i + 1)

        def position(offset: int) -> SourcePosition:
            line = bisect.bisect_right(line_starts, offset)
            return SourcePosition(
                filename=filename, line=line, column=offset - line_starts[line - 1] + 1
            )

        i = 0
        n = len(content)
        while i < n:
            ch = content[i]
            if ch == "/" and content.startswith("//", i):
                end = content.find("\n", i)
                if end == -1:
                    end = n
                yield Comment(text=content[i:end].replace("\r", ""), position=position(i))
                i = end
            elif ch == "/" and content.startswith("/*", i):
                end = content.find("*/", i + 2)
                if end == -1:
                    raise SourceScanError(position(i), "comment not terminated")
                yield Comment(text=content[i:end + 2].replace("\r", ""), position=position(i))
                i = end + 2
            elif ch == "`":
                end = content.find("`", i + 1)
                if end == -1:
                    raise SourceScanError(position(i), "raw string literal not terminated")
                i = end + 1
            elif ch == '"' or ch == "'":
                i = self._skip_quoted(content, i, position)
            else:
                i += 1

    @staticmethod
    def _skip_quoted(content: str, start: int, position) -> int:
        """
        Skips an interpreted string or rune literal and returns the offset after it.
        """
        quote = content[start]
        kind = "string literal" if quote == '"' else "rune literal"
        i = start + 1
        n = len(content)
        while i < n:
            ch = content[i]
            if ch == "\\":
                i += 2
                continue
            if ch == "\n":
                break
            if ch == quote:
                return i + 1
            i += 1
        raise SourceScanError(position(start), f"{kind} not terminated")
