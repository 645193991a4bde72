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
Parsers for `//docker:` directives found in Go comments.
"""
import os
from typing import Iterable, List, Optional

from ..MODELS.directive import (
    AnyDirective,
    DirectiveKind,
    EnvDirective,
    ExposeDirective,
    InstallDirective,
    RunDirective,
    UserDirective,
)
from ..MODELS.package_spec import PackageSpec
from ..UTILS.errors import DirectiveParseError
from .go_comment_scanner import Comment, GoCommentScanner

DIRECTIVE_PREFIX = "//docker:"

class DirectiveParser:
    """
    Turns a single comment into a directive.
    """
    def parse_comment(self, comment: Comment) -> Optional[AnyDirective]:
        """
        Parses a comment.

        Args:
            comment (Comment): A comment produced by the scanner.

        Returns:
            Optional[AnyDirective]: The directive, or None if the comment is not one.

        Raises:
            DirectiveParseError: If the keyword is unknown or the payload is missing.
        """
        if not comment.text.startswith(DIRECTIVE_PREFIX):
            return None

        keyword, sep, payload = comment.text[len(DIRECTIVE_PREFIX):].partition(" ")
        try:
            kind = DirectiveKind(keyword)
        except ValueError:
            raise DirectiveParseError(comment.position, comment.text) from None

        if not sep:
            raise DirectiveParseError(comment.position, comment.text)
        # A blank token list is a no-op; a blank command or user name is not
        if kind in (DirectiveKind.RUN, DirectiveKind.USER) and not payload.strip():
            raise DirectiveParseError(comment.position, comment.text)

        pos = comment.position
        if kind == DirectiveKind.ENV:
            return EnvDirective(position=pos, tokens=payload.split())
        if kind == DirectiveKind.EXPOSE:
            return ExposeDirective(position=pos, tokens=payload.split())
        if kind == DirectiveKind.INSTALL:
            return InstallDirective(position=pos, tokens=payload.split())
        if kind == DirectiveKind.RUN:
            return RunDirective(position=pos, command=payload)
        fields = payload.split()
        return UserDirective(position=pos, name=fields[0], directories=fields[1:])

class DirectiveExtractor:
    """
    Collects the directives of Go packages in file and comment order.
    """
    def __init__(self, scanner: Optional[GoCommentScanner] = None):
        """
        Initializes the extractor.

        :param scanner: Comment scanner to use. A default one is created if omitted.
        """
        self.scanner = scanner or GoCommentScanner()
        self.parser = DirectiveParser()

    def extract(self, package: PackageSpec) -> List[AnyDirective]:
        """
        Extracts the directives of every Go file of a package.

        :param package: The resolved package.
        :return: Directives in file order, then comment order.
        """
        directives = []
        for name in package.go_files:
            path = os.path.join(package.directory, name)
            for comment in self.scanner.scan_file(path):
                directive = self.parser.parse_comment(comment)
                if directive is not None:
                    directives.append(directive)
        return directives

    def extract_all(self, packages: Iterable[PackageSpec]) -> List[AnyDirective]:
        """
        Extracts directives from several packages, keeping package order.
        """
        directives = []
        for package in packages:
            directives.extend(self.extract(package))
        return directives
