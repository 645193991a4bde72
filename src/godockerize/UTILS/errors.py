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
Exception hierarchy shared by the scanning, aggregation and build stages.
"""
from typing import List, Optional

from ..MODELS.directive import SourcePosition


class GodockerizeError(Exception):
    """
    Base class for every error that aborts a godockerize invocation.
    """
    pass


class ConfigError(GodockerizeError):
    """Raised when the project config file cannot be read."""
    pass


class PackageResolutionError(GodockerizeError):
    """
    Raised when a package name cannot be resolved by the Go toolchain.
    """
    def __init__(self, package: str, detail: str):
        super().__init__(f"cannot resolve package {package}: {detail}")
        self.package = package
        self.detail = detail


class SourceReadError(GodockerizeError):
    """
    Raised when a Go source file cannot be opened or read.
    """
    def __init__(self, path: str, detail: str):
        super().__init__(f"{path}: cannot read source file: {detail}")
        self.path = path
        self.detail = detail


class SourceScanError(GodockerizeError):
    """
    Raised when a Go source file cannot be tokenized far enough to find its comments.
    """
    def __init__(self, position: SourcePosition, message: str):
        super().__init__(f"{position}: {message}")
        self.position = position


class DirectiveParseError(GodockerizeError):
    """
    Raised for a `//docker:` comment with an unknown keyword or no payload.
    """
    def __init__(self, position: SourcePosition, text: str):
        super().__init__(f"{position}: invalid docker comment: {text}")
        self.position = position
        self.text = text


class DuplicateUserError(GodockerizeError):
    """
    Raised when a second `user` directive is encountered.
    """
    def __init__(self, position: Optional[SourcePosition] = None):
        message = "user set twice"
        if position is not None:
            message = f"{position}: {message}"
        super().__init__(message)
        self.position = position


class ProcessFailedError(GodockerizeError):
    """
    Raised when an external tool exits with a non-zero status.
    """
    def __init__(self, command: List[str], returncode: int, stderr: str = ""):
        super().__init__(f"{command[0]} exited with status {returncode}: {' '.join(command)}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
