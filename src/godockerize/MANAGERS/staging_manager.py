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
Staging directory holding the Dockerfile and binaries of one build.
"""
import os
import shutil
import tempfile
from typing import Optional

STAGING_PREFIX = "godockerize"


class StagingDirectory:
    """
    A private temporary directory that exists for the duration of a `with` block.
    It is removed when the block exits, whether or not an error was raised.
    """

    def __init__(self, parent_dir: Optional[str] = None):
        """
        Args:
            parent_dir: Where to create the directory. Defaults to the system temp dir.
        """
        self.parent_dir = parent_dir
        self.path: Optional[str] = None

    def __enter__(self) -> "StagingDirectory":
        self.path = tempfile.mkdtemp(prefix=STAGING_PREFIX, dir=self.parent_dir)
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()
        return False

    def cleanup(self):
        """Removes the directory and everything in it."""
        if self.path and os.path.exists(self.path):
            shutil.rmtree(self.path)
        self.path = None

    def write_file(self, name: str, content: str) -> str:
        """
        Writes a text file into the staging directory.

        Args:
            name: File name relative to the staging directory.
            content: File content.

        Returns:
            Full path of the written file.
        """
        if self.path is None:
            raise RuntimeError("staging directory is not open")
        target = os.path.join(self.path, name)
        with open(target, "w") as f:
            f.write(content)
        return target
