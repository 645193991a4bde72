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
Docker collaborator: builds an image from a prepared build context.
"""
from typing import List, Optional

from .process_runner import ProcessRunner


class DockerBuilder:
    """
    Wraps `docker build`.
    """

    def __init__(self, docker_binary: str = "docker", runner: Optional[ProcessRunner] = None):
        self.docker = docker_binary
        self.runner = runner or ProcessRunner(name="docker")

    def build_command(self, tag: Optional[str] = None) -> List[str]:
        command = [self.docker, "build"]
        if tag:
            command += ["-t", tag]
        command.append(".")
        return command

    def build(self, context_dir: str, tag: Optional[str] = None):
        """
        Builds the Dockerfile found in the context directory.

        Args:
            context_dir: Directory holding the Dockerfile and the binaries.
            tag: Optional `name[:tag]` for the resulting image.

        Raises:
            ProcessFailedError: If `docker build` fails.
        """
        self.runner.run(self.build_command(tag), working_dir=context_dir)
