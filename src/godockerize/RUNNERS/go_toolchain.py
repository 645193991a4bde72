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
Go toolchain collaborator: package resolution and static cross-compilation.
"""
import json
import os
import shutil
from typing import Dict, Optional

from ..MODELS.package_spec import PackageSpec
from ..UTILS.errors import PackageResolutionError, ProcessFailedError
from .process_runner import ProcessRunner

TARGET_OS = "linux"
TARGET_ARCH = "amd64"
BUILD_TAGS = "dist"


class GoToolchain:
    """
    Wraps the `go` command.

    Package names are resolved relative to the working directory, the same way
    `go build` would resolve them there.
    """

    def __init__(self, working_dir: Optional[str] = None, go_binary: str = "go",
                 runner: Optional[ProcessRunner] = None):
        """
        Initializes the toolchain wrapper.

        Args:
            working_dir: Directory package names are resolved from. Defaults to the
                current directory.
            go_binary: Name or path of the go executable.
            runner: Process runner to use.
        """
        self.working_dir = os.path.abspath(working_dir or os.getcwd())
        # Looked up once against the caller's PATH; the compile environment has no PATH
        self.go = shutil.which(go_binary) or go_binary
        self.runner = runner or ProcessRunner(name="go")
        self._go_env: Optional[Dict[str, str]] = None

    def resolve(self, name: str) -> PackageSpec:
        """
        Resolves a package name with `go list`.

        Args:
            name: Import path or relative package path (e.g. `./cmd/server`).

        Returns:
            The resolved package.

        Raises:
            PackageResolutionError: If the toolchain cannot load the package.
        """
        try:
            output = self.runner.capture([self.go, "list", "-json", name],
                                         working_dir=self.working_dir)
        except ProcessFailedError as e:
            raise PackageResolutionError(name, e.stderr.strip() or str(e)) from e

        try:
            info = json.loads(output)
        except json.JSONDecodeError as e:
            raise PackageResolutionError(name, f"unreadable go list output: {e}") from e

        if info.get("Error"):
            raise PackageResolutionError(name, info["Error"].get("Err", "unknown error"))

        return PackageSpec(
            import_path=info["ImportPath"],
            directory=info["Dir"],
            go_files=info.get("GoFiles") or [],
        )

    def go_env(self) -> Dict[str, str]:
        """
        Returns GOROOT and GOPATH as reported by `go env`.
        """
        if self._go_env is None:
            output = self.runner.capture([self.go, "env", "GOROOT", "GOPATH"],
                                         working_dir=self.working_dir)
            lines = output.splitlines() + ["", ""]
            self._go_env = {"GOROOT": lines[0].strip(), "GOPATH": lines[1].strip()}
        return self._go_env

    def build_environment(self) -> Dict[str, str]:
        """
        The complete environment handed to `go build`. Nothing from the caller's
        environment is passed through.
        """
        go_env = self.go_env()
        return {
            "GOARCH": TARGET_ARCH,
            "GOOS": TARGET_OS,
            "GOROOT": go_env["GOROOT"],
            "GOPATH": go_env["GOPATH"],
            "CGO_ENABLED": "0",
        }

    def compile(self, package: PackageSpec, output_dir: str) -> str:
        """
        Compiles a package into a static linux/amd64 executable.

        Args:
            package: The package to build.
            output_dir: Directory receiving the binary, named after the package.

        Returns:
            Path of the binary.

        Raises:
            ProcessFailedError: If `go build` fails.
        """
        output = os.path.join(output_dir, package.binary_name)
        command = [
            self.go, "build",
            "-buildmode", "exe",
            "-tags", BUILD_TAGS,
            "-a",
            "-o", output,
            package.import_path,
        ]
        self.runner.run(command, env=self.build_environment(), working_dir=self.working_dir)
        return output
