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
Shared fixtures: on-disk Go packages and stand-ins for the go and docker tools.
"""
import os
import pytest

from godockerize.MODELS.package_spec import PackageSpec
from godockerize.RUNNERS.docker_builder import DockerBuilder
from godockerize.RUNNERS.go_toolchain import GoToolchain
from godockerize.UTILS.errors import PackageResolutionError, ProcessFailedError


class FakeToolchain(GoToolchain):
    """Resolves from a fixed table and writes empty binaries instead of compiling."""

    def __init__(self, packages, fail_on=None):
        self.packages = {p.import_path: p for p in packages}
        self.fail_on = fail_on
        self.resolved = []
        self.compiled = []

    def resolve(self, name):
        self.resolved.append(name)
        if name not in self.packages:
            raise PackageResolutionError(name, f"cannot find package \"{name}\"")
        return self.packages[name]

    def compile(self, package, output_dir):
        self.compiled.append(package.import_path)
        if package.import_path == self.fail_on:
            raise ProcessFailedError(["go", "build", package.import_path], 2)
        path = os.path.join(output_dir, package.binary_name)
        with open(path, "w") as f:
            f.write("binary")
        return path


class FakeDocker(DockerBuilder):
    """Records each build together with the staged files it saw."""

    def __init__(self, fail=False):
        super().__init__()
        self.fail = fail
        self.builds = []

    def build(self, context_dir, tag=None):
        with open(os.path.join(context_dir, "Dockerfile")) as f:
            dockerfile = f.read()
        self.builds.append({
            "context_dir": context_dir,
            "tag": tag,
            "files": sorted(os.listdir(context_dir)),
            "dockerfile": dockerfile,
        })
        if self.fail:
            raise ProcessFailedError(self.build_command(tag), 1)


@pytest.fixture
def make_package(tmp_path):
    """Writes Go files for an import path and returns the matching PackageSpec."""
    def _make(import_path, files=None):
        files = files or {}
        directory = tmp_path / "gopath" / "src" / import_path
        directory.mkdir(parents=True, exist_ok=True)
        for name, content in files.items():
            (directory / name).write_text(content)
        return PackageSpec(
            import_path=import_path,
            directory=str(directory),
            go_files=sorted(files),
        )
    return _make


@pytest.fixture
def staging_parent(tmp_path):
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def fake_toolchain():
    return FakeToolchain


@pytest.fixture
def fake_docker():
    return FakeDocker
