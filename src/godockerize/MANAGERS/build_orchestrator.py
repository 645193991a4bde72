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
Orchestration of a complete build: resolve, extract, aggregate, render, compile, build.
"""
from typing import Iterable, List, Optional, Sequence

from ..BUILDERS.config_aggregator import ConfigAggregator
from ..BUILDERS.dockerfile_renderer import DockerfileRenderer
from ..MODELS.image_definition import ImageDefinition
from ..MODELS.package_spec import PackageSpec
from ..PARSERS.directive_parser import DirectiveExtractor
from ..RUNNERS.docker_builder import DockerBuilder
from ..RUNNERS.go_toolchain import GoToolchain
from .staging_manager import StagingDirectory

DEFAULT_BASE_IMAGE = "alpine:3.6"
DOCKERFILE_NAME = "Dockerfile"


class BuildOrchestrator:
    """
    Runs the build stages strictly in sequence. The first error stops the build;
    the staging directory is removed on every exit path.
    """

    def __init__(self,
                 toolchain: Optional[GoToolchain] = None,
                 docker: Optional[DockerBuilder] = None,
                 staging_parent: Optional[str] = None):
        """
        Initializes the orchestrator.

        :param toolchain: Go toolchain used for resolution and compilation.
        :param docker: Image builder.
        :param staging_parent: Parent directory for the staging directory.
        """
        self.toolchain = toolchain or GoToolchain()
        self.docker = docker or DockerBuilder()
        self.staging_parent = staging_parent
        self.extractor = DirectiveExtractor()
        self.aggregator = ConfigAggregator()
        self.renderer = DockerfileRenderer()

    def resolve(self, package_names: Iterable[str]) -> List[PackageSpec]:
        """
        Resolves package names in command line order.
        """
        return [self.toolchain.resolve(name) for name in package_names]

    def generate(self,
                 packages: Sequence[PackageSpec],
                 base_image: str = DEFAULT_BASE_IMAGE,
                 env: Iterable[str] = ()) -> ImageDefinition:
        """
        Extracts the directives of the packages and renders the Dockerfile.

        :param packages: Resolved packages; the first one is the entrypoint.
        :param base_image: Image for the FROM instruction.
        :param env: Extra ENV tokens.
        :return: The rendered image definition.
        """
        directives = self.extractor.extract_all(packages)
        config = self.aggregator.aggregate(directives, seed_env=env)
        return self.renderer.render(config, packages, base_image)

    def build(self,
              package_names: Sequence[str],
              base_image: str = DEFAULT_BASE_IMAGE,
              env: Iterable[str] = (),
              tag: Optional[str] = None,
              dry_run: bool = False) -> ImageDefinition:
        """
        Builds a Docker image from Go packages.

        :param package_names: Package names; the first one becomes the entrypoint.
        :param base_image: Image for the FROM instruction.
        :param env: Extra ENV tokens.
        :param tag: Optional image name and tag.
        :param dry_run: Only print the generated Dockerfile.
        :return: The rendered image definition.
        """
        if not package_names:
            raise ValueError("at least one package is required")

        with StagingDirectory(parent_dir=self.staging_parent) as staging:
            packages = self.resolve(package_names)
            definition = self.generate(packages, base_image=base_image, env=env)

            print("godockerize: Generated Dockerfile:")
            print(definition.display(), end="")

            if dry_run:
                return definition

            staging.write_file(DOCKERFILE_NAME, definition.to_dockerfile())

            for package in packages:
                print(f"godockerize: Building Go binary {package.binary_name}...")
                self.toolchain.compile(package, staging.path)

            print("godockerize: Building Docker image...")
            self.docker.build(staging.path, tag=tag)

        return definition
