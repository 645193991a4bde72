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
Rendering of a build configuration into Dockerfile instructions.
"""
from typing import Sequence

from jinja2 import Environment, StrictUndefined

from ..MODELS.build_config import BuildConfig
from ..MODELS.image_definition import ImageDefinition
from ..MODELS.package_spec import PackageSpec

EDGE_SUFFIX = "@edge"
EDGE_REPOSITORIES = (
    "http://dl-cdn.alpinelinux.org/alpine/edge/main",
    "http://dl-cdn.alpinelinux.org/alpine/edge/community",
)
BINARY_DIR = "/usr/local/bin"
INIT_PROCESS = "/sbin/tini"

# Instruction order is fixed: stable layers first, binaries last.
DOCKERFILE_TEMPLATE = r"""
FROM {{ base }}
{% if edge %}
RUN echo -e "{% for repo in edge_repositories %}@edge {{ repo }}{% if not loop.last %}\n{% endif %}{% endfor %}" >> /etc/apk/repositories
{% endif %}
{% if install %}
RUN apk add --no-cache {{ install | join(' ') }}
{% endif %}
{% for command in run %}
RUN {{ command }}
{% endfor %}
{% if env %}
ENV {{ env | join(' ') }}
{% endif %}
{% if expose %}
EXPOSE {{ expose | join(' ') }}
{% endif %}
{% if user %}
RUN addgroup -S {{ user.name }} && adduser -S -G {{ user.name }} -h /home/{{ user.name }} {{ user.name }}
{% for directory in user.directories %}
RUN mkdir -p {{ directory }} && chown -R {{ user.name }}:{{ user.name }} {{ directory }}
{% endfor %}
USER {{ user.name }}
{% endif %}
ENTRYPOINT ["{{ init_process }}", "--", "{{ binary_dir }}/{{ entrypoint }}"]
{% for binary in binaries %}
ADD {{ binary }} {{ binary_dir }}/
{% endfor %}
"""

class DockerfileRenderer:
    """
    Renders image definitions. Rendering has no side effects and the same
    input always yields the same instructions.
    """
    def __init__(self):
        env = Environment(
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            autoescape=False,
        )
        self.template = env.from_string(DOCKERFILE_TEMPLATE)

    @staticmethod
    def needs_edge_repositories(install: Sequence[str]) -> bool:
        """
        True if any install token is tagged for the Alpine edge channel.
        """
        return any(token.endswith(EDGE_SUFFIX) for token in install)

    def render(self, config: BuildConfig, packages: Sequence[PackageSpec], base_image: str) -> ImageDefinition:
        """
        Renders the Dockerfile instructions.

        :param config: The merged build configuration.
        :param packages: Resolved packages in command line order; the first is the entrypoint.
        :param base_image: Image for the FROM instruction.
        :return: The image definition.
        :raises ValueError: If no package is given.
        """
        if not packages:
            raise ValueError("at least one package is required to render a Dockerfile")

        install = config.sorted_install()
        content = self.template.render(
            base=base_image,
            edge=self.needs_edge_repositories(install),
            edge_repositories=EDGE_REPOSITORIES,
            install=install,
            run=list(config.run),
            env=config.sorted_env(),
            expose=config.sorted_expose(),
            user=config.user,
            init_process=INIT_PROCESS,
            binary_dir=BINARY_DIR,
            entrypoint=packages[0].binary_name,
            binaries=[package.binary_name for package in packages],
        )
        # Only "\n" separates instructions; other line breaks belong to the command text
        return ImageDefinition(instructions=[line for line in content.split("\n") if line])
