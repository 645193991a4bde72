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
Merging of directives and command line seeds into a single build configuration.
"""
from typing import Iterable

from ..MODELS.build_config import BuildConfig, UserRecord
from ..MODELS.directive import (
    AnyDirective,
    EnvDirective,
    ExposeDirective,
    InstallDirective,
    RunDirective,
    UserDirective,
)
from ..UTILS.errors import DuplicateUserError

class ConfigAggregator:
    """
    Folds directives into a BuildConfig seeded with the baseline packages and
    the command line ENV tokens.
    """
    def aggregate(self, directives: Iterable[AnyDirective], seed_env: Iterable[str] = ()) -> BuildConfig:
        """
        Builds the configuration for one invocation.

        :param directives: Directives in package order, then file and comment order.
        :param seed_env: Extra `KEY=VALUE` tokens.
        :return: The merged configuration.
        :raises DuplicateUserError: If more than one `user` directive is present.
        """
        config = BuildConfig.seeded(env=seed_env)
        for directive in directives:
            self.apply(config, directive)
        return config

    def apply(self, config: BuildConfig, directive: AnyDirective) -> BuildConfig:
        """
        Merges one directive into the configuration.
        """
        if isinstance(directive, EnvDirective):
            config.add_env(directive.tokens)
        elif isinstance(directive, ExposeDirective):
            config.add_expose(directive.tokens)
        elif isinstance(directive, InstallDirective):
            config.add_install(directive.tokens)
        elif isinstance(directive, RunDirective):
            config.add_run(directive.command)
        elif isinstance(directive, UserDirective):
            if config.user is not None:
                raise DuplicateUserError(directive.position)
            config.user = UserRecord(name=directive.name, directories=list(directive.directories))
        else:
            raise TypeError(f"Unsupported directive: {directive!r}")
        return config
