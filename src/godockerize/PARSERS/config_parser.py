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
Parsers for the optional `godockerize.yml` project config file.
"""
import os
from typing import Optional

import yaml
from pydantic import ValidationError

from ..MODELS.project_config import ProjectConfig
from ..UTILS.errors import ConfigError

DEFAULT_CONFIG_FILE = "godockerize.yml"

class ConfigParser:
    """
    Parser for project config files.
    """
    def load(self, config_path: Optional[str] = None) -> ProjectConfig:
        """
        Loads a config file. A missing file yields the empty configuration.

        :param config_path: Path to the config file. Defaults to `godockerize.yml`.
        :return: Parsed configuration.
        :raises ConfigError: If the file is not valid YAML or has unexpected values.
        """
        path = config_path or DEFAULT_CONFIG_FILE
        if not os.path.exists(path):
            return ProjectConfig()
        with open(path, 'r') as f:
            content = f.read()
        try:
            return self.parse_from_string(content)
        except ConfigError as e:
            raise ConfigError(f"{path}: {e}") from e

    def parse_from_string(self, content: str) -> ProjectConfig:
        """
        Parses config file content.

        :param content: YAML content.
        :return: Parsed configuration.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML: {e}") from e
        if not data:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("top level must be a mapping")

        env = data.get('env') or []
        if isinstance(env, dict):
            # Mapping form: {KEY: VALUE}
            env = [f"{k}={v}" for k, v in env.items()]
        elif isinstance(env, str):
            env = [env]
        data['env'] = env

        try:
            return ProjectConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigError(str(e)) from e
