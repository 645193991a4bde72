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
Synchronous execution of external tools.
"""
import subprocess
from typing import List, Dict, Optional

from ..UTILS.errors import ProcessFailedError

# Exit status reported when the executable itself is missing
COMMAND_NOT_FOUND = 127

class ProcessRunner:
    """
    Runs an external tool to completion.
    """
    def __init__(self, name: str):
        """
        Initializes the process runner.

        Args:
            name (str): Identifier used in console messages.
        """
        self.name = name

    def run(self,
            command: List[str],
            env: Optional[Dict[str, str]] = None,
            working_dir: Optional[str] = None):
        """
        Runs a command, streaming its output straight to the console.

        Args:
            command (List[str]): Command and arguments to execute.
            env (Optional[Dict[str, str]]): Complete environment for the process.
                The parent environment is inherited when None.
            working_dir (Optional[str]): Directory to run the process in.

        Raises:
            ProcessFailedError: If the process exits with a non-zero status.
        """
        # stdout/stderr are inherited so the tool's own output reaches the user unchanged
        try:
            result = subprocess.run(command, env=env, cwd=working_dir, shell=False)
        except FileNotFoundError as e:
            print(f"[{self.name}] Failed to start: {e}")
            raise ProcessFailedError(command, COMMAND_NOT_FOUND, stderr=str(e)) from e
        if result.returncode != 0:
            raise ProcessFailedError(command, result.returncode)

    def capture(self,
                command: List[str],
                env: Optional[Dict[str, str]] = None,
                working_dir: Optional[str] = None) -> str:
        """
        Runs a command and returns its standard output.

        Args:
            command (List[str]): Command and arguments to execute.
            env (Optional[Dict[str, str]]): Environment for the process.
            working_dir (Optional[str]): Directory to run the process in.

        Returns:
            str: Captured standard output.

        Raises:
            ProcessFailedError: If the process exits with a non-zero status.
                Its captured stderr is kept on the error.
        """
        try:
            result = subprocess.run(
                command,
                env=env,
                cwd=working_dir,
                capture_output=True,
                text=True,
                shell=False,
            )
        except FileNotFoundError as e:
            raise ProcessFailedError(command, COMMAND_NOT_FOUND, stderr=str(e)) from e
        if result.returncode != 0:
            raise ProcessFailedError(command, result.returncode, stderr=result.stderr)
        return result.stdout
