"""
Parsers for .env files used as extra ENV seeds.
"""
from typing import Dict, List
from dotenv import dotenv_values

class EnvParser:
    """
    Parser for .env files.
    """
    @staticmethod
    def parse(env_path: str) -> Dict[str, str]:
        """
        Parses an .env file from a path.

        Args:
            env_path (str): Path to the .env file.

        Returns:
            Dict[str, str]: Variables that have a value, in file order.
        """
        values = dotenv_values(env_path)
        return {key: value for key, value in values.items() if value is not None}

    @staticmethod
    def to_tokens(env: Dict[str, str]) -> List[str]:
        """
        Converts variables to `KEY=VALUE` tokens for the ENV instruction.
        """
        return [f"{key}={value}" for key, value in env.items()]

    @classmethod
    def parse_tokens(cls, env_path: str) -> List[str]:
        return cls.to_tokens(cls.parse(env_path))
