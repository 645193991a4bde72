"""
Models for rendered image definitions.
"""
from typing import List
from pydantic import BaseModel

class ImageDefinition(BaseModel):
    """
    The ordered Dockerfile instructions for one build.
    """
    instructions: List[str] = []

    def to_dockerfile(self) -> str:
        """
        Returns the Dockerfile text, one instruction per line.
        """
        return "".join(f"{line}\n" for line in self.instructions)

    def display(self) -> str:
        """
        Returns the instructions indented for console output.
        """
        return "".join(f"  {line}\n" for line in self.instructions)
