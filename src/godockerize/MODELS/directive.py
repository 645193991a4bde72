"""
Models for the build directives embedded in Go source comments.
"""
from enum import Enum
from typing import List, Literal, Union
from pydantic import BaseModel

class DirectiveKind(str, Enum):
    """
    Keywords accepted after the `//docker:` marker.
    """
    ENV = "env"
    EXPOSE = "expose"
    INSTALL = "install"
    RUN = "run"
    USER = "user"

class SourcePosition(BaseModel):
    """
    Location of a comment inside a Go source file.
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

class Directive(BaseModel):
    """
    Base for every directive; remembers where it was written.
    """
    position: SourcePosition

class EnvDirective(Directive):
    kind: Literal[DirectiveKind.ENV] = DirectiveKind.ENV
    tokens: List[str]

class ExposeDirective(Directive):
    kind: Literal[DirectiveKind.EXPOSE] = DirectiveKind.EXPOSE
    tokens: List[str]

class InstallDirective(Directive):
    kind: Literal[DirectiveKind.INSTALL] = DirectiveKind.INSTALL
    tokens: List[str]

class RunDirective(Directive):
    """
    A shell command, kept verbatim.
    """
    kind: Literal[DirectiveKind.RUN] = DirectiveKind.RUN
    command: str

class UserDirective(Directive):
    """
    The unprivileged user the image switches to, plus directories it must own.
    """
    kind: Literal[DirectiveKind.USER] = DirectiveKind.USER
    name: str
    directories: List[str] = []

AnyDirective = Union[EnvDirective, ExposeDirective, InstallDirective, RunDirective, UserDirective]
