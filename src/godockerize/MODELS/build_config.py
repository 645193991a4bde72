"""
Models for the aggregated build configuration.
"""
from typing import List, Iterable, Optional
from pydantic import BaseModel

# mailcap provides /etc/mime.types, tini is the entrypoint's init process
BASELINE_INSTALL = ("ca-certificates", "mailcap", "tini")

def _add_unique(target: List[str], tokens: Iterable[str]):
    for token in tokens:
        if token not in target:
            target.append(token)

class UserRecord(BaseModel):
    """
    The single user an image may switch to.
    """
    name: str
    directories: List[str] = []

class BuildConfig(BaseModel):
    """
    Everything gathered from directives and command line seeds for one build.

    `env`, `expose` and `install` behave as sets: a token is stored once, in the
    order it was first seen. `run` keeps every command in encounter order.
    """
    env: List[str] = []
    expose: List[str] = []
    install: List[str] = []
    run: List[str] = []
    user: Optional[UserRecord] = None

    @classmethod
    def seeded(cls, env: Iterable[str] = ()) -> "BuildConfig":
        """
        Creates a configuration holding the baseline install set and the given ENV seeds.

        :param env: Extra `KEY=VALUE` tokens from the command line or config files.
        :return: A fresh BuildConfig.
        """
        config = cls()
        config.add_install(BASELINE_INSTALL)
        config.add_env(env)
        return config

    def add_env(self, tokens: Iterable[str]):
        _add_unique(self.env, tokens)

    def add_expose(self, tokens: Iterable[str]):
        _add_unique(self.expose, tokens)

    def add_install(self, tokens: Iterable[str]):
        _add_unique(self.install, tokens)

    def add_run(self, command: str):
        self.run.append(command)

    def sorted_env(self) -> List[str]:
        return sorted(set(self.env))

    def sorted_expose(self) -> List[str]:
        return sorted(set(self.expose))

    def sorted_install(self) -> List[str]:
        return sorted(set(self.install))
