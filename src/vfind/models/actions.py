"""
Action data models for vfind.

Actions are not part of the predicate expression: they are collected while the
arguments are scanned and run once, in registration order, after traversal has
produced the complete match list.
"""

from typing import Annotated, List, Literal, Union
from pydantic import BaseModel, ConfigDict, Field


PLACEHOLDER = "{}"


class PrintAction(BaseModel):
    """Print matches separated by newlines."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["print"] = "print"


class Print0Action(BaseModel):
    """Print matches separated by NUL characters."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["print0"] = "print0"


class DeleteAction(BaseModel):
    """Remove every match, deepest paths first."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["delete"] = "delete"


class ExecAction(BaseModel):
    """
    Run an external command for the matches.

    Attributes:
        command: Argument fragments; each ``{}`` fragment stands for the match
        batch: True for ``-exec ... +`` (one invocation with every match),
            False for ``-exec ... ;`` (one invocation per match)
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["exec"] = "exec"
    command: List[str] = Field(default_factory=list)
    batch: bool = False

    def render(self, matches: List[str]) -> str:
        """
        Compose the command line for a list of matches.

        Each placeholder fragment is replaced by all of ``matches`` in order,
        then every fragment is wrapped in double quotes. Embedded quotes are
        not escaped.
        """
        parts: List[str] = []
        for fragment in self.command:
            if fragment == PLACEHOLDER:
                parts.extend(matches)
            else:
                parts.append(fragment)
        return " ".join(f'"{part}"' for part in parts)


Action = Annotated[
    Union[PrintAction, Print0Action, DeleteAction, ExecAction],
    Field(discriminator="kind"),
]
