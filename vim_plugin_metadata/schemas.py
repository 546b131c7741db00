from pathlib import Path
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class StandaloneDocComment(_Node):
    """A doc block that isn't attached to any declaration."""

    kind: Literal["standalone_doc"] = "standalone_doc"
    doc: str


class Function(_Node):
    kind: Literal["function"] = "function"
    name: str
    args: List[str] = []
    modifiers: List[str] = []
    doc: Optional[str] = None


class Command(_Node):
    kind: Literal["command"] = "command"
    name: str
    modifiers: List[str] = []
    doc: Optional[str] = None


class Variable(_Node):
    kind: Literal["variable"] = "variable"
    name: str
    init_value_token: str
    doc: Optional[str] = None


class Flag(_Node):
    """A user-configurable setting with an (optional) default value."""

    kind: Literal["flag"] = "flag"
    name: str
    default_value_token: Optional[str] = None
    doc: Optional[str] = None


VimNode = Annotated[
    Union[StandaloneDocComment, Function, Command, Variable, Flag],
    Field(discriminator="kind"),
]


def node_doc(node) -> Optional[str]:
    """Return the doc text of any node variant."""
    if isinstance(node, (StandaloneDocComment, Function, Command, Variable, Flag)):
        return node.doc
    raise TypeError(f"Not a vim node: {node!r}")


class VimModule(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Optional[Path] = None
    doc: Optional[str] = None
    nodes: List[VimNode] = []


class VimPlugin(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: List[VimModule] = []
