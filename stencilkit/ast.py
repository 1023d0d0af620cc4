"""Syntax tree produced by the template parser.

Literal expression values are plain Python ``str``, ``int``, ``float`` and
``bool``; identifiers, arrays and compound expressions have their own classes.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class WS:
    """Whitespace control of a tag: ``left`` for ``{%-``, ``right`` for ``-%}``."""

    left: bool = False
    right: bool = False


class MathOperator(enum.Enum):
    """Arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MODULO = "%"

    def __str__(self) -> str:
        return self.value


class LogicOperator(enum.Enum):
    """Comparison and boolean operators."""

    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    EQ = "=="
    NOT_EQ = "!="
    AND = "and"
    OR = "or"

    def __str__(self) -> str:
        return self.value


@dataclass
class Ident:
    """A variable reference such as ``user.name`` or ``items[0]``."""

    name: str


@dataclass
class Array:
    """An array literal; its items may carry filters."""

    items: list[Expr] = field(default_factory=list)


@dataclass
class FunctionCall:
    """A call to a filter or a global function with keyword arguments."""

    name: str
    args: dict[str, Expr] = field(default_factory=dict)


@dataclass
class MathExpr:
    """An arithmetic expression."""

    lhs: Expr
    rhs: Expr
    operator: MathOperator


@dataclass
class LogicExpr:
    """A comparison or boolean expression."""

    lhs: Expr
    rhs: Expr
    operator: LogicOperator


@dataclass
class StringConcat:
    """Values joined into a string with ``~``."""

    values: list[ExprVal] = field(default_factory=list)

    def to_template_string(self) -> str:
        """Return the concatenation written back in template syntax."""
        parts = []
        for value in self.values:
            if isinstance(value, str):
                parts.append(f"'{value}'")
            elif isinstance(value, Ident):
                parts.append(value.name)
            else:
                parts.append("unknown")
        return " ~ ".join(parts)


@dataclass
class In:
    """Checks whether ``lhs`` is contained in ``rhs``."""

    lhs: Expr
    rhs: Expr
    negated: bool = False


@dataclass
class Expr:
    """An expression value that may be negated and followed by filters."""

    val: ExprVal
    negated: bool = False
    filters: list[FunctionCall] = field(default_factory=list)

    @classmethod
    def new_negated(cls, val: ExprVal) -> Expr:
        """Create a negated expression without filters."""
        return cls(val, negated=True)

    @classmethod
    def with_filters(cls, val: ExprVal, filters: list[FunctionCall]) -> Expr:
        """Create an expression followed by ``filters``."""
        return cls(val, filters=list(filters))

    def has_default_filter(self) -> bool:
        """Whether the first filter is ``default``."""
        return bool(self.filters) and self.filters[0].name == "default"

    def is_marked_safe(self) -> bool:
        """Whether the last filter is ``safe``."""
        return bool(self.filters) and self.filters[-1].name == "safe"


@dataclass
class Test:
    """A test such as ``my_var is odd``."""

    __test__ = False

    ident: str
    name: str
    args: list[Expr] = field(default_factory=list)
    negated: bool = False


@dataclass
class FilterSection:
    """A filter applied to a whole section of content."""

    filter: FunctionCall
    body: list[Node] = field(default_factory=list)


@dataclass
class Set:
    """An assignment; ``global_`` marks ``set_global``."""

    key: str
    value: Expr
    global_: bool = False


@dataclass
class MacroCall:
    """A call to a namespaced macro, ``ns::name(...)``."""

    namespace: str
    name: str
    args: dict[str, Expr] = field(default_factory=dict)


@dataclass
class MacroDefinition:
    """A macro with its arguments (and optional defaults) and body."""

    name: str
    args: dict[str, Optional[Expr]] = field(default_factory=dict)
    body: list[Node] = field(default_factory=list)


@dataclass
class Block:
    """A named block that child templates may override."""

    name: str
    body: list[Node] = field(default_factory=list)


@dataclass
class Forloop:
    """A loop over values, or over key/value pairs when ``key`` is set."""

    value: str
    container: Expr
    body: list[Node] = field(default_factory=list)
    key: Optional[str] = None
    empty_body: Optional[list[Node]] = None


@dataclass
class If:
    """An if/elif chain and its optional else branch.

    ``conditions`` holds ``(ws, condition, body)`` tuples, the first for the
    ``if`` and the rest for each ``elif``; ``otherwise`` is ``(ws, body)``.
    """

    conditions: list[tuple[WS, Expr, list[Node]]] = field(default_factory=list)
    otherwise: Optional[tuple[WS, list[Node]]] = None


@dataclass
class Super:
    """A ``{{ super() }}`` call inside a block."""


@dataclass
class Text:
    """Literal text."""

    text: str


@dataclass
class VariableBlock:
    """A ``{{ ... }}`` tag."""

    ws: WS
    expr: Expr


@dataclass
class MacroDefinitionNode:
    """A ``{% macro %}...{% endmacro %}`` section."""

    start_ws: WS
    definition: MacroDefinition
    end_ws: WS


@dataclass
class Extends:
    """An ``{% extends "..." %}`` tag."""

    ws: WS
    name: str


@dataclass
class Include:
    """An ``{% include %}`` tag with its candidate templates."""

    ws: WS
    files: list[str]
    ignore_missing: bool = False


@dataclass
class ImportMacro:
    """An ``{% import "file" as namespace %}`` tag."""

    ws: WS
    file: str
    namespace: str


@dataclass
class SetNode:
    """A ``{% set %}`` or ``{% set_global %}`` tag."""

    ws: WS
    set: Set


@dataclass
class Raw:
    """The text between ``{% raw %}`` and ``{% endraw %}``."""

    start_ws: WS
    text: str
    end_ws: WS


@dataclass
class FilterSectionNode:
    """A ``{% filter %}...{% endfilter %}`` section."""

    start_ws: WS
    section: FilterSection
    end_ws: WS


@dataclass
class BlockNode:
    """A ``{% block %}...{% endblock %}`` section."""

    start_ws: WS
    block: Block
    end_ws: WS


@dataclass
class ForloopNode:
    """A ``{% for %}...{% endfor %}`` section."""

    start_ws: WS
    forloop: Forloop
    end_ws: WS


@dataclass
class IfNode:
    """An if/elif/else section; ``end_ws`` belongs to ``{% endif %}``."""

    cond: If
    end_ws: WS


@dataclass
class Break:
    """A ``{% break %}`` tag."""

    ws: WS


@dataclass
class Continue:
    """A ``{% continue %}`` tag."""

    ws: WS


@dataclass
class Comment:
    """A ``{# ... #}`` comment."""

    ws: WS
    text: str


ExprVal = Union[
    str,
    int,
    float,
    bool,
    Ident,
    MathExpr,
    LogicExpr,
    Test,
    MacroCall,
    FunctionCall,
    Array,
    StringConcat,
    In,
]

Node = Union[
    Super,
    Text,
    VariableBlock,
    MacroDefinitionNode,
    Extends,
    Include,
    ImportMacro,
    SetNode,
    Raw,
    FilterSectionNode,
    BlockNode,
    ForloopNode,
    IfNode,
    Break,
    Continue,
    Comment,
]