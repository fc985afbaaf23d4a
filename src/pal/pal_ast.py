"""
Defines the abstract syntax tree (AST) node types for the PAL language.

Every node is a frozen dataclass; sequences are stored as tuples, so a tree is
never mutated once the parser hands it out. The set of node types is closed:

Declarations:
    Program, Block, ValDecl, VarDecl, FunDecl, Param, and the `Type` enum.

Statements:
    Compound, AssignStmt, CallStmt, PrintStmt, IfStmt, WhileStmt.

Expressions:
    Num, BoolLit, StrLit, Id, Call, UnOp, BinOp.

Each node has a `kind` tag and a `to_dict()` method producing a nested,
JSON-ready dictionary (used by the CLI dump and by tests).

Example:
    ValDecl("x", -5).to_dict() == {"kind": "val", "name": "x", "value": -5}
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union


class Type(Enum):
    """The primitive types. There are no user-defined types."""

    INT = "int"
    BOOL = "bool"
    VOID = "void"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""

    kind: ClassVar[str] = "node"

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"kind": self.kind}
        for field in dataclasses.fields(self):
            out[field.name] = _serialize(getattr(self, field.name))
        return out


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    if isinstance(value, Type):
        return value.value
    return value


### Declarations


@dataclass(frozen=True)
class Program(Node):
    kind: ClassVar[str] = "program"
    name: str
    body: Block


@dataclass(frozen=True)
class Block(Node):
    """One scope: its declarations in source order, then its statement."""

    kind: ClassVar[str] = "block"
    val_decls: tuple[ValDecl, ...]
    var_decls: tuple[VarDecl, ...]
    fun_decls: tuple[FunDecl, ...]
    body: Stmt


@dataclass(frozen=True)
class ValDecl(Node):
    """A named integer constant; the sign is already applied to `value`."""

    kind: ClassVar[str] = "val"
    name: str
    value: int


@dataclass(frozen=True)
class VarDecl(Node):
    kind: ClassVar[str] = "var"
    name: str
    type: Type


@dataclass(frozen=True)
class Param(Node):
    kind: ClassVar[str] = "param"
    name: str
    type: Type


@dataclass(frozen=True)
class FunDecl(Node):
    kind: ClassVar[str] = "fun"
    name: str
    return_type: Type
    params: tuple[Param, ...]
    body: Block


### Statements


@dataclass(frozen=True)
class Compound(Node):
    kind: ClassVar[str] = "compound"
    body: tuple[Stmt, ...]


@dataclass(frozen=True)
class AssignStmt(Node):
    kind: ClassVar[str] = "assign"
    name: str
    expr: Expr


@dataclass(frozen=True)
class CallStmt(Node):
    kind: ClassVar[str] = "call_stmt"
    name: str
    args: tuple[Expr, ...]


@dataclass(frozen=True)
class PrintStmt(Node):
    kind: ClassVar[str] = "print"
    item: Union[Expr, StrLit]


@dataclass(frozen=True)
class IfStmt(Node):
    kind: ClassVar[str] = "if"
    test: Expr
    true_clause: Stmt
    false_clause: Stmt | None = None


@dataclass(frozen=True)
class WhileStmt(Node):
    kind: ClassVar[str] = "while"
    test: Expr
    body: Stmt


### Expressions


@dataclass(frozen=True)
class Num(Node):
    kind: ClassVar[str] = "num"
    value: int


@dataclass(frozen=True)
class BoolLit(Node):
    kind: ClassVar[str] = "bool"
    value: bool


@dataclass(frozen=True)
class StrLit(Node):
    kind: ClassVar[str] = "string"
    value: str


@dataclass(frozen=True)
class Id(Node):
    kind: ClassVar[str] = "id"
    name: str


@dataclass(frozen=True)
class Call(Node):
    kind: ClassVar[str] = "call"
    name: str
    args: tuple[Expr, ...]


@dataclass(frozen=True)
class UnOp(Node):
    """Unary operator; `op` is the operator's token type (MINUS or NOT)."""

    kind: ClassVar[str] = "unop"
    op: str
    expr: Expr


@dataclass(frozen=True)
class BinOp(Node):
    """Binary operator; `op` is the operator's token type (PLUS, LT, AND, ...)."""

    kind: ClassVar[str] = "binop"
    op: str
    left: Expr
    right: Expr


Stmt = Union[Compound, AssignStmt, CallStmt, PrintStmt, IfStmt, WhileStmt, Node]
"""Anything the statement collaborator returns; the core only requires a Node."""

Expr = Union[Num, BoolLit, Id, Call, UnOp, BinOp]


__all__ = [
    "AssignStmt",
    "BinOp",
    "Block",
    "BoolLit",
    "Call",
    "CallStmt",
    "Compound",
    "Expr",
    "FunDecl",
    "Id",
    "IfStmt",
    "Node",
    "Num",
    "Param",
    "PrintStmt",
    "Program",
    "Stmt",
    "StrLit",
    "Type",
    "UnOp",
    "ValDecl",
    "VarDecl",
    "WhileStmt",
]
