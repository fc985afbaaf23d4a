"""
Default statement and expression grammar for PAL.

The declaration parser treats `<Stmt>` as a collaborator: it calls
`stmt_parser(parser)` and expects one statement node back. This module is the
collaborator installed by default. It works purely through the parser's
`match`/`check` primitives, so it shares the parser's single lookahead.

    <Stmt>      --> begin <StmtList> end
                  | if <Expr> then <Stmt> [ else <Stmt> ]
                  | while <Expr> do <Stmt>
                  | print <Item>
                  | id = <Expr>
                  | id ( <Args> )
    <StmtList>  --> [ <Stmt> { ; <Stmt> } ]
    <Item>      --> string | <Expr>
    <Expr>      --> <Simple> [ <RelOp> <Simple> ]
    <Simple>    --> <Term> { (+ | - | or) <Term> }
    <Term>      --> <Factor> { (* | div | mod | and) <Factor> }
    <Factor>    --> num | true | false | id [ ( <Args> ) ] | ( <Expr> )
                  | - <Factor> | not <Factor>
    <Args>      --> [ <Expr> { , <Expr> } ]

Relational operators do not chain: `a < b < c` stops after `a < b`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pal.pal_ast import (
    AssignStmt,
    BinOp,
    BoolLit,
    Call,
    CallStmt,
    Compound,
    Expr,
    Id,
    IfStmt,
    Num,
    PrintStmt,
    Stmt,
    StrLit,
    UnOp,
    WhileStmt,
)
from pal.pal_errors import UnexpectedTokenError

if TYPE_CHECKING:
    from pal.pal_parser import Parser

STMT_FIRST = ("BEGIN", "IF", "WHILE", "PRINT", "ID")
REL_OPS = ("EQ", "NE", "LT", "LE", "GT", "GE")
ADD_OPS = ("PLUS", "MINUS", "OR")
MUL_OPS = ("STAR", "DIV", "MOD", "AND")


def _alternatives(types: tuple[str, ...]) -> str:
    return ", ".join(types[:-1]) + f", or {types[-1]}"


def parse_stmt(p: Parser) -> Stmt:
    """Parse one statement, choosing the alternative from the lookahead."""
    if p.check("BEGIN"):
        return parse_compound(p)
    if p.check("IF"):
        return parse_if(p)
    if p.check("WHILE"):
        return parse_while(p)
    if p.check("PRINT"):
        return parse_print(p)
    if p.check("ID"):
        name = p.match("ID").lexeme
        if p.check("LPAREN"):
            return CallStmt(name, parse_call_args(p))
        p.match("ASSIGN")
        return AssignStmt(name, parse_expr(p))
    raise UnexpectedTokenError(_alternatives(STMT_FIRST), p.current)


def parse_compound(p: Parser) -> Compound:
    p.match("BEGIN")
    body = []
    if p.check(*STMT_FIRST):
        body.append(parse_stmt(p))
        while p.check("SEMI"):
            p.match("SEMI")
            body.append(parse_stmt(p))
    p.match("END")
    return Compound(tuple(body))


def parse_if(p: Parser) -> IfStmt:
    p.match("IF")
    test = parse_expr(p)
    p.match("THEN")
    true_clause = parse_stmt(p)
    # dangling else binds to the nearest if
    if p.check("ELSE"):
        p.match("ELSE")
        return IfStmt(test, true_clause, parse_stmt(p))
    return IfStmt(test, true_clause)


def parse_while(p: Parser) -> WhileStmt:
    p.match("WHILE")
    test = parse_expr(p)
    p.match("DO")
    return WhileStmt(test, parse_stmt(p))


def parse_print(p: Parser) -> PrintStmt:
    p.match("PRINT")
    if p.check("STRING"):
        return PrintStmt(StrLit(p.match("STRING").lexeme))
    return PrintStmt(parse_expr(p))


def parse_call_args(p: Parser) -> tuple[Expr, ...]:
    """( <Args> ) with the opening parenthesis still in the lookahead."""
    p.match("LPAREN")
    args = []
    if not p.check("RPAREN"):
        args.append(parse_expr(p))
        while p.check("COMMA"):
            p.match("COMMA")
            args.append(parse_expr(p))
    p.match("RPAREN")
    return tuple(args)


def parse_expr(p: Parser) -> Expr:
    left = parse_simple(p)
    if p.check(*REL_OPS):
        op = p.match(p.current.type).type
        return BinOp(op, left, parse_simple(p))
    return left


def parse_simple(p: Parser) -> Expr:
    left = parse_term(p)
    while p.check(*ADD_OPS):
        op = p.match(p.current.type).type
        left = BinOp(op, left, parse_term(p))
    return left


def parse_term(p: Parser) -> Expr:
    left = parse_factor(p)
    while p.check(*MUL_OPS):
        op = p.match(p.current.type).type
        left = BinOp(op, left, parse_factor(p))
    return left


def parse_factor(p: Parser) -> Expr:
    if p.check("NUM"):
        return Num(p.match_num())
    if p.check("TRUE", "FALSE"):
        return BoolLit(p.match(p.current.type).type == "TRUE")
    if p.check("ID"):
        name = p.match("ID").lexeme
        if p.check("LPAREN"):
            return Call(name, parse_call_args(p))
        return Id(name)
    if p.check("LPAREN"):
        p.match("LPAREN")
        expr = parse_expr(p)
        p.match("RPAREN")
        return expr
    if p.check("MINUS", "NOT"):
        op = p.match(p.current.type).type
        return UnOp(op, parse_factor(p))
    raise UnexpectedTokenError(
        _alternatives(("NUM", "TRUE", "FALSE", "ID", "LPAREN", "MINUS", "NOT")),
        p.current,
    )


__all__ = ["parse_expr", "parse_stmt"]
