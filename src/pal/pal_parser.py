"""
PAL Language Parser

Recursive-descent parser turning a PAL token stream into a `Program` AST.

Each grammar nonterminal has one `parse_*` method; its docstring holds the
production together with the FIRST/FOLLOW sets that drive the method's
decisions. The parser keeps exactly one token of lookahead and never
backtracks.

Grammar
-------
    <Program>    --> program id ; <Block> . EOF
    <Block>      --> <ValDecls> <VarDecls> <FunDecls> <Stmt>
    <ValDecls>   --> <ValDecl> <ValDecls> | ε
    <ValDecl>    --> val id = <Sign> num ;
    <Sign>       --> - | ε
    <VarDecls>   --> <VarDecl> <VarDecls> | ε
    <VarDecl>    --> var id : <Type> ;
    <Type>       --> int | bool | void
    <FunDecls>   --> <FunDecl> <FunDecls> | ε
    <FunDecl>    --> fun id ( <ParamList> ) : <Type> ; <Block> ;
    <ParamList>  --> <Params> | ε
    <Params>     --> <Param> <ParamsRest>
    <ParamsRest> --> , <Params> | ε
    <Param>      --> id : <Type>

`<Stmt>` is supplied by a separate collaborator (see `pal.pal_stmt`); any
callable taking the parser and returning a node can be plugged in.

Raises
------
UnexpectedTokenError
    The lookahead is not the token type the grammar requires.
InvalidTypeError
    A type position holds something other than `int`, `bool` or `void`.
NumeralError
    A numeral too long to convert to an integer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from pal.pal_ast import Block, FunDecl, Param, Program, Stmt, Type, ValDecl, VarDecl
from pal.pal_constants import TYPE_TOKENS
from pal.pal_errors import InvalidTypeError, NumeralError, UnexpectedTokenError
from pal.pal_lexer import CharacterStream, Lexer, Token, TokenList, TokenSource
from pal.pal_stmt import parse_stmt

logger = logging.getLogger(__name__)

StmtParser = Callable[["Parser"], Stmt]
"""Signature of a statement collaborator: consumes one statement, returns its node."""


class Parser:
    """
    PAL Parser Class

    Owns the token source and the single lookahead token. The first token is
    pulled as soon as the parser is constructed. One parser parses one stream,
    once; it is not reentrant.

    Attributes
    ----------
    current : Token
        The lookahead token; the only piece of mutable state.
    stmt_parser : StmtParser
        The collaborator that parses `<Stmt>`.
    """

    def __init__(
        self,
        source: TokenSource | Iterable[Token],
        stmt_parser: StmtParser | None = None,
    ) -> None:
        if not hasattr(source, "next_token"):
            source = TokenList(source)  # type: ignore[arg-type]
        self.source: TokenSource = source  # type: ignore[assignment]
        self.stmt_parser: StmtParser = stmt_parser or parse_stmt
        self.current: Token = self.source.next_token()

    def match(self, type_: str) -> Token:
        """Consume and return the lookahead if it has type `type_`.

        Raises:
            UnexpectedTokenError: Otherwise. The lookahead is left in place.
        """
        if self.current.type != type_:
            raise UnexpectedTokenError(type_, self.current)
        tok = self.current
        self.current = self.source.next_token()
        return tok

    def check(self, *types: str) -> bool:
        """True if the lookahead's type is one of `types`. Never consumes."""
        return self.current.type in types

    def match_num(self) -> int:
        """Consume a NUM token and return its integer value.

        Raises:
            UnexpectedTokenError: If the lookahead is not NUM.
            NumeralError: If the numeral exceeds the interpreter's conversion
                limit. The token is left in place.
        """
        if not self.check("NUM"):
            raise UnexpectedTokenError("NUM", self.current)
        try:
            value = int(self.current.lexeme)
        except ValueError:
            raise NumeralError(self.current) from None
        self.match("NUM")
        return value

    def parse_program(self) -> Program:
        """<Program> --> program id ; <Block> . EOF        FIRST = PROGRAM"""
        self.match("PROGRAM")
        name = self.match("ID").lexeme
        self.match("SEMI")
        logger.debug("parsing program %s", name)
        block = self.parse_block()
        self.match("PERIOD")
        self.match("EOF")
        return Program(name, block)

    def parse_block(self) -> Block:
        """<Block> --> <ValDecls> <VarDecls> <FunDecls> <Stmt>

        FIRST = VAL, VAR, FUN, FIRST(Stmt)
        """
        vals = self.parse_val_decls()
        vars_ = self.parse_var_decls()
        funs = self.parse_fun_decls()
        body = self.parse_stmt()
        return Block(vals, vars_, funs, body)

    def parse_val_decls(self) -> tuple[ValDecl, ...]:
        """<ValDecls> --> <ValDecl> <ValDecls> | ε     FIRST = VAL"""
        decls = []
        while self.check("VAL"):
            decls.append(self.parse_val_decl())
        return tuple(decls)

    def parse_val_decl(self) -> ValDecl:
        """<ValDecl> --> val id = <Sign> num ;"""
        self.match("VAL")
        name = self.match("ID").lexeme
        self.match("ASSIGN")
        sign = self.parse_sign()
        num = self.match_num()
        self.match("SEMI")
        logger.debug("val %s", name)
        return ValDecl(name, sign * num)

    def parse_sign(self) -> int:
        """<Sign> --> - | ε        FIRST = MINUS, FOLLOW = NUM"""
        if self.check("MINUS"):
            self.match("MINUS")
            return -1
        return 1

    def parse_var_decls(self) -> tuple[VarDecl, ...]:
        """<VarDecls> --> <VarDecl> <VarDecls> | ε     FIRST = VAR"""
        decls = []
        while self.check("VAR"):
            decls.append(self.parse_var_decl())
        return tuple(decls)

    def parse_var_decl(self) -> VarDecl:
        """<VarDecl> --> var id : <Type> ;"""
        self.match("VAR")
        name = self.match("ID").lexeme
        self.match("COLON")
        type_ = self.parse_type()
        self.match("SEMI")
        logger.debug("var %s: %s", name, type_)
        return VarDecl(name, type_)

    def parse_type(self) -> Type:
        """<Type> --> int | bool | void

        Raises:
            InvalidTypeError: If the lookahead is none of the three keywords.
        """
        for type_ in TYPE_TOKENS:
            if self.check(type_):
                self.match(type_)
                return Type[type_]
        raise InvalidTypeError(self.current, TYPE_TOKENS)

    def parse_fun_decls(self) -> tuple[FunDecl, ...]:
        """<FunDecls> --> <FunDecl> <FunDecls> | ε     FIRST = FUN"""
        decls = []
        while self.check("FUN"):
            decls.append(self.parse_fun_decl())
        return tuple(decls)

    def parse_fun_decl(self) -> FunDecl:
        """<FunDecl> --> fun id ( <ParamList> ) : <Type> ; <Block> ;"""
        self.match("FUN")
        name = self.match("ID").lexeme
        self.match("LPAREN")
        params = self.parse_param_list()
        self.match("RPAREN")
        self.match("COLON")
        return_type = self.parse_type()
        self.match("SEMI")
        logger.debug("entering fun %s", name)
        body = self.parse_block()
        self.match("SEMI")
        logger.debug("leaving fun %s", name)
        return FunDecl(name, return_type, params, body)

    def parse_param_list(self) -> tuple[Param, ...]:
        """<ParamList> --> <Params> | ε    FIRST = ID, FOLLOW = RPAREN"""
        if self.check("ID"):
            return self.parse_params()
        return ()

    def parse_params(self) -> tuple[Param, ...]:
        """<Params> --> <Param> <ParamsRest>"""
        return (self.parse_param(),) + self.parse_params_rest()

    def parse_params_rest(self) -> tuple[Param, ...]:
        """<ParamsRest> --> , <Param> <ParamsRest> | ε     FIRST = COMMA, FOLLOW = RPAREN

        The tail recursion is unrolled into a loop.
        """
        params = []
        while self.check("COMMA"):
            self.match("COMMA")
            params.append(self.parse_param())
        return tuple(params)

    def parse_param(self) -> Param:
        """<Param> --> id : <Type>"""
        name = self.match("ID").lexeme
        self.match("COLON")
        return Param(name, self.parse_type())

    def parse_stmt(self) -> Stmt:
        """<Stmt>, delegated to the statement collaborator."""
        return self.stmt_parser(self)


def parse(source: str, stmt_parser: StmtParser | None = None) -> Program:
    """Scan and parse a complete PAL program from source text."""
    lexer = Lexer(CharacterStream(source))
    return Parser(lexer, stmt_parser).parse_program()


__all__ = ["Parser", "StmtParser", "parse"]
