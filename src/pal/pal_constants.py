"""
Token vocabulary for the PAL language.

Exports:
    token_hashmap: Maps reserved words and operator spellings to canonical token types.
    keyword_tokens: The reserved-word subset of `token_hashmap`.
    operator_tokens: The operator/punctuation subset of `token_hashmap`.
    TYPE_TOKENS: Token types that name a primitive type.
"""

keyword_tokens: dict[str, str] = {
    # declarations
    "program": "PROGRAM",
    "val": "VAL",
    "var": "VAR",
    "fun": "FUN",
    # types
    "int": "INT",
    "bool": "BOOL",
    "void": "VOID",
    # statements
    "begin": "BEGIN",
    "end": "END",
    "if": "IF",
    "then": "THEN",
    "else": "ELSE",
    "while": "WHILE",
    "do": "DO",
    "print": "PRINT",
    # expressions
    "true": "TRUE",
    "false": "FALSE",
    "and": "AND",
    "or": "OR",
    "not": "NOT",
    "div": "DIV",
    "mod": "MOD",
}

operator_tokens: dict[str, str] = {
    ";": "SEMI",
    ".": "PERIOD",
    "=": "ASSIGN",
    ":": "COLON",
    "(": "LPAREN",
    ")": "RPAREN",
    ",": "COMMA",
    "-": "MINUS",
    "+": "PLUS",
    "*": "STAR",
    "==": "EQ",
    "<>": "NE",
    "<": "LT",
    "<=": "LE",
    ">": "GT",
    ">=": "GE",
}

token_hashmap: dict[str, str] = {**keyword_tokens, **operator_tokens}

TYPE_TOKENS: tuple[str, ...] = ("INT", "BOOL", "VOID")

__all__ = ["TYPE_TOKENS", "keyword_tokens", "operator_tokens", "token_hashmap"]
