import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from infixcalc.builtins import BUILTIN_FUNCS
from infixcalc.utils import PrintableEnum

if TYPE_CHECKING:
    from infixcalc.context import EvaluationContext


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    OPERATOR = enum.auto()
    VARIABLE = enum.auto()
    FUNCTION = enum.auto()
    PAREN_OPEN = enum.auto()
    PAREN_CLOSE = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


IMPLICIT_MUL_TOKEN = Token(type=TokenType.OPERATOR, lexeme="*")

# a variable or an opening bracket right after one of these is multiplied by it
_IMPLICIT_MUL_LEFT_TYPES = (TokenType.NUMBER, TokenType.VARIABLE, TokenType.PAREN_CLOSE)


def _is_valid_in_number(s: str) -> bool:
    return s.isdigit() or s == "."


def _is_valid_in_identifier(s: str) -> bool:
    return s.isalnum()


def _needs_implicit_mul(tokens: list[Token]) -> bool:
    return bool(tokens) and tokens[-1].type in _IMPLICIT_MUL_LEFT_TYPES


def tokenize(code: str, context: Optional["EvaluationContext"] = None) -> list[Token]:
    """Split expression text into tokens, inserting "*" for implicit multiplication

    Never fails: anything not recognized becomes a single-character operator token
    and is left for the evaluator to reject. Identifiers are classified as functions
    using the function table of the context (built-in functions when no context is given).
    """
    is_function = context.is_function if context is not None else BUILTIN_FUNCS.__contains__
    i = 0
    tokens: list[Token] = []
    while i < len(code):
        if code[i].isspace():
            pass
        elif _is_valid_in_number(code[i]):
            number_end_idx = i + 1
            while number_end_idx < len(code) and _is_valid_in_number(code[number_end_idx]):
                number_end_idx += 1
            tokens.append(Token(type=TokenType.NUMBER, lexeme=code[i:number_end_idx]))
            i = number_end_idx - 1  # to account for += 1 later
        elif code[i].isalpha():
            ident_end_idx = i + 1
            while ident_end_idx < len(code) and _is_valid_in_identifier(code[ident_end_idx]):
                ident_end_idx += 1
            name = code[i:ident_end_idx]
            if is_function(name):
                tokens.append(Token(type=TokenType.FUNCTION, lexeme=name))
            else:
                if _needs_implicit_mul(tokens):
                    tokens.append(IMPLICIT_MUL_TOKEN)
                tokens.append(Token(type=TokenType.VARIABLE, lexeme=name))
            i = ident_end_idx - 1  # to account for += 1 later
        elif code[i] == "(":
            if _needs_implicit_mul(tokens):
                tokens.append(IMPLICIT_MUL_TOKEN)
            tokens.append(Token(type=TokenType.PAREN_OPEN, lexeme="("))
        elif code[i] == ")":
            tokens.append(Token(type=TokenType.PAREN_CLOSE, lexeme=")"))
        else:
            tokens.append(Token(type=TokenType.OPERATOR, lexeme=code[i]))
        i += 1

    return tokens


def untokenize(tokens: list[Token]) -> str:
    return " ".join(t.lexeme for t in tokens)
