import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from infixcalc.context import EvaluationContext
from infixcalc.parser import BinaryOperator, to_postfix
from infixcalc.tokenizer import Token, TokenType, tokenize, untokenize

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class EvaluationError(Exception):
    errmsg: str

    def __str__(self) -> str:
        return f"[Evaluation error] {self.errmsg}"


class MalformedNumeral(EvaluationError):
    def __init__(self, lexeme: str) -> None:
        super().__init__(f"malformed numeral: {lexeme}")
        self.lexeme = lexeme


class UndefinedVariable(EvaluationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"undefined variable: {name}")
        self.name = name


class UndefinedFunction(EvaluationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"undefined function: {name}")
        self.name = name


class InsufficientOperands(EvaluationError):
    def __init__(self, symbol: str) -> None:
        super().__init__(f"insufficient operands for {symbol}")
        self.symbol = symbol


class InsufficientArguments(EvaluationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"insufficient arguments for {name}")
        self.name = name


class InvalidExpressionShape(EvaluationError):
    def __init__(self, stack_size: int) -> None:
        super().__init__("invalid expression")
        self.stack_size = stack_size


class UnknownOperator(EvaluationError):
    def __init__(self, symbol: str) -> None:
        super().__init__(f"unknown operator: {symbol}")
        self.symbol = symbol


class UnbalancedParentheses(EvaluationError):
    def __init__(self) -> None:
        super().__init__("unbalanced parentheses")


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1


def ieee_div(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def ieee_pow(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except ValueError:
        # zero to a negative power is a pole, a negative base to a fractional power is undefined
        if a == 0:
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        return math.nan
    except OverflowError:
        if a < 0 and _is_odd_integer(b):
            return -math.inf
        return math.inf


BinaryOperationImpl = Callable[[float, float], float]

binary_operation_impls: dict[BinaryOperator, BinaryOperationImpl] = {
    BinaryOperator.ADD: lambda a, b: a + b,
    BinaryOperator.SUB: lambda a, b: a - b,
    BinaryOperator.MUL: lambda a, b: a * b,
    BinaryOperator.DIV: ieee_div,
    BinaryOperator.POW: ieee_pow,
}


def evaluate(postfix: list[Token], context: Optional[EvaluationContext] = None) -> float:
    """Compute the value of a postfix token sequence

    Raises a subclass of EvaluationError describing the first problem met.
    """
    if context is None:
        context = EvaluationContext()
    stack: list[float] = []
    operators = context.operators
    for token in postfix:
        if token.type is TokenType.NUMBER:
            try:
                value = float(token.lexeme)
            except ValueError:
                raise MalformedNumeral(token.lexeme) from None
            # a literal too large for a float is not a finite decimal
            if not math.isfinite(value):
                raise MalformedNumeral(token.lexeme)
            stack.append(value)
        elif token.type is TokenType.VARIABLE:
            if token.lexeme not in context.variables:
                raise UndefinedVariable(token.lexeme)
            stack.append(context.variables[token.lexeme])
        elif token.type is TokenType.OPERATOR:
            if len(stack) < 2:
                raise InsufficientOperands(token.lexeme)
            b = stack.pop()
            a = stack.pop()
            operator = operators.get(token.lexeme)
            if operator is None:
                raise UnknownOperator(token.lexeme)
            stack.append(binary_operation_impls[operator](a, b))
        elif token.type is TokenType.FUNCTION:
            if not stack:
                raise InsufficientArguments(token.lexeme)
            fn = context.functions.get(token.lexeme)
            if fn is None:
                raise UndefinedFunction(token.lexeme)
            stack.append(fn(stack.pop()))
        elif token.type in (TokenType.PAREN_OPEN, TokenType.PAREN_CLOSE):
            raise UnbalancedParentheses()
        else:
            raise RuntimeError(f"Unexpected token type: {token.type}")

    if len(stack) != 1:
        raise InvalidExpressionShape(len(stack))
    return stack[0]


def calculate(code: str, context: Optional[EvaluationContext] = None) -> float:
    if context is None:
        context = EvaluationContext()
    tokens = tokenize(code, context)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Tokens: %s", " ".join(str(t) for t in tokens))
    postfix = to_postfix(tokens, context)
    result = evaluate(postfix, context)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("%s => %r", untokenize(postfix), result)
    return result
