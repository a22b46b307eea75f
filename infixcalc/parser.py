import logging
from typing import TYPE_CHECKING, Mapping, Optional

from infixcalc.tokenizer import Token, TokenType, untokenize
from infixcalc.utils import PrintableEnum

if TYPE_CHECKING:
    from infixcalc.context import EvaluationContext

logger = logging.getLogger(__name__)


class BinaryOperator(PrintableEnum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


OPERATORS: dict[str, BinaryOperator] = {op.value: op for op in BinaryOperator}

# symbols outside of OPERATORS are kept in the postfix output and rejected by the evaluator
UNKNOWN_OPERATOR_PRECEDENCE = 0


def get_op_precedence(op: BinaryOperator) -> int:
    return {
        BinaryOperator.ADD: 1,
        BinaryOperator.SUB: 1,
        BinaryOperator.MUL: 2,
        BinaryOperator.DIV: 2,
        BinaryOperator.POW: 3,
    }[op]


def get_symbol_precedence(symbol: str, operators: Mapping[str, BinaryOperator] = OPERATORS) -> int:
    op = operators.get(symbol)
    if op is None:
        return UNKNOWN_OPERATOR_PRECEDENCE
    return get_op_precedence(op)


def is_rtl_op(op: Optional[BinaryOperator], power_right_associative: bool) -> bool:
    return power_right_associative and op is BinaryOperator.POW


def _pops_before(
    stacked: Token, incoming: Token, operators: Mapping[str, BinaryOperator], power_right_associative: bool
) -> bool:
    if stacked.type is TokenType.FUNCTION:
        return True
    if stacked.type is not TokenType.OPERATOR:
        return False
    stacked_precedence = get_symbol_precedence(stacked.lexeme, operators)
    incoming_precedence = get_symbol_precedence(incoming.lexeme, operators)
    if is_rtl_op(operators.get(incoming.lexeme), power_right_associative):
        return stacked_precedence > incoming_precedence
    return stacked_precedence >= incoming_precedence


def to_postfix(tokens: list[Token], context: Optional["EvaluationContext"] = None) -> list[Token]:
    """Reorder infix tokens into postfix (reverse Polish) order with the shunting-yard algorithm

    Never fails. Bracket balance is not checked: a closing bracket without a pair flushes
    the stack, an opening bracket without a pair ends up in the output.
    """
    if context is not None:
        operators, power_right_associative = context.operators, context.power_right_associative
    else:
        operators, power_right_associative = OPERATORS, False
    output: list[Token] = []
    stack: list[Token] = []
    for token in tokens:
        if token.type in (TokenType.NUMBER, TokenType.VARIABLE):
            output.append(token)
        elif token.type is TokenType.FUNCTION:
            stack.append(token)
        elif token.type is TokenType.OPERATOR:
            while stack and _pops_before(stack[-1], token, operators, power_right_associative):
                output.append(stack.pop())
            stack.append(token)
        elif token.type is TokenType.PAREN_OPEN:
            stack.append(token)
        elif token.type is TokenType.PAREN_CLOSE:
            while stack and stack[-1].type is not TokenType.PAREN_OPEN:
                output.append(stack.pop())
            if stack:
                stack.pop()
            # function applied to the bracketed argument that was just closed
            if stack and stack[-1].type is TokenType.FUNCTION:
                output.append(stack.pop())

    while stack:
        output.append(stack.pop())

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Postfix: %s", untokenize(output))
    return output
