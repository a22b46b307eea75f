from infixcalc.context import EvaluationContext
from infixcalc.parser import to_postfix
from infixcalc.runtime import EvaluationError, evaluate
from infixcalc.tokenizer import tokenize, untokenize

context = EvaluationContext()
context.bind_variable("x", 5)
context.bind_variable("y", 2)
context.register_function("cube", lambda x: x**3)

for code in [
    "5",
    "3 + 4 * 2",
    "8 - 3 - 2",
    "2^3^2",
    "2x",
    "2(3 + 4)",
    "x(y)",
    "(x + 1)(y - 1)",
    "sqrt(16)",
    "sin(90) + cos(0)",
    "log(1000)",
    "cube(3)",
    "16^(1/2)",
    "1/0",
    "2 pi",
    "+3",
    "z + 1",
    "1.2.3",
    "3 % 4",
    "(3 + 4",
    "3 + 4)",
]:
    print("=" * 10)
    print(f"code: {code!r}")

    tokens = tokenize(code, context)
    print(f"tokens: {' '.join(str(t) for t in tokens)}")

    postfix = to_postfix(tokens, context)
    print(f"postfix: {untokenize(postfix)}")

    try:
        print(f"result: {evaluate(postfix, context)}")
    except EvaluationError as e:
        print(e)
