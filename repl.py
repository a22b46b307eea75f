import argparse
import logging

from infixcalc.context import EvaluationContext
from infixcalc.parser import to_postfix
from infixcalc.runtime import EvaluationError, evaluate
from infixcalc.tokenizer import tokenize, untokenize
from infixcalc.utils import collapse_double_minus


def bind_from_input(context: EvaluationContext, name: str) -> None:
    while True:
        raw = input(f"Enter value for {name} (if any): ").strip()
        if not raw:
            return
        try:
            context.bind_variable(name, float(raw))
            return
        except ValueError:
            print(f"Not a number: {raw!r}")


if __name__ == "__main__":
    arg_parser = argparse.ArgumentParser(description="Evaluate arithmetic expressions interactively")
    arg_parser.add_argument("--debug", action="store_true", help="log every pipeline stage")
    arg_parser.add_argument("--right-assoc-power", action="store_true", help="read 2^3^2 as 2^(3^2)")
    arg_parser.add_argument("--keep-double-minus", action="store_true", help='do not rewrite "--" to "+"')
    args = arg_parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    context = EvaluationContext(power_right_associative=args.right_assoc_power)
    context.register_function("cube", lambda x: x**3)

    try:
        bind_from_input(context, "x")
        bind_from_input(context, "y")
    except EOFError:
        raise SystemExit(0)

    print("\nTip: use parentheses for fractional powers like 16^(1/2)")
    while True:
        try:
            code = input("> ")
        except EOFError:
            break

        if not args.keep_double_minus:
            code = collapse_double_minus(code)

        postfix = to_postfix(tokenize(code, context), context)
        print(f"Postfix Expression: {untokenize(postfix)}")

        try:
            result = evaluate(postfix, context)
        except EvaluationError as e:
            print(e)
            continue

        print(f"Result: {result:.6f}")
