import math
from typing import Callable

UnaryFunc = Callable[[float], float]

BUILTIN_FUNCS: dict[str, UnaryFunc] = dict()

BUILTIN_VARS: dict[str, float] = {
    "pi": 3.1415926535,
    "e": 2.7182818284,
}


def register_builtin_func(name: str):
    def decorator(fn: UnaryFunc) -> UnaryFunc:
        BUILTIN_FUNCS[name] = fn
        return fn

    return decorator


def _degrees_to_radians(arg: float) -> float:
    return arg * math.pi / 180


@register_builtin_func("sin")
def sin_(arg: float) -> float:
    radians = _degrees_to_radians(arg)
    if math.isinf(radians):
        return math.nan
    return math.sin(radians)


@register_builtin_func("cos")
def cos_(arg: float) -> float:
    radians = _degrees_to_radians(arg)
    if math.isinf(radians):
        return math.nan
    return math.cos(radians)


@register_builtin_func("sqrt")
def sqrt_(arg: float) -> float:
    if arg < 0:
        return math.nan
    return math.sqrt(arg)


@register_builtin_func("log")
def log_(arg: float) -> float:
    """Decimal logarithm"""
    if arg == 0:
        return -math.inf
    elif arg < 0:
        return math.nan
    return math.log10(arg)
