import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from infixcalc.builtins import BUILTIN_FUNCS, BUILTIN_VARS, UnaryFunc
from infixcalc.parser import OPERATORS, BinaryOperator

logger = logging.getLogger(__name__)


@dataclass
class EvaluationContext:
    """Symbol tables consulted by every stage of a calculation

    Each context starts with its own copy of the built-in functions and variables.
    Tables may be changed between calculations, not while one is running.
    """

    functions: dict[str, UnaryFunc] = field(default_factory=lambda: dict(BUILTIN_FUNCS))
    variables: dict[str, float] = field(default_factory=lambda: dict(BUILTIN_VARS))
    power_right_associative: bool = False

    @property
    def operators(self) -> Mapping[str, BinaryOperator]:
        return MappingProxyType(OPERATORS)

    def register_function(self, name: str, fn: UnaryFunc) -> None:
        if not name[:1].isalpha() or not name.isalnum():
            raise ValueError(f"Function name must be alphanumeric and start with a letter: {name!r}")
        logger.debug("Registering function %r", name)
        self.functions[name] = fn

    def bind_variable(self, name: str, value: float) -> None:
        logger.debug("Binding variable %r = %r", name, value)
        self.variables[name] = float(value)

    def is_function(self, name: str) -> bool:
        return name in self.functions

    def copy(self) -> "EvaluationContext":
        return EvaluationContext(
            functions=dict(self.functions),
            variables=dict(self.variables),
            power_right_associative=self.power_right_associative,
        )
