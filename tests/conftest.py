import pytest

from infixcalc.context import EvaluationContext


@pytest.fixture
def context() -> EvaluationContext:
    context = EvaluationContext()
    context.bind_variable("x", 5)
    context.bind_variable("y", 2)
    return context
