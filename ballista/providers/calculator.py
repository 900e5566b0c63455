"""Calculator provider: evaluates plain arithmetic with a restricted AST walk."""

import ast
import math
import operator
import re

from ballista.providers.interface import Provider
from ballista.providers.models import ActivationResult, Result

_BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}
_UNARY_OPS = {ast.UAdd: operator.pos, ast.USub: operator.neg}

# Huge exponents and huge integers would stall the input loop.
_MAX_EXPONENT = 1000
_MAX_RESULT_BITS = 10_000

_LOOKS_ARITHMETIC = re.compile(r"^[\d\s.+\-*/%()^]+$")


class CalculationError(ValueError):
    pass


def _check_power(base: float | int, exponent: float | int) -> None:
    if abs(exponent) > _MAX_EXPONENT:
        raise CalculationError("exponent too large")
    # Lower bound on the result's size, checked before the work is done.
    if isinstance(base, int) and isinstance(exponent, int) and exponent > 0:
        if (abs(base).bit_length() - 1) * exponent > _MAX_RESULT_BITS:
            raise CalculationError("result too large")


def _check_result(value: float | int | complex) -> float | int:
    if isinstance(value, complex):
        raise CalculationError("complex result")
    if isinstance(value, int) and value.bit_length() > _MAX_RESULT_BITS:
        raise CalculationError("result too large")
    return value


def _eval_node(node: ast.AST) -> float | int:
    if isinstance(node, ast.Expression):
        return _eval_node(node.body)
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
        return _check_result(node.value)
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        left = _eval_node(node.left)
        right = _eval_node(node.right)
        if isinstance(node.op, ast.Pow):
            _check_power(left, right)
        try:
            return _check_result(_BINARY_OPS[type(node.op)](left, right))
        except ZeroDivisionError as e:
            raise CalculationError("division by zero") from e
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_eval_node(node.operand))
    raise CalculationError(f"unsupported expression: {type(node).__name__}")


def evaluate(expression: str) -> float | int:
    """Evaluate an arithmetic expression. ``^`` is accepted as power."""
    try:
        tree = ast.parse(expression.replace("^", "**"), mode="eval")
    except SyntaxError as e:
        raise CalculationError(str(e)) from e
    return _eval_node(tree)


def format_number(value: float | int) -> str:
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return str(value)
        if value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return f"{value:.10g}"
    return str(value)


class CalculatorProvider(Provider):
    def search(self, query: str) -> list[Result]:
        expression = (query or "").strip()
        # A bare number is not worth a result.
        if not expression or not _LOOKS_ARITHMETIC.match(expression) or not re.search(r"[+\-*/%^]", expression):
            return []
        try:
            value = format_number(evaluate(expression))
        except (ValueError, OverflowError):
            return []
        return [
            Result(
                name=f"{expression} = {value}",
                completion=value,
                icon="accessories-calculator",
                priority=0,
                kind="calculation",
                payload=value,
            )
        ]

    def activate(self, result: Result) -> ActivationResult:
        return ActivationResult.ok(str(result.payload))

    def get_provider_name(self) -> str:
        return "calculator"
