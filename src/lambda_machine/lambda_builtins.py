"""Strict integer builtins layered on the lazy reduction engine.

Builtins are applicable nodes the core never looks inside.  The binary integer operators
are curried: applying one to its first operand captures that operand in a partial node;
applying the partial node forces both operands to normal form and computes the result.
Comparisons answer with Church booleans, which select between two alternatives when
applied, so they work with plain closures and need no special support in the engine.
"""

import operator
from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from lambda_machine.lambda_environment import EMPTY_ENVIRONMENT
from lambda_machine.lambda_error import LambdaEvalError
from lambda_machine.lambda_node import LambdaApplicable, LambdaClosure, LambdaNode
from lambda_machine.lambda_render import render
from lambda_machine.lambda_session import DEFAULT_SESSION, LambdaSession
from lambda_machine.lambda_template import LambdaAbstractionBody, LambdaVarOccurrence


@dataclass(frozen=True)
class LambdaInteger(LambdaNode):
    """Integer literal.  Normal, but not applicable."""
    value: int
    meta: Any = field(default=None, compare=False)

    def is_normal(self) -> bool:
        return True

    def reduce(self, session: LambdaSession | None = None) -> LambdaNode:
        return self

    def type_name(self) -> str:
        return "integer"

    def to_python(self) -> int:
        """Convert to Python value."""
        return self.value

    def describe(self, name_of: Callable[[Any], str]) -> str:
        return str(self.value)


# true = λt.λf.t: the outer binder is used, the inner one is not, so the body sees t on top.
_TRUE_BODY = LambdaAbstractionBody(param_used=False, body=LambdaVarOccurrence())

# false = λt.λf.f: the outer binder is dropped, the inner one is pushed.
_FALSE_BODY = LambdaAbstractionBody(param_used=True, body=LambdaVarOccurrence())


def church_boolean(value: bool) -> LambdaClosure:
    """
    Encode a boolean as a Church boolean closure.

    Args:
        value: Boolean to encode

    Returns:
        Closure selecting its first argument for True and its second for False
    """
    if value:
        return LambdaClosure(EMPTY_ENVIRONMENT, True, _TRUE_BODY, "true")

    return LambdaClosure(EMPTY_ENVIRONMENT, False, _FALSE_BODY, "false")


class LambdaBuiltin(LambdaApplicable):
    """Base class for host-supplied applicable values."""

    def __init__(self, name: str, meta: Any = None) -> None:
        """
        Initialize a builtin.

        Args:
            name: Builtin name for display and error messages
            meta: Opaque source metadata
        """
        self.name = name
        self.meta = meta

    @staticmethod
    def force(node: LambdaNode, session: LambdaSession | None = None) -> LambdaNode:
        """
        Drive an operand to normal form.

        Args:
            node: Operand to force
            session: Session controls used for the forced reduction

        Returns:
            The operand's normal form
        """
        if session is None:
            session = DEFAULT_SESSION

        while not node.is_normal():
            node = node.reduce(session)

        return node

    def type_name(self) -> str:
        return "builtin-function"

    def describe(self, name_of: Callable[[Any], str]) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


def _truncated_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    if b == 0:
        raise LambdaEvalError(
            "Division by zero",
            context=f"Attempted to divide {a} by zero",
            suggestion="Check the divisor before dividing",
            example="/ 7 2 → 3"
        )

    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _truncated_mod(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend, matching `_truncated_div`."""
    if b == 0:
        raise LambdaEvalError(
            "Modulo by zero",
            context=f"Attempted to take {a} modulo zero",
            suggestion="Check the divisor before taking a remainder",
            example="% 7 2 → 1"
        )

    return a - b * _truncated_div(a, b)


INTEGER_OPERATIONS: Dict[str, Callable[[int, int], int]] = {
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    '/': _truncated_div,
    '%': _truncated_mod,
}


INTEGER_COMPARISONS: Dict[str, Callable[[int, int], bool]] = {
    '==': operator.eq,
    '!=': operator.ne,
    '<': operator.lt,
    '>': operator.gt,
    '<=': operator.le,
    '>=': operator.ge,
}


class LambdaIntOperator(LambdaBuiltin):
    """Curried binary operator on integers."""

    def __init__(self, name: str, operation: Callable[[int, int], Any], is_comparison: bool, meta: Any = None) -> None:
        """
        Initialize an integer operator.

        Args:
            name: Operator name, e.g. '+'
            operation: Python implementation on two ints
            is_comparison: If True the result is encoded as a Church boolean
            meta: Opaque source metadata
        """
        super().__init__(name, meta)
        self.operation = operation
        self.is_comparison = is_comparison

    def apply(self, arg: LambdaNode, session: LambdaSession | None = None) -> LambdaNode:
        return LambdaIntPartial(self, arg)

    def force_integer(self, node: LambdaNode, session: LambdaSession | None) -> int:
        """
        Force an operand and check that it is an integer.

        Raises:
            LambdaEvalError: If the operand's normal form is not an integer
        """
        value = self.force(node, session)
        if not isinstance(value, LambdaInteger):
            raise LambdaEvalError(
                f"'{self.name}' requires integer arguments",
                received=f"{value.type_name()}: {render(value)}",
                expected="integer",
                example=f"{self.name} 3 4",
                meta=value.meta
            )

        return value.value

    def compute(self, a: int, b: int) -> LambdaNode:
        """
        Compute the operator's result for two integers.

        Returns:
            A LambdaInteger, or a Church boolean for comparisons
        """
        result = self.operation(a, b)
        if self.is_comparison:
            return church_boolean(bool(result))

        return LambdaInteger(result)


class LambdaIntPartial(LambdaBuiltin):
    """An integer operator that has received its first operand."""

    def __init__(self, int_operator: LambdaIntOperator, first: LambdaNode) -> None:
        super().__init__(int_operator.name, int_operator.meta)
        self.int_operator = int_operator
        self.first = first

    def apply(self, arg: LambdaNode, session: LambdaSession | None = None) -> LambdaNode:
        a = self.int_operator.force_integer(self.first, session)
        b = self.int_operator.force_integer(arg, session)
        return self.int_operator.compute(a, b)

    def describe(self, name_of: Callable[[Any], str]) -> str:
        first = render(self.first, name_of)
        return f"({self.name} {first})"
