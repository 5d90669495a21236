"""Shared fixtures and utilities for lambda machine tests."""

from dataclasses import dataclass

import pytest

from lambda_machine import (
    LambdaAbstractionBody, LambdaApplicationTemplate, LambdaBufferingTraceWatcher, LambdaGlobalRef,
    LambdaGlobals, LambdaInteger, LambdaMachine, LambdaNode, LambdaSession, LambdaSlot, LambdaTemplate,
    LambdaVarOccurrence
)


@dataclass(frozen=True)
class SourceInfo:
    """Stand-in for the metadata a parser would attach to nodes."""
    name: str
    filename: str = "test.lambda"
    line: int = 1
    column: int = 1


class LambdaTemplateHelpers:
    """Helper utilities for building compiled templates by hand."""

    @staticmethod
    def var() -> LambdaVarOccurrence:
        """Occurrence of the innermost bound variable."""
        return LambdaVarOccurrence()

    @staticmethod
    def lam(body: LambdaTemplate, param_used: bool = True, meta: object = None) -> LambdaAbstractionBody:
        """Abstraction template."""
        return LambdaAbstractionBody(param_used, body, meta)

    @staticmethod
    def app(
        left: LambdaTemplate,
        right: LambdaTemplate,
        left_drop: int = 0,
        right_drop: int = 0
    ) -> LambdaApplicationTemplate:
        """Application template."""
        return LambdaApplicationTemplate(left_drop, right_drop, left, right)

    @staticmethod
    def const(value: int) -> LambdaGlobalRef:
        """Integer literal, embedded through a pre-filled anonymous slot."""
        return LambdaGlobalRef(LambdaSlot.constant(LambdaInteger(value)), str(value))

    @staticmethod
    def binary(lambda_globals: LambdaGlobals, op: str, right: LambdaTemplate, right_drop: int) -> LambdaTemplate:
        """`op n right` inside a one-parameter body, where n is the parameter."""
        h = LambdaTemplateHelpers
        return h.app(h.app(lambda_globals.reference(op), h.var(), left_drop=1), right, right_drop=right_drop)

    @staticmethod
    def define_factorial(lambda_globals: LambdaGlobals, name: str = "fact") -> None:
        """
        Define `fact = λn. (== n 0) 1 (* n (fact (- n 1)))`.

        The comparison yields a Church boolean that selects between the two branches, so
        the recursive branch is never reduced once n reaches zero.
        """
        h = LambdaTemplateHelpers
        lambda_globals.declare(name)
        condition = h.app(h.binary(lambda_globals, "==", h.const(0), right_drop=1), h.const(1), right_drop=1)
        predecessor = h.binary(lambda_globals, "-", h.const(1), right_drop=1)
        recursive_call = h.app(lambda_globals.reference(name), predecessor, left_drop=1)
        product = h.app(h.app(lambda_globals.reference("*"), h.var(), left_drop=1), recursive_call)
        lambda_globals.define(name, h.lam(h.app(condition, product), meta=name))

    @staticmethod
    def define_countdown(lambda_globals: LambdaGlobals, name: str, base: int, other: str) -> None:
        """Define `name = λn. (== n 0) base (other (- n 1))`, for mutually recursive pairs."""
        h = LambdaTemplateHelpers
        condition = h.app(h.binary(lambda_globals, "==", h.const(0), right_drop=1), h.const(base), right_drop=1)
        predecessor = h.binary(lambda_globals, "-", h.const(1), right_drop=1)
        recursive_call = h.app(lambda_globals.reference(other), predecessor, left_drop=1)
        lambda_globals.define(name, h.lam(h.app(condition, recursive_call), meta=name))

    @staticmethod
    def define_call(lambda_globals: LambdaGlobals, name: str, function: str, argument: int) -> None:
        """Define `name = function argument`."""
        h = LambdaTemplateHelpers
        lambda_globals.declare(name)
        lambda_globals.define(name, h.app(lambda_globals.reference(function), h.const(argument)))

    @staticmethod
    def as_int(node: LambdaNode) -> int:
        """Assert that a normal form is an integer and return its value."""
        assert isinstance(node, LambdaInteger), f"Expected an integer, got {node!r}"
        return node.value


@pytest.fixture
def helpers():
    """Provide template building utilities."""
    return LambdaTemplateHelpers


@pytest.fixture
def source_info():
    """Provide the source metadata stand-in class."""
    return SourceInfo


@pytest.fixture
def machine():
    """Create a fresh bulk-mode machine for each test."""
    return LambdaMachine()


@pytest.fixture
def watcher():
    """Create a buffering trace watcher."""
    return LambdaBufferingTraceWatcher()


@pytest.fixture
def traced_machine(watcher):
    """Create a bulk-mode machine whose application steps are recorded by `watcher`."""
    return LambdaMachine(trace_watcher=watcher)


@pytest.fixture
def single_step_session():
    """Session that reduces one visible head step per call."""
    return LambdaSession(single_step=True)
