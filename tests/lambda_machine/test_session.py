"""Tests for evaluation sessions and the top-level reduction loops."""

import dataclasses

import pytest

from lambda_machine import (
    EMPTY_ENVIRONMENT, LambdaApplication, LambdaClosure, LambdaEvalError, LambdaInteger, LambdaMachine, LambdaSession
)


def omega(helpers):
    """Build the live graph for (λx. x x) (λx. x x), which has no normal form."""
    self_application = helpers.lam(helpers.app(helpers.var(), helpers.var()), meta="w")
    return helpers.app(self_application, self_application).materialize(EMPTY_ENVIRONMENT)


class TestLambdaSession:
    """Test session configuration and reduction loops."""

    def test_defaults(self):
        """Test that the default session reduces in bulk without a callback."""
        session = LambdaSession()
        assert not session.single_step
        assert session.application_callback is None

    def test_session_is_frozen(self):
        """Test that session controls cannot change once configured."""
        session = LambdaSession()

        with pytest.raises(dataclasses.FrozenInstanceError):
            session.single_step = True  # type: ignore[misc]

    def test_normalize_returns_normal_node_unchanged(self):
        """Test that normalizing a value already in normal form is a no-op."""
        value = LambdaInteger(1)
        assert LambdaSession().normalize(value) is value

    def test_step_limit(self, helpers):
        """Test that a non-terminating term stops at the step limit with an evaluation error."""
        with pytest.raises(LambdaEvalError, match="Step limit of 50 exceeded"):
            LambdaSession().normalize(omega(helpers), max_steps=50)

    def test_step_limit_applies_to_steps(self, helpers):
        """Test that the stepping generator honours the step limit too."""
        states = LambdaSession().steps(omega(helpers), max_steps=3)

        with pytest.raises(LambdaEvalError):
            list(states)

    def test_recursion_too_deep(self, machine, helpers):
        """Test that unbounded strict recursion is reported as an evaluation error."""
        h = helpers
        table = machine.globals
        table.declare("grow")
        recursive_call = h.app(table.reference("grow"), h.var(), left_drop=1)
        table.define("grow", h.lam(h.binary(table, "+", recursive_call, right_drop=0), meta="grow"))
        h.define_call(table, "main", "grow", 0)

        with pytest.raises(LambdaEvalError, match="nested too deeply"):
            machine.evaluate("main")

    def test_steps_yield_start_and_normal_form(self, helpers):
        """Test that stepping yields the starting node first and the normal form last."""
        identity = LambdaClosure(EMPTY_ENVIRONMENT, True, helpers.var())
        start = LambdaApplication(identity, LambdaInteger(2))

        states = list(LambdaSession().steps(start))

        assert states[0] is start
        assert states[-1] == LambdaInteger(2)
        assert len(states) == 2

    def test_stepping_can_resume(self, helpers):
        """Test that a partially stepped graph can be finished later."""
        machine = LambdaMachine(single_step=True)
        helpers.define_factorial(machine.globals)
        helpers.define_call(machine.globals, "main", "fact", 3)

        states = machine.steps("main")
        for _ in range(4):
            current = next(states)

        result = machine.session.normalize(current)
        assert helpers.as_int(result) == 6

    def test_logs_normal_form(self, caplog):
        """Test that normalization is logged at debug level."""
        with caplog.at_level("DEBUG", logger="LambdaSession"):
            LambdaSession().normalize(LambdaInteger(1))

        assert "Reached normal form" in caplog.text
