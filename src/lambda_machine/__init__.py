"""Lambda machine: a lazy, sharing graph reducer for compiled lambda-calculus terms."""

# Main API
from lambda_machine.lambda_machine import LambdaMachine

# Exceptions
from lambda_machine.lambda_error import LambdaError, LambdaLinkError, LambdaEvalError, LambdaFault

# Environments, templates and live nodes
from lambda_machine.lambda_environment import LambdaEnvironment, EMPTY_ENVIRONMENT
from lambda_machine.lambda_slot import LambdaSlot
from lambda_machine.lambda_template import (
    LambdaTemplate, LambdaVarOccurrence, LambdaGlobalRef, LambdaAbstractionBody, LambdaApplicationTemplate
)
from lambda_machine.lambda_node import (
    LambdaNode, LambdaApplicable, LambdaIndirection, LambdaClosure, LambdaApplication
)

# Builtins
from lambda_machine.lambda_builtins import (
    LambdaBuiltin, LambdaInteger, LambdaIntOperator, LambdaIntPartial, church_boolean
)
from lambda_machine.lambda_builtin_registry import LambdaBuiltinRegistry

# Linking, sessions and rendering
from lambda_machine.lambda_globals import LambdaGlobals
from lambda_machine.lambda_session import LambdaSession, DEFAULT_SESSION
from lambda_machine.lambda_render import render, describe_meta

# Trace watchers (for debugging)
from lambda_machine.lambda_trace import (
    LambdaTraceWatcher, LambdaStdoutTraceWatcher, LambdaFileTraceWatcher, LambdaBufferingTraceWatcher
)


__all__ = [
    # Main API
    "LambdaMachine",

    # Exceptions
    "LambdaError", "LambdaLinkError", "LambdaEvalError", "LambdaFault",

    # Environments, templates and live nodes
    "LambdaEnvironment", "EMPTY_ENVIRONMENT", "LambdaSlot",
    "LambdaTemplate", "LambdaVarOccurrence", "LambdaGlobalRef", "LambdaAbstractionBody", "LambdaApplicationTemplate",
    "LambdaNode", "LambdaApplicable", "LambdaIndirection", "LambdaClosure", "LambdaApplication",

    # Builtins
    "LambdaBuiltin", "LambdaInteger", "LambdaIntOperator", "LambdaIntPartial", "church_boolean",
    "LambdaBuiltinRegistry",

    # Linking, sessions and rendering
    "LambdaGlobals", "LambdaSession", "DEFAULT_SESSION", "render", "describe_meta",

    # Trace watchers
    "LambdaTraceWatcher", "LambdaStdoutTraceWatcher", "LambdaFileTraceWatcher", "LambdaBufferingTraceWatcher",
]
