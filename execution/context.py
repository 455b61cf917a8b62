from dataclasses import dataclass

# Name given to every relation produced by an operator
DERIVED_RELATION_NAME = "derived"


@dataclass(frozen=True)
class ExecutionContext:
    """Run-time settings for operator evaluation."""
    derived_name: str = DERIVED_RELATION_NAME


DEFAULT_CONTEXT = ExecutionContext()
