"""
Exception types for experiment runs and scene management.
"""

from typing import Any, Iterable, Optional


class ProbsimError(Exception):
    """Base class for all probsim errors."""


class UnknownExperimentKind(ProbsimError, KeyError):
    """Requested experiment kind is not in the scenario catalog."""

    def __init__(self, kind: Any, known: Optional[Iterable[Any]] = None):
        self.kind = kind
        self.known = list(known) if known is not None else []
        message = f"Unknown experiment kind '{kind}'"
        if self.known:
            message += f" (expected one of: {', '.join(str(k) for k in self.known)})"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class SceneNotClearedError(ProbsimError, RuntimeError):
    """materialize() was called while the scene still owns entities."""

    def __init__(self, owned: int):
        self.owned = owned
        super().__init__(
            f"Scene still owns {owned} entities; clear() must run before materialize()"
        )


class ExperimentInProgress(ProbsimError, RuntimeError):
    """A run was requested while another run is in flight."""

    def __init__(self, kind: Any = None):
        self.kind = kind
        super().__init__("An experiment run is already in progress")
