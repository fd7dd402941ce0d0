"""Custom exceptions for matchbench.

Metric code never raises for undefined values; it returns NaN instead.
These exceptions cover configuration mistakes and failures of the pluggable
collaborators (dataset loader, blocker, distance learner).
"""


class MatchBenchError(Exception):
    """Base class for matchbench errors."""


class ConfigError(MatchBenchError):
    """Raised when an experiment configuration is invalid.

    Attributes:
        errors: Individual validation messages.
    """

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = list(errors or [])


class ComponentError(MatchBenchError):
    """Raised when an external collaborator fails during an experiment phase.

    The original exception is chained as ``__cause__``.

    Attributes:
        phase: Experiment phase that failed (training, blocking, scoring).
        component: Description of the failing component.
    """

    def __init__(self, phase: str, component: str, message: str = ""):
        text = f"{phase} failed in {component}"
        if message:
            text = f"{text}: {message}"
        super().__init__(text)
        self.phase = phase
        self.component = component
