"""Error taxonomy for a scaffolding run.

Every fatal condition raises a subclass of :class:`ScaffoldError`.  Each
subclass carries a ``kind`` tag that the pipeline copies into the
``RunOutcome`` so callers can tell failures apart without matching on
message text.  Optional template pieces that are absent are not errors at
all: they are recorded as :class:`SoftMissingWarning` values and the run
continues.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class ScaffoldError(Exception):
    """Base class for fatal scaffolding errors.

    Attributes:
        kind: Failure tag (``invalid-input``, ``fetch``, ...).
        path: Offending filesystem path, when there is one.
        step: Engine step or pipeline stage that failed.
        rule: Relocation rule key involved in the failure.
        cause: The underlying exception, if any.
    """

    kind = "error"

    def __init__(
        self,
        message: str,
        *,
        path: str | Path | None = None,
        step: str = "",
        rule: str = "",
        cause: BaseException | None = None,
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.step = step
        self.rule = rule
        self.cause = cause
        super().__init__(message)

    def describe(self) -> str:
        """Return a one-paragraph diagnostic with all available context."""
        parts = [str(self)]
        if self.step:
            parts.append(f"step: {self.step}")
        if self.rule:
            parts.append(f"rule: {self.rule}")
        if self.path is not None:
            parts.append(f"path: {self.path}")
        if self.cause is not None:
            parts.append(f"cause: {type(self.cause).__name__}: {self.cause}")
        return "\n  ".join(parts)


class InvalidInputError(ScaffoldError):
    """Bad project name, unknown variant, or unusable template input."""

    kind = "invalid-input"


class DestinationConflictError(ScaffoldError):
    """The destination cannot be used under the selected policy."""

    kind = "destination-conflict"


class FetchError(ScaffoldError):
    """Retrieving the template snapshot failed."""

    kind = "fetch"

    def __init__(
        self,
        message: str,
        *,
        command: str = "",
        stderr: str = "",
        **kwargs,
    ) -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(message, **kwargs)


class RelocationError(ScaffoldError):
    """An unexpected filesystem failure during a mandatory engine step."""

    kind = "relocation"


class BootstrapError(ScaffoldError):
    """The package manager returned a failure."""

    kind = "bootstrap"

    def __init__(
        self,
        message: str,
        *,
        command: str = "",
        exit_code: int | None = None,
        **kwargs,
    ) -> None:
        self.command = command
        self.exit_code = exit_code
        super().__init__(message, **kwargs)


@dataclass(frozen=True)
class SoftMissingWarning:
    """An optional template piece that was absent and therefore skipped.

    Recorded by the engine and summarised at the end of a run; never raised.
    """

    rule: str
    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.rule}: {self.message} ({self.path})"
