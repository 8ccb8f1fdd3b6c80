# src/eddy/contracts/errors.py
"""Error contracts.

Two families, kept strictly apart:

- ConfigError: the operator asked for something malformed. Detected before
  any I/O; the message names the offending field or string.
- EngineError: the engine (count, clock or snapshot source) failed. The
  underlying cause is chained via ``raise ... from`` so operators can tell
  "cluster has no work left" from "cluster is unreachable".

Backpressure and cancellation are NOT errors and have no exception here.
See ScanStatus and WaitStatus in eddy.contracts.enums.
"""


class ConfigError(ValueError):
    """Raised when user-supplied scan options are invalid."""

    pass


class ConflictingRowSelectorsError(ConfigError):
    """Raised when options select rows in more than one mode.

    Attributes:
        fields: Names of every row-selection field that was set, in
            declaration order (exact_row, row_prefix, start_row, end_row).
    """

    def __init__(self, fields: tuple[str, ...]) -> None:
        self.fields = fields
        super().__init__(
            f"Conflicting row selectors: {', '.join(fields)}. "
            "Specify only one of an exact row, a row prefix, or a start/end range."
        )


class MalformedColumnError(ConfigError):
    """Raised when a column specifier has more than one ':' separator.

    Attributes:
        column: The original column string as supplied by the operator.
    """

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"Column {column!r} has too many fields (indicated by ':'). Use 'family' or 'family:qualifier'.")


class EngineError(Exception):
    """Raised when an engine capability (count, clock, snapshot) fails."""

    pass


class EngineUnavailableError(EngineError):
    """Raised when the engine's backing store cannot be reached."""

    pass
