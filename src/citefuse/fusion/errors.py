"""Errors raised while fusing candidate descriptions."""

__all__ = ["FusionError", "InvalidInputError", "EmptyResultError"]


class FusionError(Exception):
    """Base class for citation fusion failures."""


class InvalidInputError(FusionError):
    """Raised when no usable candidate description was supplied."""

    def __init__(self, message: str, index: int | None = None) -> None:
        """Initialize invalid input error.

        Parameters
        ----------
        message : str
            Error message.
        index : int | None, optional
            Position of the offending candidate, if any.
        """
        super().__init__(message)
        self.index = index


class EmptyResultError(FusionError):
    """Raised when the score threshold excludes every candidate."""

    def __init__(self, score_threshold: int, max_score: int) -> None:
        """Initialize empty result error.

        Parameters
        ----------
        score_threshold : int
            Threshold that was applied.
        max_score : int
            Highest candidate score seen before filtering.
        """
        super().__init__(
            f"Score threshold {score_threshold} excludes all candidates "
            f"(highest score: {max_score})"
        )
        self.score_threshold = score_threshold
        self.max_score = max_score
