"""Error taxonomy for footprint lookups.

Failures fall into four families, each with a fixed retry default:

- ``ValidationError``: a bad query coordinate or an unusable feature
  geometry.  Retrying the same input cannot help.
- ``TransientError``: the footprint dataset or a remote service could
  not be reached.  The lookup may succeed later.
- ``PermanentError``: the matcher itself is misconfigured.
- ``ContractError``: a payload from outside (dataset bytes, storage
  settings) does not have the expected shape.

Subclasses pin their ``stage`` and ``code`` as class attributes so a
log line or ``to_error_dict()`` payload identifies which part of the
lookup failed without parsing the message.
"""

from __future__ import annotations


class MatcherError(Exception):
    """Base class for every error raised by the footprint matcher.

    Attributes:
        message: Human-readable error description.
        stage: Lookup step that failed (``"load_features"``,
            ``"geometry"``, ``"geocoding"``, ...).
        code: Machine-readable code such as ``"SOURCE_NOT_FOUND"``.
        retryable: Whether repeating the lookup could succeed.
        correlation_id: Identifier tying the error to one request.
    """

    default_stage: str = ""
    default_code: str = ""
    default_retryable: bool = False
    #: Empty on the base class; derived from ``retryable`` instead.
    default_category: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool | None = None,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = self.default_retryable if retryable is None else retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        if self.default_category:
            return self.default_category
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Flatten the error into the keys logged and shown to the caller."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Families
# ---------------------------------------------------------------------------


class ValidationError(MatcherError):
    """Query coordinate or feature geometry rejected."""

    default_category = "validation"


class TransientError(MatcherError):
    """Dataset or remote service temporarily out of reach."""

    default_category = "transient"
    default_retryable = True


class PermanentError(MatcherError):
    """Matcher configuration that no retry will fix."""

    default_category = "permanent"


class ContractError(MatcherError):
    """External payload or setting with an unexpected shape."""

    default_category = "contract"


# ---------------------------------------------------------------------------
# Query errors
# ---------------------------------------------------------------------------


class InvalidCoordinateError(ValidationError):
    """Query latitude or longitude outside WGS 84 bounds."""

    default_stage = "query"
    default_code = "COORDINATE_INVALID"
