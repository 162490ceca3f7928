from dataclasses import dataclass
from typing import Literal

ErrorCategory = Literal["validation", "not_found", "infrastructure", "unexpected"]


@dataclass(frozen=True)
class AppError:
    """Failure value carried by ``returns.result.Failure`` out of a use case.

    ``blob_id`` is set when the failure concerns a single blob, so batch callers can
    report it without parsing the message.
    """

    category: ErrorCategory
    message: str
    blob_id: str | None = None

    def __str__(self) -> str:
        return self.message
