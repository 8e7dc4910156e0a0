"""Exception hierarchy for the inquiry relay pipeline.

Each external step of the pipeline wraps its transport or API errors in one of
these exceptions so the orchestrator can apply the propagation policy:

- ``SuggestionFailure`` never leaves the staff notifier.
- ``LookupFailure`` and ``NotificationFailure`` turn an inquiry into an error
  acknowledgment.
- ``RelayFailure`` is logged while acknowledging, and propagated for staff replies.
"""


class RelayError(Exception):
    """Base exception for all relay pipeline errors."""


class LookupFailure(RelayError):
    """Raised when the customer profile or order history cannot be fetched."""

    def __init__(self, message: str, sender_id: str | None = None):
        self.sender_id = sender_id
        sender_info = f" for {sender_id}" if sender_id else ""
        super().__init__(f"Customer lookup failed{sender_info}: {message}")


class SuggestionFailure(RelayError):
    """Raised when the language-model backend call errors."""

    def __init__(self, message: str, model: str | None = None):
        self.model = model
        model_info = f" ({model})" if model else ""
        super().__init__(f"Suggestion generation failed{model_info}: {message}")


class NotificationFailure(RelayError):
    """Raised when the staff notification cannot be delivered."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        status_info = f" (status: {status_code})" if status_code else ""
        super().__init__(f"Staff notification failed{status_info}: {message}")


class RelayFailure(RelayError):
    """Raised when a reply cannot be delivered with a one-time reply token."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        status_info = f" (status: {status_code})" if status_code else ""
        super().__init__(f"Reply delivery failed{status_info}: {message}")


class DialogFailure(RelayError):
    """Raised when the staff reply dialog cannot be opened."""

    def __init__(self, message: str):
        super().__init__(f"Reply dialog failed: {message}")
