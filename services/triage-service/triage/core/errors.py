class SuggestionUnavailableError(Exception):
    """
    Raised by a suggestion generator that could not produce responses.
    The queue must not advance; callers surface this as a retryable error.
    """

    def __init__(self, ticket_id: str, reason: str = "Suggestion service unavailable"):
        super().__init__(f"{reason} (ticket {ticket_id})")
        self.ticket_id = ticket_id
        self.reason = reason


class StaleSuggestionsError(Exception):
    """The session moved on while suggestions for the previous ticket were being fetched."""
