class LLMUpstreamError(RuntimeError):
    """Raised when LLM provider fails (timeouts, network errors, non-success status)."""
    pass


class LLMContractError(RuntimeError):
    """Raised when LLM provider answers successfully but with no usable text."""
    pass


class BookingPersistenceError(RuntimeError):
    """Raised when a booking row cannot be written to or read from the data store."""
    pass


class BookingNotFoundError(LookupError):
    pass


class InvalidStatusTransitionError(ValueError):
    pass


class ConversationStoreError(RuntimeError):
    """Raised when chat history cannot be read or appended."""
    pass


class CatalogUnavailableError(RuntimeError):
    pass


class MessageSendError(RuntimeError):
    """Raised when the messaging platform rejects a reply."""
    pass


class SettingsPersistenceError(RuntimeError):
    pass
