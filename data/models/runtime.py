from enum import Enum


class SessionState(Enum):
    UNAUTHENTICATED = "UNAUTHENTICATED"
    LOGGING_IN = "LOGGING_IN"
    AUTHENTICATED = "AUTHENTICATED"
    FAILED = "FAILED"
