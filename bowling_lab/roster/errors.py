"""
Roster ingestion errors. The planning engine never raises these; they
belong to loading and refreshing the roster.
"""


class RosterError(Exception):
    """Base class for roster problems."""


class RosterFormatError(RosterError):
    """Input could not be parsed into any usable bowler rows."""


class RosterFetchError(RosterError):
    """Remote roster source was unreachable or answered with an error."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code
