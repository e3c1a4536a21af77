from bowling_lab.roster.errors import RosterError, RosterFormatError, RosterFetchError
from bowling_lab.roster.loader import parse_roster, roster_fingerprint
from bowling_lab.roster.store import RosterStore

__all__ = [
    "RosterError", "RosterFormatError", "RosterFetchError",
    "parse_roster", "roster_fingerprint",
    "RosterStore",
]
