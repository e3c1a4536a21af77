from bowling_lab.models.bowler import BowlerRecord
from bowling_lab.models.roster_meta import RosterMeta

__all__ = [
    "BowlerRecord",
    "RosterMeta",
]
