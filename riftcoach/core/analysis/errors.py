"""Analysis engine exceptions.

Only ``ParticipantNotFoundError`` reaches callers. A missing lane opponent
or a missing snapshot is absorbed by the detectors (benchmark fallback or
skipping the item) and logged.
"""


class AnalysisError(Exception):
    """Base exception for analysis failures."""

    pass


class ParticipantNotFoundError(AnalysisError):
    """Raised when the requested PUUID is not in the match participants."""

    def __init__(self, match_id: str, puuid: str) -> None:
        super().__init__(f"Player not found in match participants: match_id={match_id}")
        self.match_id = match_id
        self.puuid = puuid
