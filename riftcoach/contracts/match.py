"""
Match information data contracts for Riot API Match-V5.
"""

from pydantic import Field

from .common import BaseContract, Role, Team

_QUEUE_LABELS: dict[int, str] = {
    420: "Ranked Solo/Duo",
    440: "Ranked Flex",
    400: "Normal Draft",
    430: "Normal Blind",
    450: "ARAM",
    900: "URF",
    1020: "One for All",
    1300: "Nexus Blitz",
    1400: "Ultimate Spellbook",
    0: "Custom",
}

_MODE_LABELS: dict[str, str] = {
    "ARAM": "ARAM",
    "URF": "URF",
    "ARURF": "URF",
    "ONEFORALL": "One for All",
    "PRACTICETOOL": "Practice",
}


class Participant(BaseContract):
    """Participant (player) information in a match."""

    participant_id: int = Field(..., ge=1, le=10)
    puuid: str = Field(..., description="Player's PUUID")
    champion_id: int = Field(0, description="Champion ID")
    champion_name: str = Field("Unknown", description="Champion name")
    team_id: Team = Field(..., description="100 (blue) or 200 (red)")
    team_position: str | None = Field(None, description="Assigned position")
    win: bool = Field(False)

    kills: int = Field(0, ge=0)
    deaths: int = Field(0, ge=0)
    assists: int = Field(0, ge=0)
    total_minions_killed: int = Field(0, ge=0)
    neutral_minions_killed: int = Field(0, ge=0)
    vision_score: int = Field(0, ge=0)
    gold_earned: int = Field(0, ge=0)
    total_damage_dealt_to_champions: int = Field(0, ge=0)

    @property
    def role(self) -> Role:
        return Role.from_position(self.team_position)

    @property
    def resource_count(self) -> int:
        return self.total_minions_killed + self.neutral_minions_killed


class MatchInfo(BaseContract):
    """Match summary: identity, duration and the fixed participant list."""

    match_id: str = Field(..., description="Match ID")
    game_duration: int = Field(..., ge=0, description="Game duration in seconds")
    game_mode: str | None = Field(None, description="Riot gameMode string")
    queue_id: int | None = Field(None, description="Riot queue ID")
    participants: list[Participant] = Field(..., max_length=10)

    @property
    def game_mode_label(self) -> str:
        """Readable game mode, queue ID first then the gameMode string."""
        if self.queue_id is not None and self.queue_id in _QUEUE_LABELS:
            return _QUEUE_LABELS[self.queue_id]
        if self.game_mode:
            mode = self.game_mode.upper()
            if mode in _MODE_LABELS:
                return _MODE_LABELS[mode]
            if "RANKED" in mode:
                return "Ranked"
            return self.game_mode
        return "Classic"

    def find_participant(self, puuid: str) -> Participant | None:
        """Exact PUUID match."""
        for participant in self.participants:
            if participant.puuid == puuid:
                return participant
        return None

    def participant(self, participant_id: int | None) -> Participant | None:
        if participant_id is None:
            return None
        for participant in self.participants:
            if participant.participant_id == participant_id:
                return participant
        return None

    def teammates_of(self, player: Participant) -> list[Participant]:
        return [
            p
            for p in self.participants
            if p.team_id == player.team_id and p.participant_id != player.participant_id
        ]

    def opponent_of(self, player: Participant, role: Role) -> Participant | None:
        """Same-role participant on the other team, if one exists."""
        if role is Role.UNKNOWN:
            return None
        for participant in self.participants:
            if participant.team_id != player.team_id and participant.role is role:
                return participant
        return None
