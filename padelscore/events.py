from dataclasses import dataclass
from datetime import datetime
import json

SCORE_UPDATE = "score-update"


def match_channel(match_id) -> str:
    """Name of the live channel viewers of one match subscribe to."""
    return f"match-{match_id}"


@dataclass
class ScoreUpdate:
    match_id: int
    match: dict
    timestamp: str = None
    
    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.utcnow().isoformat() + "Z"
    
    @property
    def channel(self) -> str:
        return match_channel(self.match_id)
    
    def to_dict(self) -> dict:
        return {
            "matchId": self.match_id,
            "match": self.match,
            "timestamp": self.timestamp
        }
    
    def to_json(self) -> str:
        return json.dumps(self.to_dict())
    
    def to_sse(self) -> str:
        return f"event: {SCORE_UPDATE}\ndata: {self.to_json()}\n\n"
