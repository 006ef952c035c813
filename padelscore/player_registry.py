from typing import List, Optional

from .errors import NotFoundError, ValidationError
from .models import db, Player
from .patches import PlayerPatch
from .persistence import commit_or_conflict


class PlayerRegistry:
    """Create, read, patch and delete players."""
    
    def list_players(self) -> List[Player]:
        """All players, strongest ranking first."""
        return Player.query.order_by(Player.ranking.desc(), Player.id).all()
    
    def get_player(self, player_id: int) -> Optional[Player]:
        return db.session.get(Player, player_id)
    
    def _require(self, player_id: int) -> Player:
        player = self.get_player(player_id)
        if player is None:
            raise NotFoundError('Player not found')
        return player
    
    def create_player(self, data: dict) -> Player:
        values = PlayerPatch.from_json(data)
        if not values.first_name or not values.last_name:
            raise ValidationError('First name and last name are required')
        
        player = Player(**values.changes())
        db.session.add(player)
        commit_or_conflict('Player with this email already exists')
        return player
    
    def update_player(self, player_id: int, data: dict) -> Player:
        player = self._require(player_id)
        PlayerPatch.from_json(data).apply(player)
        commit_or_conflict('Player with this email already exists')
        return player
    
    def delete_player(self, player_id: int) -> None:
        player = self._require(player_id)
        db.session.delete(player)
        commit_or_conflict('Player is still part of a team')
