from typing import List, Optional

from .errors import NotFoundError, ValidationError
from .models import db, Player, Team
from .patches import NewTeam, TeamPatch
from .persistence import commit_or_conflict


class TeamRegistry:
    """Create, read, patch and delete two-player teams."""
    
    def list_teams(self) -> List[Team]:
        return Team.query.order_by(Team.ranking.desc(), Team.id).all()
    
    def get_team(self, team_id: int) -> Optional[Team]:
        return db.session.get(Team, team_id)
    
    def _require(self, team_id: int) -> Team:
        team = self.get_team(team_id)
        if team is None:
            raise NotFoundError('Team not found')
        return team
    
    def create_team(self, data: dict) -> Team:
        values = NewTeam.from_json(data)
        if not values.name or values.player1_id is None or values.player2_id is None:
            raise ValidationError('Team name and both player IDs are required')
        
        if values.player1_id == values.player2_id:
            raise ValidationError('A team cannot have the same player twice')
        
        found = Player.query.filter(
            Player.id.in_([values.player1_id, values.player2_id])
        ).count()
        if found != 2:
            raise ValidationError('One or both players not found')
        
        team = Team(**values.changes())
        db.session.add(team)
        commit_or_conflict('Team could not be created')
        return team
    
    def update_team(self, team_id: int, data: dict) -> Team:
        """Players are fixed at creation; only name and record change."""
        team = self._require(team_id)
        TeamPatch.from_json(data).apply(team)
        commit_or_conflict('Team could not be updated')
        return team
    
    def delete_team(self, team_id: int) -> None:
        team = self._require(team_id)
        db.session.delete(team)
        commit_or_conflict('Team still has matches')
