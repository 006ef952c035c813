from typing import List, Optional

from .errors import ConflictError, NotFoundError, ValidationError
from .models import db, Tournament, User
from .patches import TournamentPatch
from .persistence import commit_or_conflict


class TournamentRegistry:
    """
    Manages tournament records:
    - Create/update/delete tournaments
    - List newest-first by start date
    """
    
    def list_tournaments(self, status: str = None) -> List[Tournament]:
        query = Tournament.query
        
        if status:
            query = query.filter_by(status=status)
        
        return query.order_by(Tournament.start_date.desc(), Tournament.id.desc()).all()
    
    def get_tournament(self, tournament_id: int) -> Optional[Tournament]:
        return db.session.get(Tournament, tournament_id)
    
    def _require(self, tournament_id: int) -> Tournament:
        tournament = self.get_tournament(tournament_id)
        if tournament is None:
            raise NotFoundError('Tournament not found')
        return tournament
    
    def create_tournament(self, data: dict, creator: User = None) -> Tournament:
        """Create a tournament owned by ``creator``; status defaults to upcoming."""
        values = TournamentPatch.from_json(data)
        if not values.name or values.start_date is None:
            raise ValidationError('Tournament name and start date are required')
        
        tournament = Tournament(**values.changes())
        if creator is not None:
            tournament.created_by = creator.id
        
        db.session.add(tournament)
        commit_or_conflict('Tournament could not be created')
        return tournament
    
    def update_tournament(self, tournament_id: int, data: dict) -> Tournament:
        tournament = self._require(tournament_id)
        TournamentPatch.from_json(data).apply(tournament)
        commit_or_conflict('Tournament could not be updated')
        return tournament
    
    def delete_tournament(self, tournament_id: int) -> None:
        tournament = self._require(tournament_id)
        if tournament.matches:
            raise ConflictError('Tournament still has matches')
        db.session.delete(tournament)
        commit_or_conflict('Tournament still has matches')
