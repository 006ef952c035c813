import logging
from typing import List, Optional

from .broadcaster import ScoreBroadcaster
from .errors import ForbiddenError, NotFoundError, ValidationError
from .models import db, Match, Team, Tournament, User
from .patches import MatchPatch, NewMatch, ScorePatch
from .persistence import commit_or_conflict

logger = logging.getLogger(__name__)


class MatchRegistry:
    """
    Match records and live scoring.
    
    Score updates are pushed to the broadcaster after they are committed;
    concurrent updates to the same match are last-write-wins.
    """
    
    def __init__(self, broadcaster: ScoreBroadcaster):
        self.broadcaster = broadcaster
    
    def list_matches(self, status: str = None, tournament_id: int = None) -> List[Match]:
        """Matches in schedule order, optionally filtered."""
        query = Match.query
        
        if status:
            query = query.filter(Match.status == status)
        if tournament_id is not None:
            query = query.filter(Match.tournament_id == tournament_id)
        
        return query.order_by(Match.scheduled_at.asc(), Match.id).all()
    
    def get_match(self, match_id: int) -> Optional[Match]:
        return db.session.get(Match, match_id)
    
    def _require(self, match_id: int) -> Match:
        match = self.get_match(match_id)
        if match is None:
            raise NotFoundError('Match not found')
        return match
    
    def _check_referee(self, referee_id: Optional[int]):
        if referee_id is not None and db.session.get(User, referee_id) is None:
            raise ValidationError('Referee not found')
    
    def create_match(self, data: dict) -> Match:
        values = NewMatch.from_json(data)
        if values.tournament_id is None or values.team1_id is None or values.team2_id is None:
            raise ValidationError('Tournament ID, team1 ID, and team2 ID are required')
        
        if values.team1_id == values.team2_id:
            raise ValidationError('A team cannot play against itself')
        
        if db.session.get(Tournament, values.tournament_id) is None:
            raise ValidationError('Tournament not found')
        
        found = Team.query.filter(Team.id.in_([values.team1_id, values.team2_id])).count()
        if found != 2:
            raise ValidationError('One or both teams not found')
        
        self._check_referee(values.referee_id)
        
        match = Match(**values.changes())
        db.session.add(match)
        commit_or_conflict('Match could not be created')
        return match
    
    def update_match(self, match_id: int, data: dict) -> Match:
        """Patch scheduling details: referee, time, court and status."""
        match = self._require(match_id)
        values = MatchPatch.from_json(data)
        self._check_referee(values.referee_id)
        
        values.apply(match)
        commit_or_conflict('Match could not be updated')
        return match
    
    def update_score(self, match_id: int, data: dict, identity: User) -> Match:
        """
        Patch set scores, status and winner, then broadcast the new state.
        
        Admins may score any match; a referee only the matches assigned to
        them. A rejected request leaves the record untouched.
        """
        match = self._require(match_id)
        
        if not identity.is_admin and match.referee_id != identity.id:
            raise ForbiddenError('You can only update scores for matches you are refereeing')
        
        values = ScorePatch.from_json(data)
        if values.winner_id is not None and values.winner_id not in (match.team1_id, match.team2_id):
            raise ValidationError('Winner must be one of the two teams in the match')
        
        values.apply(match)
        commit_or_conflict('Match score could not be updated')
        
        logger.info(f"Score updated for match {match.id} by user {identity.id}")
        self.broadcaster.publish(match.id, match.to_dict())
        return match
    
    def delete_match(self, match_id: int) -> None:
        match = self._require(match_id)
        db.session.delete(match)
        commit_or_conflict('Match could not be deleted')
