"""
Typed request payloads.

Every field of a patch is optional: ``None`` means "not supplied" and leaves the
stored value untouched when the patch is applied. Create payloads reuse the
same field parsers and add the fields that can only be set once.
"""
from dataclasses import dataclass, field, fields
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional

from .errors import ValidationError
from .models import MATCH_STATUSES, TOURNAMENT_STATUSES


def parse_str(name, value):
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value


# Range of an INTEGER column (32-bit on PostgreSQL)
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

# Numeric(10, 2) holds eight integer digits
MONEY_LIMIT = Decimal(10) ** 8


def parse_int(name, value):
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{name} must be an integer")
    if not INT_MIN <= number <= INT_MAX:
        raise ValidationError(f"{name} is out of range")
    return number


def parse_score(name, value):
    score = parse_int(name, value)
    if score < 0:
        raise ValidationError(f"{name} cannot be negative")
    return score


def parse_money(name, value):
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a number")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{name} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{name} must be a number")
    if abs(amount) >= MONEY_LIMIT:
        raise ValidationError(f"{name} is out of range")
    return amount


def parse_datetime(name, value):
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be an ISO-8601 string")
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"{name} must be an ISO-8601 string")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_date(name, value):
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    return parse_datetime(name, value).date()


def choice_of(choices):
    def parse_choice(name, value):
        if value not in choices:
            raise ValidationError(f"{name} must be one of: {', '.join(choices)}")
        return value
    return parse_choice


def _optional(parser):
    return field(default=None, metadata={'parse': parser})


@dataclass
class Patch:
    """Base for payloads whose fields are all optional."""
    
    @classmethod
    def from_json(cls, data: Optional[dict]) -> 'Patch':
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        
        values = {}
        for f in fields(cls):
            raw = data.get(f.name)
            if raw is None:
                continue
            values[f.name] = f.metadata['parse'](f.name, raw)
        return cls(**values)
    
    def changes(self) -> dict:
        """Fields that were supplied, by name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
    
    def apply(self, record):
        for name, value in self.changes().items():
            setattr(record, name, value)
        return record


@dataclass
class PlayerPatch(Patch):
    first_name: Optional[str] = _optional(parse_str)
    last_name: Optional[str] = _optional(parse_str)
    email: Optional[str] = _optional(parse_str)
    phone: Optional[str] = _optional(parse_str)
    ranking: Optional[int] = _optional(parse_int)
    wins: Optional[int] = _optional(parse_score)
    losses: Optional[int] = _optional(parse_score)


@dataclass
class TeamPatch(Patch):
    name: Optional[str] = _optional(parse_str)
    ranking: Optional[int] = _optional(parse_int)
    wins: Optional[int] = _optional(parse_score)
    losses: Optional[int] = _optional(parse_score)


@dataclass
class NewTeam(TeamPatch):
    player1_id: Optional[int] = _optional(parse_int)
    player2_id: Optional[int] = _optional(parse_int)


@dataclass
class TournamentPatch(Patch):
    name: Optional[str] = _optional(parse_str)
    description: Optional[str] = _optional(parse_str)
    start_date: Optional[date] = _optional(parse_date)
    end_date: Optional[date] = _optional(parse_date)
    status: Optional[str] = _optional(choice_of(TOURNAMENT_STATUSES))
    max_teams: Optional[int] = _optional(parse_score)
    entry_fee: Optional[Decimal] = _optional(parse_money)
    prize_pool: Optional[Decimal] = _optional(parse_money)


@dataclass
class MatchPatch(Patch):
    referee_id: Optional[int] = _optional(parse_int)
    scheduled_at: Optional[datetime] = _optional(parse_datetime)
    court_number: Optional[int] = _optional(parse_int)
    status: Optional[str] = _optional(choice_of(MATCH_STATUSES))


@dataclass
class NewMatch(MatchPatch):
    tournament_id: Optional[int] = _optional(parse_int)
    team1_id: Optional[int] = _optional(parse_int)
    team2_id: Optional[int] = _optional(parse_int)


@dataclass
class ScorePatch(Patch):
    team1_score_set1: Optional[int] = _optional(parse_score)
    team1_score_set2: Optional[int] = _optional(parse_score)
    team1_score_set3: Optional[int] = _optional(parse_score)
    team2_score_set1: Optional[int] = _optional(parse_score)
    team2_score_set2: Optional[int] = _optional(parse_score)
    team2_score_set3: Optional[int] = _optional(parse_score)
    status: Optional[str] = _optional(choice_of(MATCH_STATUSES))
    winner_id: Optional[int] = _optional(parse_int)
