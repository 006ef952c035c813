"""
PadelScore API - tournament backend for padel scoring

Responsibilities:
- Players, teams, tournaments and matches (CRUD over SQL)
- Tournament leaderboards derived from completed matches
- Live score updates pushed to viewers of a match
- Bearer-token identities with admin / referee roles
"""
