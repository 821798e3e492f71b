"""
Single-elimination bracket arithmetic.

A bracket is stored on the tournament as plain JSON:

    [{"name": "Semi-finals", "matches": [match, ...]}, {"name": "Finals", ...}]

and a match is

    {"id", "name", "teams": [team|None, team|None], "scores": [int, int],
     "status": "pending"|"live"|"completed", "result_submission_status": {},
     "room_id": "", "room_pass": ""}

Round r, match i feeds round r+1, match i // 2, slot i % 2. All helpers
mutate the bracket passed in; callers work on a deep copy and persist it.
"""

from typing import Any, Dict, List, Optional, Tuple

from backend.app.core.registry import registry
from backend.app.models.enums import MatchStatus, TeamType

Bracket = List[Dict[str, Any]]
Team = Dict[str, Any]


def team_type_from_format(format: Optional[str]) -> str:
    """'BR_SQUAD' -> 'SQUAD'. Unknown or missing team types fall back to SQUAD."""
    parts = (format or "").split("_")
    team_type = parts[1].upper() if len(parts) > 1 else ""
    if team_type in (TeamType.SOLO, TeamType.DUO, TeamType.SQUAD):
        return team_type
    return TeamType.SQUAD


def team_size_for_format(format: Optional[str]) -> int:
    return registry.defaults.team_sizes[team_type_from_format(format)]


def bracket_size(max_teams: int) -> int:
    """Round max_teams up to the next power of two (12 -> 16)."""
    size = 2
    while size < max_teams:
        size *= 2
    return size


def round_name(teams_in_round: int) -> str:
    return registry.defaults.round_names.get(teams_in_round, f"Round of {teams_in_round}")


def empty_match(match_id: str, name: str) -> Dict[str, Any]:
    return {
        "id": match_id,
        "name": name,
        "teams": [None, None],
        "scores": [0, 0],
        "status": MatchStatus.PENDING.value,
        "result_submission_status": {},
        "room_id": "",
        "room_pass": "",
    }


def generate_bracket_structure(max_teams: int, tournament_id: str) -> Bracket:
    rounds = []
    current_teams = bracket_size(max_teams)

    while current_teams >= 2:
        name = round_name(current_teams)
        slug = "-".join(name.split())
        matches = [
            empty_match(f"{tournament_id}_{slug}_m{i + 1}", f"{name} #{i + 1}")
            for i in range(current_teams // 2)
        ]
        rounds.append({"name": name, "matches": matches})
        current_teams //= 2

    return rounds


def has_placed_teams(bracket: Bracket) -> bool:
    return any(team for rnd in bracket for match in rnd["matches"] for team in match["teams"])


def place_team(bracket: Bracket, team: Team) -> bool:
    """Seats a team in the first free first-round slot. Returns False when none is left."""
    if not bracket:
        return False
    for match in bracket[0]["matches"]:
        for slot, occupant in enumerate(match["teams"]):
            if occupant is None:
                match["teams"][slot] = team
                return True
    return False


def next_slot(round_index: int, match_index: int) -> Tuple[int, int, int]:
    return round_index + 1, match_index // 2, match_index % 2


def advance_winner(bracket: Bracket, round_index: int, match_index: int, winner: Team) -> bool:
    """Copies the winner into its paired slot of the next round. False for the final."""
    next_round, next_match, slot = next_slot(round_index, match_index)
    if next_round >= len(bracket):
        return False
    matches = bracket[next_round]["matches"]
    if next_match >= len(matches):
        return False
    matches[next_match]["teams"][slot] = winner
    return True


def retract_winner(bracket: Bracket, round_index: int, match_index: int, team_id: str) -> bool:
    """Clears the next-round slot, but only while it still holds team_id."""
    next_round, next_match, slot = next_slot(round_index, match_index)
    if next_round >= len(bracket):
        return False
    matches = bracket[next_round]["matches"]
    if next_match >= len(matches):
        return False
    occupant = matches[next_match]["teams"][slot]
    if occupant and occupant.get("id") == team_id:
        matches[next_match]["teams"][slot] = None
        return True
    return False


def process_byes(bracket: Bracket) -> int:
    """
    Completes every first-round match that has exactly one team and advances
    that team. Returns the number of byes processed.
    """
    if not bracket:
        return 0
    processed = 0
    for match_index, match in enumerate(bracket[0]["matches"]):
        team_1, team_2 = match["teams"]
        if bool(team_1) == bool(team_2):
            continue
        winner = team_1 or team_2
        match["status"] = MatchStatus.COMPLETED.value
        match["scores"] = [1, 0] if team_1 else [0, 1]
        advance_winner(bracket, 0, match_index, winner)
        processed += 1
    return processed


def find_match(bracket: Bracket, round_name: str, match_id: str) -> Optional[Tuple[int, int, Dict[str, Any]]]:
    """Returns (round_index, match_index, match) or None."""
    for r_idx, rnd in enumerate(bracket):
        if rnd["name"] != round_name:
            continue
        for m_idx, match in enumerate(rnd["matches"]):
            if match["id"] == match_id:
                return r_idx, m_idx, match
        return None
    return None


def find_match_by_id(bracket: Bracket, match_id: str) -> Optional[Tuple[int, int, Dict[str, Any]]]:
    for r_idx, rnd in enumerate(bracket):
        for m_idx, match in enumerate(rnd["matches"]):
            if match["id"] == match_id:
                return r_idx, m_idx, match
    return None


def match_winner_index(match: Dict[str, Any]) -> int:
    score_1, score_2 = match["scores"]
    return 0 if score_1 > score_2 else 1


def complete_match(bracket: Bracket, round_index: int, match_index: int, scores: List[int]) -> Optional[Team]:
    """Records final scores, marks the match completed and advances the winner."""
    match = bracket[round_index]["matches"][match_index]
    match["scores"] = list(scores)
    match["status"] = MatchStatus.COMPLETED.value
    winner = match["teams"][match_winner_index(match)]
    if winner:
        advance_winner(bracket, round_index, match_index, winner)
    return winner


def gamer_ids_in(participants: List[Team]) -> set:
    return {
        member.get("gamer_id")
        for team in participants
        for member in (team.get("members") or [])
        if member.get("gamer_id")
    }


def member_uids(team: Optional[Team]) -> List[str]:
    if not team:
        return []
    return [m["uid"] for m in (team.get("members") or []) if m.get("uid")]


def compute_points(point_system: Optional[Dict[str, Any]], kills: int, position: int) -> float:
    """kills * per_kill_points + the placement bonus for position (0 when unlisted)."""
    point_system = point_system or {}
    per_kill = point_system.get("per_kill_points", 0) or 0
    placement = next(
        (p.get("points", 0) for p in point_system.get("placement_points", []) if p.get("place") == position),
        0,
    )
    return kills * per_kill + placement
