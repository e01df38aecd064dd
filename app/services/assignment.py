"""Team membership rules: size limit, double-booking detection, substitution."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from app.models import Team, Technician


class AssignmentError(ValueError):
    """A technician/team assignment breaks a membership rule."""


def _label(tech_id: str, names: Mapping[str, str]) -> str:
    return names.get(tech_id, tech_id)


def find_conflicts(
    technician_ids: Iterable[str],
    teams: Iterable[Team],
    exclude_team_id: str | None = None,
) -> list[tuple[str, Team]]:
    """Return (technician_id, team) pairs where the technician already sits in another active team."""
    wanted = set(technician_ids)
    conflicts = []
    for team in teams:
        if not team.is_active or team.id == exclude_team_id:
            continue
        for tech_id in team.technician_ids or []:
            if tech_id in wanted:
                conflicts.append((tech_id, team))
    return conflicts


def check_team_members(
    technician_ids: list[str],
    teams: Iterable[Team],
    max_technicians: int,
    names: Mapping[str, str] | None = None,
    exclude_team_id: str | None = None,
) -> None:
    """Validate a team's member list before it is stored."""
    names = names or {}
    if len(technician_ids) != len(set(technician_ids)):
        raise AssignmentError("Technician listed more than once in the team")
    if len(technician_ids) > max_technicians:
        raise AssignmentError(f"A team can have at most {max_technicians} technicians")

    conflicts = find_conflicts(technician_ids, teams, exclude_team_id=exclude_team_id)
    if conflicts:
        tech_id, team = conflicts[0]
        raise AssignmentError(
            f"Technician {_label(tech_id, names)} is already assigned to {team.name}"
        )


def substitute_technician(
    team: Team,
    old_technician_id: str,
    new_technician_id: str,
    teams: Iterable[Team],
    names: Mapping[str, str] | None = None,
) -> list[str]:
    """Return the team's member list with old replaced by new, in the same position."""
    names = names or {}
    members = list(team.technician_ids or [])
    if old_technician_id not in members:
        raise AssignmentError(
            f"Technician {_label(old_technician_id, names)} is not a member of {team.name}"
        )
    if new_technician_id in members:
        raise AssignmentError(
            f"Technician {_label(new_technician_id, names)} is already a member of {team.name}"
        )
    if team.is_active:
        conflicts = find_conflicts([new_technician_id], teams, exclude_team_id=team.id)
        if conflicts:
            raise AssignmentError(
                f"Technician {_label(new_technician_id, names)} is already assigned to {conflicts[0][1].name}"
            )

    members[members.index(old_technician_id)] = new_technician_id
    return members


def available_technicians(technicians: Iterable[Technician], teams: Iterable[Team]) -> list[Technician]:
    """Active technicians who are not in any active team, sorted by name."""
    busy = {tech_id for team in teams if team.is_active for tech_id in (team.technician_ids or [])}
    free = [t for t in technicians if t.is_active and t.id not in busy]
    return sorted(free, key=lambda t: t.name.casefold())


def check_box_assignments(
    assignments: Iterable,
    team_names: Mapping[str, str],
    names: Mapping[str, str] | None = None,
) -> None:
    """Reject report box assignments that put one technician in two boxes."""
    names = names or {}
    seen: dict[str, str] = {}
    for assignment in assignments:
        if assignment.team_id not in team_names:
            raise AssignmentError(f"Team {assignment.team_id} not found")
        for tech_id in assignment.technician_ids or []:
            if tech_id in seen and seen[tech_id] != assignment.team_id:
                raise AssignmentError(
                    f"Technician {_label(tech_id, names)} is assigned to both "
                    f"{team_names[seen[tech_id]]} and {team_names[assignment.team_id]}"
                )
            seen[tech_id] = assignment.team_id
