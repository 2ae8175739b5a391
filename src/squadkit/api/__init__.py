"""REST API for squad and roster management."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Query

from squadkit.api.schemas import (
    AvailabilityResponse,
    AvailabilitySummaryResponse,
    AvailabilityUpdateRequest,
    CaptainRequest,
    ConflictsResponse,
    CreatedTeamResponse,
    FormationMapRequest,
    FormationMapResponse,
    FormationResponse,
    NotificationResponse,
    PositionAssignmentResponse,
    SplitPreviewResponse,
    SplitRequest,
    SplitResponse,
    SplitTeamPreview,
    SquadAddRequest,
    SquadResponse,
)
from squadkit.availability import summarize
from squadkit.config import formations_for_format, iter_formations
from squadkit.errors import PersistenceError, PolicyViolation, SquadkitError, ValidationError
from squadkit.models import Event, Player, YearGroup
from squadkit.persistence import DataStore, SquadStore
from squadkit.roster import SplitPlan, duplicate_squad_numbers, unassigned_players
from squadkit.selection import map_to_positions
from squadkit.services import (
    HttpNotifier,
    Notifier,
    SquadService,
    TeamSpec,
    build_plan,
    event_player_statuses,
    event_records,
    load_event,
    load_year_group,
    load_year_group_players,
    notify_event,
    record_availability,
    selection_conflicts,
    submit_split,
    user_statuses,
)

logger = logging.getLogger("uvicorn.error")

_STATUS_CODES = (
    (ValidationError, 400),
    (PolicyViolation, 409),
    (PersistenceError, 502),
)


def _http_error(exc: SquadkitError) -> HTTPException:
    for error_type, status_code in _STATUS_CODES:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=exc.message)
    return HTTPException(status_code=400, detail=exc.message)


def create_app(store: Optional[DataStore] = None, notifier: Optional[Notifier] = None) -> FastAPI:
    app = FastAPI(title="squadkit")
    if store is None:
        store = SquadStore(Path(__file__).resolve().parent.parent / "squadkit.sqlite")
    app.state.store = store
    app.state.notifier = notifier or HttpNotifier()
    squads = SquadService(store)

    def _year_group_or_404(year_group_id: str) -> YearGroup:
        try:
            return load_year_group(store, year_group_id)
        except KeyError:
            raise HTTPException(status_code=404, detail="Year group not found")

    def _event_or_404(event_id: str) -> Event:
        try:
            return load_event(store, event_id)
        except KeyError:
            raise HTTPException(status_code=404, detail="Event not found")

    def _plan(year_group: YearGroup, players: list[Player], payload: SplitRequest) -> SplitPlan:
        return build_plan(
            year_group,
            players,
            [
                TeamSpec(name=team.name, age_group=team.age_group, game_format=team.game_format)
                for team in payload.teams
            ],
            season_start=payload.season_start,
            season_end=payload.season_end,
            auto=payload.auto_distribute,
            moves=payload.moves,
        )

    def _squad_response(event: Event) -> SquadResponse:
        squad = squads.load(event)
        return SquadResponse(
            event_id=event.id,
            captain_id=squad.captain_id,
            vice_captain_id=squad.vice_captain_id,
            players=squads.squad_players(event),
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/formations", response_model=list[FormationResponse])
    async def list_formations(game_format: Optional[str] = Query(None)):
        rules = formations_for_format(game_format) if game_format else list(iter_formations())
        return [
            FormationResponse(
                formation_id=item.formation_id,
                game_format=item.game_format,
                positions=list(item.positions),
            )
            for item in rules
        ]

    @app.post("/formations/map", response_model=FormationMapResponse)
    async def map_formation(payload: FormationMapRequest):
        mapping = map_to_positions(payload.formation_id, payload.player_ids, payload.game_format)
        return FormationMapResponse(
            formation_id=mapping.formation_id,
            positions=list(mapping.positions),
            assignments=[
                PositionAssignmentResponse(
                    slot=item.slot, position=item.position, player_id=item.player_id
                )
                for item in mapping.assignments
            ],
            unassigned=list(mapping.unassigned),
            state=mapping.state.value,
        )

    @app.post("/year-groups/{year_group_id}/split/preview", response_model=SplitPreviewResponse)
    async def preview_split(year_group_id: str, payload: SplitRequest):
        year_group = _year_group_or_404(year_group_id)
        players = load_year_group_players(store, year_group_id)
        try:
            plan = _plan(year_group, players, payload)
        except SquadkitError as exc:
            raise _http_error(exc) from exc
        by_id = {player.id: player for player in players}
        teams = []
        for team in plan.teams:
            members = [by_id[pid] for pid in team.assigned_player_ids if pid in by_id]
            teams.append(
                SplitTeamPreview(
                    name=team.name,
                    age_group=team.age_group,
                    game_format=team.game_format,
                    player_ids=list(team.assigned_player_ids),
                    duplicate_squad_numbers=list(duplicate_squad_numbers(members)),
                )
            )
        return SplitPreviewResponse(
            year_group_id=year_group.id,
            player_count=len(players),
            exceeds_soft_limit=year_group.exceeds_soft_limit(len(players)),
            season_start=plan.season_start,
            season_end=plan.season_end,
            teams=teams,
            unassigned_player_ids=unassigned_players(players, plan.assignments()),
        )

    @app.post("/year-groups/{year_group_id}/split", response_model=SplitResponse)
    async def split_year_group(year_group_id: str, payload: SplitRequest):
        year_group = _year_group_or_404(year_group_id)
        players = load_year_group_players(store, year_group_id)
        try:
            plan = _plan(year_group, players, payload)
            outcome = submit_split(
                store,
                year_group,
                plan,
                players,
                created_team_ids=payload.created_team_ids,
            )
        except PersistenceError as exc:
            created = exc.context.get("created_team_ids") or []
            detail = exc.message
            if created:
                detail = f"{detail}; created teams: {', '.join(created)}"
            raise HTTPException(status_code=502, detail=detail) from exc
        except SquadkitError as exc:
            raise _http_error(exc) from exc
        return SplitResponse(
            teams=[
                CreatedTeamResponse(
                    id=team.id, name=team.name, age_group=team.age_group, game_format=team.game_format
                )
                for team in outcome.teams
            ],
            moved_players=outcome.moved_players,
            club_links_created=outcome.club_links_created,
        )

    @app.get("/events/{event_id}/availability", response_model=AvailabilityResponse)
    async def get_availability(event_id: str):
        event = _event_or_404(event_id)
        team_players = [row["id"] for row in store.fetch("players", {"team_id": event.team_id})]
        players = event_player_statuses(store, event.id, team_players)
        summary = summarize(players, team_players)
        return AvailabilityResponse(
            event_id=event.id,
            records=event_records(store, event.id),
            users=user_statuses(store, event.id),
            players=players,
            summary=AvailabilitySummaryResponse(
                available=summary.available,
                unavailable=summary.unavailable,
                pending=summary.pending,
                no_response=summary.no_response,
                total=summary.total,
            ),
        )

    @app.put("/events/{event_id}/availability", response_model=AvailabilityResponse)
    async def put_availability(event_id: str, payload: AvailabilityUpdateRequest):
        event = _event_or_404(event_id)
        try:
            record_availability(
                store,
                event_id=event.id,
                user_id=payload.user_id,
                role=payload.role,
                status=payload.status,
            )
        except SquadkitError as exc:
            raise _http_error(exc) from exc
        return await get_availability(event_id)

    @app.get("/events/{event_id}/squad", response_model=SquadResponse)
    async def get_squad(event_id: str):
        return _squad_response(_event_or_404(event_id))

    @app.post("/events/{event_id}/squad", response_model=SquadResponse)
    async def add_squad_player(event_id: str, payload: SquadAddRequest):
        event = _event_or_404(event_id)
        try:
            squads.add(event, payload.player_id)
        except KeyError:
            raise HTTPException(status_code=404, detail="Player not found")
        except SquadkitError as exc:
            raise _http_error(exc) from exc
        return _squad_response(event)

    @app.delete("/events/{event_id}/squad/{player_id}", response_model=SquadResponse)
    async def remove_squad_player(event_id: str, player_id: str):
        event = _event_or_404(event_id)
        try:
            squads.remove(event, player_id)
        except SquadkitError as exc:
            raise _http_error(exc) from exc
        return _squad_response(event)

    @app.put("/events/{event_id}/squad/captain", response_model=SquadResponse)
    async def put_captain(event_id: str, payload: CaptainRequest):
        event = _event_or_404(event_id)
        try:
            if payload.role == "vice_captain":
                squads.set_vice_captain(event, payload.player_id)
            else:
                squads.set_captain(event, payload.player_id)
        except KeyError:
            raise HTTPException(status_code=404, detail="Player not found")
        except SquadkitError as exc:
            raise _http_error(exc) from exc
        return _squad_response(event)

    @app.get("/events/{event_id}/selections/conflicts", response_model=ConflictsResponse)
    async def get_conflicts(
        event_id: str,
        team_number: int = Query(1, ge=1),
        period_number: int = Query(1, ge=1),
    ):
        event = _event_or_404(event_id)
        return ConflictsResponse(
            event_id=event.id,
            team_number=team_number,
            period_number=period_number,
            conflicts=selection_conflicts(store, event, team_number, period_number),
        )

    @app.post("/events/{event_id}/notify", response_model=NotificationResponse)
    async def notify(event_id: str):
        event = _event_or_404(event_id)
        result = notify_event(app.state.notifier, event.id)
        return NotificationResponse(event_id=result.event_id, sent=result.sent, message=result.message)

    return app


__all__ = ["create_app"]
