"""REST API for the rankings board."""

from __future__ import annotations

import logging
from html import escape
from typing import Mapping

from fastapi import FastAPI, Form, HTTPException, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from rankboard.api.schemas import (
    BoardResponse,
    FavoriteToggleRequest,
    FavoritesResponse,
    ParseRequest,
    ParseResponse,
    PositionGroupResponse,
    RawTextPayload,
    TeamCreateRequest,
    TeamResponse,
)
from rankboard.board import RankingsBoard, TeamError, group_by_position
from rankboard.config import default_db_path, load_settings, position_label
from rankboard.ingest import RankingsParseError, parse_rankings_async
from rankboard.models import PlayerRecord
from rankboard.persistence import KeyValueStore


logger = logging.getLogger("uvicorn.error")


def _build_board(board: RankingsBoard, *, hide_unselected: bool) -> BoardResponse:
    report = board.load_players()
    visible = board.filter_players(report.players, hide_unselected=hide_unselected)
    groups = [
        PositionGroupResponse(position=position, label=position_label(position), players=players)
        for position, players in group_by_position(visible).items()
    ]
    return BoardResponse(
        groups=groups,
        total_players=len(report.players),
        favorites=board.favorites(),
        active_teams=board.active_team_names(),
        highlight_colors=board.highlight_colors(),
        skipped_lines=report.skipped_lines,
        error=report.error,
    )


def _row_style(colors: list[str]) -> str:
    if len(colors) == 1:
        return f"background-color: {colors[0]}40;"
    if len(colors) > 1:
        stops = ", ".join(f"{color}99" for color in colors)
        return f"background-image: linear-gradient(to right, {stops});"
    return ""


def _hidden_view_field(hide_unselected: bool) -> str:
    value = "true" if hide_unselected else "false"
    return f"<input type=\"hidden\" name=\"hide_unselected\" value=\"{value}\">"


def _render_player_rows(
    players: list[PlayerRecord],
    favorites: set[str],
    highlight_colors: Mapping[str, list[str]],
    *,
    hide_unselected: bool = False,
) -> str:
    rows = []
    for player in players:
        star = "&#9733;" if player.name in favorites else "&#9734;"
        style = _row_style(highlight_colors.get(player.name, []))
        positional = player.positional_rank if player.positional_rank else player.position
        star_form = (
            "<form class=\"inline\" method=\"post\" action=\"/ui/favorites\">"
            f"<input type=\"hidden\" name=\"name\" value=\"{escape(player.name)}\">"
            f"{_hidden_view_field(hide_unselected)}"
            f"<button class=\"star\" type=\"submit\">{star}</button></form>"
        )
        rows.append(
            f"<tr style=\"{escape(style)}\"><td>{star_form}</td><td>{player.rank}</td>"
            f"<td>{escape(player.name)}</td><td>{escape(str(positional))}</td>"
            f"<td>{escape(player.team or '')}</td></tr>"
        )
    return "".join(rows)


def _render_page(body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang=\"en\">
<head>
    <meta charset=\"utf-8\">
    <title>Rankings Board</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 2rem; background: #f5f7fa; }}
        main {{ background: #fff; padding: 2rem; border-radius: 12px; box-shadow: 0 2px 6px rgba(0,0,0,0.08); }}
        nav a {{ margin-right: 1rem; color: #2563eb; text-decoration: none; }}
        form {{ display: grid; gap: 1rem; margin-bottom: 2rem; }}
        textarea {{ width: 100%; min-height: 12rem; padding: 0.5rem; border-radius: 6px; border: 1px solid #cbd5e1; font-family: monospace; }}
        button {{ padding: 0.6rem 1.2rem; border-radius: 6px; border: none; background: #2563eb; color: #fff; cursor: pointer; }}
        table {{ border-collapse: collapse; width: 100%; margin-top: 1rem; }}
        th, td {{ padding: 0.5rem; border: 1px solid #e2e8f0; text-align: left; }}
        .groups {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(320px, 1fr)); gap: 1.5rem; }}
        form.inline {{ display: inline; margin: 0; }}
        button.star {{ background: none; color: #d97706; padding: 0; font-size: 1.2rem; }}
        button.secondary {{ background: #e2e8f0; color: #1e293b; }}
        button.danger {{ background: #dc2626; }}
        .notice.error {{ padding: 0.75rem 1rem; border-radius: 6px; background: #fef2f2; color: #991b1b; border: 1px solid #fecaca; }}
    </style>
</head>
<body>
    <nav><a href=\"/ui\">Home</a></nav>
    <main>{body}</main>
</body>
</html>"""


def _render_team_manager(teams: list[TeamResponse], favorites: list[str], *, hide_unselected: bool) -> str:
    view_field = _hidden_view_field(hide_unselected)
    disabled = "" if favorites else " disabled"
    items = []
    for team in teams:
        style = f" style=\"background: {escape(team.color)}; color: #fff;\"" if team.active else ""
        items.append(
            "<li>"
            "<form class=\"inline\" method=\"post\" action=\"/ui/teams/toggle\">"
            f"<input type=\"hidden\" name=\"name\" value=\"{escape(team.name)}\">{view_field}"
            f"<button class=\"secondary\" type=\"submit\"{style}>{escape(team.name)} ({len(team.players)})</button></form> "
            "<form class=\"inline\" method=\"post\" action=\"/ui/teams/delete\">"
            f"<input type=\"hidden\" name=\"name\" value=\"{escape(team.name)}\">{view_field}"
            "<button class=\"danger\" type=\"submit\">Delete</button></form>"
            "</li>"
        )
    team_list = "".join(items) or "<li>No teams saved. Star players and enter a name above to create one.</li>"
    return f"""
        <section class=\"teams\">
            <h2>My Teams</h2>
            <form method=\"post\" action=\"/ui/teams\">
                {view_field}
                <input type=\"text\" name=\"name\" placeholder=\"New Team Name\"{disabled}>
                <button type=\"submit\"{disabled}>Save Team</button>
            </form>
            <ul>{team_list}</ul>
        </section>
    """


def _render_board_page(
    raw_text: str,
    board: BoardResponse,
    teams: list[TeamResponse],
    *,
    hide_unselected: bool = False,
    error: str | None = None,
) -> str:
    favorites = set(board.favorites)
    sections = []
    for group in board.groups:
        if not group.players:
            continue
        rows = _render_player_rows(
            group.players,
            favorites,
            board.highlight_colors,
            hide_unselected=hide_unselected,
        )
        sections.append(
            f"<section><h2>{escape(group.label)}</h2><table>"
            "<thead><tr><th></th><th>Rank</th><th>Player</th><th>Pos</th><th>Team</th></tr></thead>"
            f"<tbody>{rows}</tbody></table></section>"
        )
    messages = [message for message in (board.error, error) if message]
    notice = "".join(f"<div class=\"notice error\">{escape(message)}</div>" for message in messages)
    groups_html = "".join(sections) or "<p>No rankings yet. Paste a list above.</p>"
    if hide_unselected:
        view_toggle = "<a class=\"view-toggle\" href=\"/ui\">Show All</a>"
    else:
        view_toggle = "<a class=\"view-toggle\" href=\"/ui?hide_unselected=true\">Hide Others</a>"
    return _render_page(
        f"""
        <h1>Rankings Board</h1>
        {notice}
        <form method=\"post\" action=\"/ui/rankings\">
            <textarea name=\"text\" placeholder=\"1. Christian McCaffrey RB&#10;2. Breece Hall RB&#10;3. Josh Allen QB1\">{escape(raw_text)}</textarea>
            <button type=\"submit\">Visualize Rankings</button>
        </form>
        {_render_team_manager(teams, board.favorites, hide_unselected=hide_unselected)}
        <p>{view_toggle}</p>
        <div class=\"groups\">{groups_html}</div>
        """
    )


def create_app(store: KeyValueStore | None = None) -> FastAPI:
    app = FastAPI(title="rankboard")
    settings = load_settings()
    if store is None:
        store = KeyValueStore(settings.db_path or default_db_path())
    app.state.store = store
    board = RankingsBoard(store, strategy=settings.parse_strategy)
    app.state.board = board

    def _team_response(team_name: str) -> TeamResponse:
        team = next((team for team in board.teams() if team.name == team_name), None)
        if team is None:
            raise HTTPException(status_code=404, detail="Team not found")
        return TeamResponse.from_team(team, active=team.name in board.active_team_names())

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/rankings/parse", response_model=ParseResponse)
    async def parse(payload: ParseRequest) -> ParseResponse:
        try:
            players = await parse_rankings_async(
                payload.text,
                strategy=payload.strategy or settings.parse_strategy,
            )
        except RankingsParseError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return ParseResponse(players=players, total_players=len(players))

    @app.get("/rankings/text", response_model=RawTextPayload)
    async def get_text() -> RawTextPayload:
        return RawTextPayload(text=board.raw_text)

    @app.put("/rankings/text", response_model=RawTextPayload)
    async def put_text(payload: RawTextPayload) -> RawTextPayload:
        board.save_raw_text(payload.text)
        return RawTextPayload(text=board.raw_text)

    @app.get("/board", response_model=BoardResponse)
    async def get_board(hide_unselected: bool = Query(False)) -> BoardResponse:
        return _build_board(board, hide_unselected=hide_unselected)

    @app.get("/favorites", response_model=FavoritesResponse)
    async def list_favorites() -> FavoritesResponse:
        return FavoritesResponse(favorites=board.favorites())

    @app.post("/favorites/toggle", response_model=FavoritesResponse)
    async def toggle_favorite(payload: FavoriteToggleRequest) -> FavoritesResponse:
        board.toggle_favorite(payload.name)
        return FavoritesResponse(favorites=board.favorites())

    @app.get("/teams", response_model=list[TeamResponse])
    async def list_teams() -> list[TeamResponse]:
        active = set(board.active_team_names())
        return [TeamResponse.from_team(team, active=team.name in active) for team in board.teams()]

    @app.post("/teams", response_model=TeamResponse)
    async def create_team(payload: TeamCreateRequest) -> TeamResponse:
        try:
            team = board.create_team(payload.name)
        except TeamError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return TeamResponse.from_team(team, active=False)

    # Team names may contain "/".
    @app.post("/teams/{team_name:path}/toggle", response_model=TeamResponse)
    async def toggle_team(team_name: str) -> TeamResponse:
        try:
            board.toggle_team(team_name)
        except TeamError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return _team_response(team_name)

    @app.delete("/teams/{team_name:path}")
    async def delete_team(team_name: str) -> dict[str, str]:
        if not board.delete_team(team_name):
            raise HTTPException(status_code=404, detail="Team not found")
        return {"deleted": team_name}

    def _ui_response(*, hide_unselected: bool, error: str | None = None, status_code: int = 200) -> HTMLResponse:
        active = set(board.active_team_names())
        teams = [TeamResponse.from_team(team, active=team.name in active) for team in board.teams()]
        content = _render_board_page(
            board.raw_text,
            _build_board(board, hide_unselected=hide_unselected),
            teams,
            hide_unselected=hide_unselected,
            error=error,
        )
        return HTMLResponse(content=content, status_code=status_code)

    def _ui_redirect(hide_unselected: bool) -> RedirectResponse:
        url = "/ui?hide_unselected=true" if hide_unselected else "/ui"
        return RedirectResponse(url=url, status_code=303)

    @app.get("/ui", response_class=HTMLResponse)
    async def ui_index(hide_unselected: bool = Query(False)):
        return _ui_response(hide_unselected=hide_unselected)

    @app.post("/ui/rankings")
    async def ui_submit_rankings(text: str = Form(""), hide_unselected: bool = Form(False)):
        board.save_raw_text(text.strip())
        logger.info("Stored %d characters of rankings text", len(text.strip()))
        return _ui_redirect(hide_unselected)

    @app.post("/ui/favorites")
    async def ui_toggle_favorite(name: str = Form(...), hide_unselected: bool = Form(False)):
        board.toggle_favorite(name)
        return _ui_redirect(hide_unselected)

    @app.post("/ui/teams")
    async def ui_create_team(name: str = Form(""), hide_unselected: bool = Form(False)):
        try:
            board.create_team(name)
        except TeamError as exc:
            return _ui_response(hide_unselected=hide_unselected, error=str(exc), status_code=400)
        return _ui_redirect(hide_unselected)

    @app.post("/ui/teams/toggle")
    async def ui_toggle_team(name: str = Form(...), hide_unselected: bool = Form(False)):
        try:
            board.toggle_team(name)
        except TeamError as exc:
            return _ui_response(hide_unselected=hide_unselected, error=str(exc), status_code=404)
        return _ui_redirect(hide_unselected)

    @app.post("/ui/teams/delete")
    async def ui_delete_team(name: str = Form(...), hide_unselected: bool = Form(False)):
        if not board.delete_team(name):
            return _ui_response(hide_unselected=hide_unselected, error="Team not found", status_code=404)
        return _ui_redirect(hide_unselected)

    return app


__all__ = ["create_app"]
