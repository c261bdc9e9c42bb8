"""REST API and web screens for squadledger."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import FastAPI, Form, HTTPException, Query
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from squadledger.api.pages import (
    render_index_page,
    render_payment_methods_page,
    render_team_not_found,
    render_team_page,
)
from squadledger.api.schemas import (
    EligibilityCycleResponse,
    GamedayResponse,
    PaymentMethodDeleteResponse,
    PaymentMethodRequest,
    PlayerAmountRequest,
    PlayerCreateRequest,
    PlayerEligibilityRequest,
    PlayerPaymentMethodRequest,
    PlayerPaymentRequest,
    TeamCreateRequest,
    TeamDebtRequest,
    TeamSummaryResponse,
)
from squadledger.config_loader import Settings, build_store
from squadledger.models import FinancialSummary, PaymentMethodConfig, Player, Team
from squadledger.roster import build_gameday_sheet, export_roster_to_csv
from squadledger.store import TeamStore
from squadledger.validation import (
    InputRejected,
    ensure_deleted,
    validate_new_payment_method,
    validate_new_player,
    validate_new_team,
    validate_payment_method_choice,
    validate_payment_method_rename,
    validate_player_amount,
    validate_team_debt,
)


logger = logging.getLogger(__name__)


def _rejected(exc: InputRejected, status_code: int = 400) -> HTTPException:
    logger.info("Rejected input: %s", exc.message)
    return HTTPException(status_code=status_code, detail=exc.message)


def _safe_redirect(target: str | None, fallback: str = "/ui") -> str:
    if target and target.startswith("/ui") and not target.startswith("//"):
        return target
    return fallback


def _parse_date(value: str | None) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InputRejected("Please enter a valid date of birth") from exc


def create_app(store: TeamStore | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    if store is None:
        store = build_store(settings)
    app = FastAPI(title="squadledger")
    app.state.store = store
    app.state.settings = settings
    currency = settings.currency

    def _team_or_404(team_id: str) -> Team:
        team = store.get_team(team_id)
        if team is None:
            raise HTTPException(status_code=404, detail="Team not found")
        return team

    def _player_or_404(player_id: str) -> Player:
        player = store.get_player(player_id)
        if player is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return player

    def _method_or_404(method_id: str) -> PaymentMethodConfig:
        method = store.get_payment_method(method_id)
        if method is None:
            raise HTTPException(status_code=404, detail="Payment method not found")
        return method

    def team_summary(team: Team) -> TeamSummaryResponse:
        return TeamSummaryResponse(
            team=team,
            player_count=len(store.get_team_players(team.id)),
            financials=store.get_team_financials(team.id),
        )

    # JSON API ----------------------------------------------------------------

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players", response_model=list[Player])
    async def list_players():
        return list(store.players)

    @app.post("/players", response_model=Player, status_code=201)
    async def create_player(payload: PlayerCreateRequest):
        try:
            new_player = validate_new_player(store, **payload.model_dump())
        except InputRejected as exc:
            raise _rejected(exc) from exc
        for team_id in new_player.team_ids:
            _team_or_404(team_id)
        return store.add_player(new_player)

    @app.get("/players/{player_id}", response_model=Player)
    async def get_player(player_id: str):
        return _player_or_404(player_id)

    @app.put("/players/{player_id}/payment", response_model=Player)
    async def update_payment(player_id: str, payload: PlayerPaymentRequest):
        _player_or_404(player_id)
        try:
            amount = validate_player_amount(payload.amount)
            method = validate_payment_method_choice(store, payload.method)
        except InputRejected as exc:
            raise _rejected(exc) from exc
        return store.update_player_payment(player_id, amount, method)

    @app.put("/players/{player_id}/payment-method", response_model=Player)
    async def update_payment_method_choice(player_id: str, payload: PlayerPaymentMethodRequest):
        _player_or_404(player_id)
        try:
            method = validate_payment_method_choice(store, payload.method)
        except InputRejected as exc:
            raise _rejected(exc) from exc
        return store.update_player_payment_method(player_id, method)

    @app.put("/players/{player_id}/amount", response_model=Player)
    async def update_amount(player_id: str, payload: PlayerAmountRequest):
        _player_or_404(player_id)
        try:
            amount = validate_player_amount(payload.amount)
        except InputRejected as exc:
            raise _rejected(exc) from exc
        return store.update_player_amount(player_id, amount)

    @app.put("/players/{player_id}/eligibility", response_model=Player)
    async def update_eligibility(player_id: str, payload: PlayerEligibilityRequest):
        _player_or_404(player_id)
        return store.update_player_eligibility(player_id, payload.status)

    @app.post("/players/{player_id}/eligibility/cycle", response_model=EligibilityCycleResponse)
    async def cycle_eligibility(player_id: str):
        _player_or_404(player_id)
        status = store.cycle_player_eligibility(player_id)
        return EligibilityCycleResponse(player_id=player_id, eligibility=status)

    @app.get("/teams", response_model=list[TeamSummaryResponse])
    async def list_teams():
        return [team_summary(team) for team in store.teams]

    @app.post("/teams", response_model=Team, status_code=201)
    async def create_team(payload: TeamCreateRequest):
        try:
            new_team = validate_new_team(**payload.model_dump())
        except InputRejected as exc:
            raise _rejected(exc) from exc
        return store.add_team(new_team)

    @app.get("/teams/{team_id}", response_model=TeamSummaryResponse)
    async def get_team(team_id: str):
        return team_summary(_team_or_404(team_id))

    @app.get("/teams/{team_id}/players", response_model=list[Player])
    async def get_team_players(team_id: str):
        return store.get_team_players(team_id)

    @app.get("/teams/{team_id}/financials", response_model=FinancialSummary)
    async def get_team_financials(team_id: str):
        return store.get_team_financials(team_id)

    @app.put("/teams/{team_id}/debt", response_model=Team)
    async def update_debt(team_id: str, payload: TeamDebtRequest):
        _team_or_404(team_id)
        try:
            total_owed = validate_team_debt(payload.total_owed)
        except InputRejected as exc:
            raise _rejected(exc) from exc
        return store.update_team_debt(team_id, total_owed)

    @app.get("/teams/{team_id}/gameday", response_model=GamedayResponse)
    async def get_gameday(team_id: str):
        team = _team_or_404(team_id)
        sheet = build_gameday_sheet(store.get_team_players(team_id), team.formation)
        return GamedayResponse(
            team_id=team.id,
            formation=sheet.formation,
            positions=list(sheet.positions),
            bench=list(sheet.bench),
            open_slots=sheet.open_slots,
        )

    @app.get("/teams/{team_id}/export.csv")
    async def export_team_csv(team_id: str):
        team = _team_or_404(team_id)
        csv_text = export_roster_to_csv(store.get_team_players(team_id), team=team)
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={team_id}.csv"},
        )

    @app.get("/financials", response_model=FinancialSummary)
    async def all_financials():
        return store.get_all_teams_financials()

    @app.get("/payment-methods", response_model=list[PaymentMethodConfig])
    async def list_payment_methods():
        return list(store.payment_methods)

    @app.post("/payment-methods", response_model=PaymentMethodConfig, status_code=201)
    async def create_payment_method(payload: PaymentMethodRequest):
        try:
            name = validate_new_payment_method(store, payload.name)
        except InputRejected as exc:
            raise _rejected(exc) from exc
        return store.add_payment_method(name)

    @app.put("/payment-methods/{method_id}", response_model=PaymentMethodConfig)
    async def rename_payment_method(method_id: str, payload: PaymentMethodRequest):
        _method_or_404(method_id)
        try:
            name = validate_payment_method_rename(store, method_id, payload.name)
        except InputRejected as exc:
            raise _rejected(exc) from exc
        return store.update_payment_method(method_id, name)

    @app.delete("/payment-methods/{method_id}", response_model=PaymentMethodDeleteResponse)
    async def delete_payment_method(method_id: str):
        _method_or_404(method_id)
        try:
            ensure_deleted(store.delete_payment_method(method_id))
        except InputRejected as exc:
            raise _rejected(exc, status_code=409) from exc
        return PaymentMethodDeleteResponse(id=method_id, deleted=True)

    # Web screens -------------------------------------------------------------

    def _index_html(*, show_add_player: bool = False, error: str | None = None) -> str:
        return render_index_page(
            teams=store.teams,
            players=store.players,
            team_financials={team.id: store.get_team_financials(team.id) for team in store.teams},
            team_player_counts={team.id: len(store.get_team_players(team.id)) for team in store.teams},
            overall=store.get_all_teams_financials(),
            payment_methods=store.payment_methods,
            currency=currency,
            show_add_player=show_add_player,
            error=error,
        )

    def _team_html(
        team: Team,
        *,
        view: str = "detailed",
        show_details: bool = False,
        editing_debt: bool = False,
        show_add_player: bool = False,
        error: str | None = None,
    ) -> str:
        players = store.get_team_players(team.id)
        return render_team_page(
            team=team,
            players=players,
            financials=store.get_team_financials(team.id),
            payment_methods=store.payment_methods,
            sheet=build_gameday_sheet(players, team.formation),
            view=view,
            show_details=show_details,
            editing_debt=editing_debt,
            show_add_player=show_add_player,
            currency=currency,
            error=error,
        )

    def _methods_html(**kwargs: Any) -> str:
        return render_payment_methods_page(store.payment_methods, **kwargs)

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/ui", status_code=307)

    @app.get("/ui", response_class=HTMLResponse)
    async def ui_index(modal: str | None = Query(None)):
        return HTMLResponse(_index_html(show_add_player=modal == "add-player"))

    @app.post("/ui/players", response_class=HTMLResponse)
    async def ui_add_player(
        name: str = Form(""),
        date_of_birth: str | None = Form(None),
        position: str = Form("Forward"),
        payment_method: str = Form(""),
        amount_paid: str = Form("0"),
        team_id: str | None = Form(None),
        redirect: str | None = Form(None),
    ):
        team = store.get_team(team_id) if team_id else None
        try:
            new_player = validate_new_player(
                store,
                name=name,
                date_of_birth=_parse_date(date_of_birth),
                position=position,
                payment_method=payment_method,
                amount_paid=amount_paid,
                team_ids=[team.id] if team is not None else [],
            )
        except InputRejected as exc:
            logger.info("Rejected new player: %s", exc.message)
            if team is not None:
                content = _team_html(team, show_add_player=True, error=exc.message)
            else:
                content = _index_html(show_add_player=True, error=exc.message)
            return HTMLResponse(content, status_code=400)
        store.add_player(new_player)
        fallback = f"/ui/teams/{team.id}" if team is not None else "/ui"
        return RedirectResponse(url=_safe_redirect(redirect, fallback), status_code=303)

    @app.post("/ui/teams", response_class=HTMLResponse)
    async def ui_add_team(
        name: str = Form(""),
        total_owed: str = Form("0"),
        formation: str = Form("4-4-2"),
    ):
        try:
            new_team = validate_new_team(name=name, total_owed=total_owed, formation=formation)
        except InputRejected as exc:
            logger.info("Rejected new team: %s", exc.message)
            return HTMLResponse(_index_html(error=exc.message), status_code=400)
        team = store.add_team(new_team)
        return RedirectResponse(url=f"/ui/teams/{team.id}", status_code=303)

    @app.get("/ui/teams/{team_id}", response_class=HTMLResponse)
    async def ui_team_detail(
        team_id: str,
        view: str = Query("detailed"),
        details: bool = Query(False),
        edit: str | None = Query(None),
        modal: str | None = Query(None),
    ):
        team = store.get_team(team_id)
        if team is None:
            return HTMLResponse(render_team_not_found(), status_code=404)
        return HTMLResponse(
            _team_html(
                team,
                view=view,
                show_details=details,
                editing_debt=edit == "debt",
                show_add_player=modal == "add-player",
            )
        )

    @app.post("/ui/teams/{team_id}/debt", response_class=HTMLResponse)
    async def ui_update_debt(team_id: str, total_owed: str = Form("")):
        team = store.get_team(team_id)
        if team is None:
            return HTMLResponse(render_team_not_found(), status_code=404)
        try:
            amount = validate_team_debt(total_owed)
        except InputRejected as exc:
            logger.info("Rejected team debt: %s", exc.message)
            return HTMLResponse(_team_html(team, editing_debt=True, error=exc.message), status_code=400)
        store.update_team_debt(team_id, amount)
        return RedirectResponse(url=f"/ui/teams/{team_id}", status_code=303)

    def _player_screen_error(player: Player, message: str) -> HTMLResponse:
        teams = [store.get_team(team_id) for team_id in player.team_ids]
        team = next((item for item in teams if item is not None), None)
        if team is not None:
            content = _team_html(team, show_details=True, error=message)
        else:
            content = _index_html(error=message)
        return HTMLResponse(content, status_code=400)

    @app.post("/ui/players/{player_id}/amount", response_class=HTMLResponse)
    async def ui_update_amount(player_id: str, amount: str = Form(""), redirect: str | None = Form(None)):
        player = _player_or_404(player_id)
        try:
            value = validate_player_amount(amount)
        except InputRejected as exc:
            logger.info("Rejected player amount: %s", exc.message)
            return _player_screen_error(player, exc.message)
        store.update_player_payment(player_id, value, player.payment_method)
        return RedirectResponse(url=_safe_redirect(redirect), status_code=303)

    @app.post("/ui/players/{player_id}/payment-method", response_class=HTMLResponse)
    async def ui_update_payment_method(player_id: str, method: str = Form(""), redirect: str | None = Form(None)):
        player = _player_or_404(player_id)
        try:
            choice = validate_payment_method_choice(store, method)
        except InputRejected as exc:
            return _player_screen_error(player, exc.message)
        store.update_player_payment(player_id, player.amount_paid, choice)
        return RedirectResponse(url=_safe_redirect(redirect), status_code=303)

    @app.post("/ui/players/{player_id}/eligibility")
    async def ui_cycle_eligibility(player_id: str, redirect: str | None = Form(None)):
        _player_or_404(player_id)
        store.cycle_player_eligibility(player_id)
        return RedirectResponse(url=_safe_redirect(redirect), status_code=303)

    @app.get("/ui/payment-methods", response_class=HTMLResponse)
    async def ui_payment_methods(edit: str | None = Query(None), modal: str | None = Query(None)):
        return HTMLResponse(_methods_html(editing_id=edit, show_add=modal == "add"))

    @app.post("/ui/payment-methods", response_class=HTMLResponse)
    async def ui_add_payment_method(name: str = Form("")):
        try:
            clean_name = validate_new_payment_method(store, name)
        except InputRejected as exc:
            logger.info("Rejected payment method: %s", exc.message)
            return HTMLResponse(_methods_html(show_add=True, error=exc.message), status_code=400)
        store.add_payment_method(clean_name)
        return RedirectResponse(url="/ui/payment-methods", status_code=303)

    @app.post("/ui/payment-methods/{method_id}", response_class=HTMLResponse)
    async def ui_rename_payment_method(method_id: str, name: str = Form("")):
        _method_or_404(method_id)
        try:
            clean_name = validate_payment_method_rename(store, method_id, name)
        except InputRejected as exc:
            logger.info("Rejected payment method rename: %s", exc.message)
            return HTMLResponse(_methods_html(editing_id=method_id, error=exc.message), status_code=400)
        store.update_payment_method(method_id, clean_name)
        return RedirectResponse(url="/ui/payment-methods", status_code=303)

    @app.post("/ui/payment-methods/{method_id}/delete", response_class=HTMLResponse)
    async def ui_delete_payment_method(method_id: str):
        _method_or_404(method_id)
        try:
            ensure_deleted(store.delete_payment_method(method_id))
        except InputRejected as exc:
            logger.info("Rejected payment method delete: %s", exc.message)
            return HTMLResponse(_methods_html(error=exc.message), status_code=400)
        return RedirectResponse(url="/ui/payment-methods", status_code=303)

    return app


__all__ = ["create_app"]
