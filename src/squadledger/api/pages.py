"""Server-rendered screens: cards, forms and modals for the web UI."""

from __future__ import annotations

from datetime import date
from html import escape
from typing import Iterable, Mapping, Sequence
from urllib.parse import quote

from squadledger.config import DEFAULT_PAYMENT_METHOD
from squadledger.models import (
    EligibilityStatus,
    FinancialSummary,
    Formation,
    PaymentMethodConfig,
    Player,
    PlayerPosition,
    Team,
)
from squadledger.roster import GamedaySheet, available_for_gameday, group_by_position


TEAM_VIEWS: tuple[tuple[str, str], ...] = (
    ("detailed", "Details"),
    ("roster", "Roster"),
    ("gameday", "Game Day"),
)

_ELIGIBILITY_CLASSES = {
    EligibilityStatus.ELIGIBLE: "good",
    EligibilityStatus.INELIGIBLE: "bad",
    EligibilityStatus.SUSPENDED: "warn",
    EligibilityStatus.INJURED: "bad",
}


def format_money(value: float, currency: str = "$") -> str:
    if float(value).is_integer():
        return f"{currency}{int(value):,}"
    return f"{currency}{value:,.2f}"


def format_balance(value: float, currency: str = "$") -> str:
    if value > 0:
        return f"+{format_money(value, currency)}"
    if value < 0:
        return f"-{format_money(abs(value), currency)}"
    return format_money(0, currency)


def _balance_class(value: float) -> str:
    if value > 0:
        return "good"
    if value < 0:
        return "bad"
    return "muted"


def _input_amount(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.2f}"


def _team_url(team_id: str, *, view: str = "detailed", details: bool = False) -> str:
    url = f"/ui/teams/{quote(team_id)}?view={view}"
    return url + "&details=1" if details else url


def render_page(body: str, *, title: str = "Soccer Teams") -> str:
    return f"""<!DOCTYPE html>
<html lang=\"en\">
<head>
    <meta charset=\"utf-8\">
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\">
    <title>{escape(title)}</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 0 auto; max-width: 720px; padding: 1rem; background: #f5f7fa; color: #0f172a; }}
        main {{ background: #fff; padding: 1.5rem; border-radius: 12px; box-shadow: 0 2px 6px rgba(0,0,0,0.08); }}
        nav a {{ margin-right: 1rem; color: #2563eb; text-decoration: none; }}
        nav {{ margin-bottom: 1rem; }}
        form {{ display: grid; gap: 0.75rem; }}
        form.inline {{ display: inline-flex; gap: 0.5rem; align-items: center; }}
        label {{ font-weight: 600; }}
        input, select {{ padding: 0.5rem; border-radius: 6px; border: 1px solid #cbd5e1; }}
        button, a.button {{ padding: 0.5rem 1rem; border-radius: 6px; border: none; background: #2563eb; color: #fff; cursor: pointer; text-decoration: none; display: inline-block; }}
        button.secondary, a.button.secondary {{ background: #475569; }}
        button.danger {{ background: #dc2626; }}
        .card {{ border: 1px solid #e2e8f0; border-radius: 10px; padding: 1rem; margin-bottom: 0.75rem; background: #f8fafc; }}
        .card a.card-link {{ color: inherit; text-decoration: none; display: block; }}
        .row {{ display: flex; justify-content: space-between; align-items: center; gap: 0.5rem; margin: 0.25rem 0; }}
        .stats {{ display: grid; grid-template-columns: repeat(3, 1fr); gap: 0.75rem; }}
        .stat {{ text-align: center; }}
        .stat strong {{ display: block; font-size: 1.4rem; }}
        .good {{ color: #047857; }}
        .bad {{ color: #b91c1c; }}
        .warn {{ color: #b45309; }}
        .muted {{ color: #64748b; }}
        .badge {{ padding: 0.15rem 0.6rem; border-radius: 999px; font-size: 0.8rem; color: #fff; background: #64748b; }}
        .badge.good {{ background: #047857; color: #fff; }}
        .badge.bad {{ background: #b91c1c; color: #fff; }}
        .badge.warn {{ background: #b45309; color: #fff; }}
        .tabs {{ display: flex; gap: 0.5rem; margin: 1rem 0; }}
        .tabs a {{ flex: 1; text-align: center; padding: 0.5rem; border-radius: 6px; background: #e2e8f0; color: #0f172a; text-decoration: none; }}
        .tabs a.active {{ background: #2563eb; color: #fff; }}
        .flash {{ padding: 1rem; border-radius: 6px; margin-bottom: 1rem; }}
        .flash.success {{ background: #ecfdf5; color: #047857; }}
        .flash.error {{ background: #fef2f2; color: #b91c1c; }}
        .modal-backdrop {{ position: fixed; inset: 0; background: rgba(15,23,42,0.45); display: flex; align-items: center; justify-content: center; }}
        .modal {{ background: #fff; border-radius: 12px; padding: 1.5rem; width: min(90vw, 480px); max-height: 90vh; overflow-y: auto; }}
        .pitch {{ position: relative; height: 420px; background: #15803d; border-radius: 10px; margin-top: 0.75rem; }}
        .pitch .slot {{ position: absolute; transform: translate(-50%, -50%); background: #fff; border-radius: 999px; padding: 0.2rem 0.5rem; font-size: 0.75rem; white-space: nowrap; }}
        .pitch .slot.open {{ background: rgba(255,255,255,0.5); color: #334155; }}
        .empty {{ text-align: center; color: #64748b; padding: 1.5rem; }}
        ul.notes {{ color: #475569; padding-left: 1rem; }}
    </style>
</head>
<body>
    <nav><a href=\"/ui\">Teams</a><a href=\"/ui/payment-methods\">Payment Methods</a></nav>
    <main>{body}</main>
</body>
</html>"""


def _render_flash(error: str | None, success: str | None = None) -> str:
    parts = []
    if error:
        parts.append(f"<div class=\"flash error\" role=\"alert\"><strong>Error</strong>: {escape(error)}</div>")
    if success:
        parts.append(f"<div class=\"flash success\">{escape(success)}</div>")
    return "".join(parts)


def render_financial_card(title: str, financials: FinancialSummary, currency: str = "$") -> str:
    return f"""
    <section class=\"card\">
        <h2>{escape(title)}</h2>
        <div class=\"row\"><span>Total Collected</span><strong class=\"good\">{escape(format_money(financials.total_collected, currency))}</strong></div>
        <div class=\"row\"><span>Total Owed</span><strong class=\"bad\">{escape(format_money(financials.total_owed, currency))}</strong></div>
        <div class=\"row\"><span>Balance</span><strong class=\"{_balance_class(financials.balance)}\">{escape(format_balance(financials.balance, currency))}</strong></div>
    </section>"""


def render_team_card(team: Team, financials: FinancialSummary, player_count: int, currency: str = "$") -> str:
    status_class = "good" if financials.balance >= 0 else "bad"
    return f"""
    <article class=\"card team-card\">
        <a class=\"card-link\" href=\"{_team_url(team.id)}\">
            <div class=\"row\"><h3>{escape(team.name)}</h3><span class=\"muted\">&rsaquo;</span></div>
            <p class=\"muted\">{player_count} players &bull; {escape(team.formation.value)}</p>
            <div class=\"row\">
                <span>Collected <strong class=\"good\">{escape(format_money(financials.total_collected, currency))}</strong></span>
                <span>Owed <strong class=\"bad\">{escape(format_money(financials.total_owed, currency))}</strong></span>
                <span>Balance <strong>{escape(format_money(abs(financials.balance), currency))}</strong></span>
            </div>
            <span class=\"badge {status_class}\">{financials.status}</span>
        </a>
    </article>"""


def _options(values: Iterable[str], selected: str | None) -> str:
    return "".join(
        f"<option value=\"{escape(value)}\"{' selected' if value == selected else ''}>{escape(value)}</option>"
        for value in values
    )


def render_add_player_form(
    payment_methods: Sequence[PaymentMethodConfig],
    *,
    redirect: str,
    team_id: str | None = None,
    cancel_url: str,
    today: date | None = None,
) -> str:
    today = today or date.today()
    method_names = [method.name for method in payment_methods]
    selected_method = DEFAULT_PAYMENT_METHOD if DEFAULT_PAYMENT_METHOD in method_names else (method_names[0] if method_names else None)
    team_field = f"<input type=\"hidden\" name=\"team_id\" value=\"{escape(team_id)}\">" if team_id else ""
    return f"""
    <form method=\"post\" action=\"/ui/players\" class=\"add-player-form\">
        <h2>Add New Player</h2>
        <input type=\"hidden\" name=\"redirect\" value=\"{escape(redirect)}\">
        {team_field}
        <label>Player Name <input type=\"text\" name=\"name\" placeholder=\"Enter player name\"></label>
        <label>Date of Birth <input type=\"date\" name=\"date_of_birth\" value=\"{today.isoformat()}\" max=\"{today.isoformat()}\"></label>
        <label>Position <select name=\"position\">{_options([p.value for p in PlayerPosition], PlayerPosition.FORWARD.value)}</select></label>
        <label>Payment Method <select name=\"payment_method\">{_options(method_names, selected_method)}</select></label>
        <label>Amount Paid <input type=\"text\" inputmode=\"decimal\" name=\"amount_paid\" value=\"0\" placeholder=\"0\"></label>
        <div class=\"row\">
            <a class=\"button secondary\" href=\"{escape(cancel_url)}\">Cancel</a>
            <button type=\"submit\">Add Player</button>
        </div>
    </form>"""


def render_add_team_form() -> str:
    return f"""
    <form method=\"post\" action=\"/ui/teams\" class=\"add-team-form\">
        <h2>New Team</h2>
        <label>Team Name <input type=\"text\" name=\"name\" placeholder=\"Enter team name\"></label>
        <label>Money Owed <input type=\"text\" inputmode=\"decimal\" name=\"total_owed\" value=\"0\"></label>
        <label>Formation <select name=\"formation\">{_options([f.value for f in Formation], Formation.F_4_4_2.value)}</select></label>
        <button type=\"submit\">Create Team</button>
    </form>"""


def render_modal(content: str) -> str:
    return f"<div class=\"modal-backdrop\"><div class=\"modal\" role=\"dialog\" aria-modal=\"true\">{content}</div></div>"


def render_player_card(
    player: Player,
    *,
    payment_methods: Sequence[PaymentMethodConfig],
    redirect: str,
    show_details: bool = False,
    allow_editing: bool = False,
    currency: str = "$",
    today: date | None = None,
) -> str:
    eligibility_class = _ELIGIBILITY_CLASSES[player.eligibility]
    player_path = f"/ui/players/{quote(player.id)}"
    redirect_field = f"<input type=\"hidden\" name=\"redirect\" value=\"{escape(redirect)}\">"
    if allow_editing:
        eligibility_html = f"""
        <form method=\"post\" action=\"{player_path}/eligibility\" class=\"inline\">
            {redirect_field}
            <button type=\"submit\" class=\"badge {eligibility_class}\" title=\"Change eligibility\">{player.eligibility.value}</button>
        </form>"""
    else:
        eligibility_html = f"<span class=\"badge {eligibility_class}\">{player.eligibility.value}</span>"

    details_html = ""
    if show_details:
        paid_class = "good" if player.amount_paid > 0 else "bad"
        if allow_editing:
            method_names = [method.name for method in payment_methods]
            payment_html = f"""
            <form method=\"post\" action=\"{player_path}/payment-method\" class=\"inline\">
                {redirect_field}
                <select name=\"method\">{_options(method_names, player.payment_method)}</select>
                <button type=\"submit\" class=\"secondary\">Save</button>
            </form>"""
            amount_html = f"""
            <form method=\"post\" action=\"{player_path}/amount\" class=\"inline\">
                {redirect_field}
                <input type=\"text\" inputmode=\"decimal\" name=\"amount\" value=\"{_input_amount(player.amount_paid)}\" size=\"6\">
                <button type=\"submit\" class=\"secondary\">Save</button>
            </form>"""
        else:
            payment_html = escape(player.payment_method)
            amount_html = f"<strong class=\"{paid_class}\">{escape(format_money(player.amount_paid, currency))}</strong>"
        details_html = f"""
        <div class=\"player-details\">
            <div class=\"row\"><span>Date of Birth</span><span>{player.date_of_birth.strftime('%b %d, %Y')}</span></div>
            <div class=\"row\"><span>Payment Method</span><span>{payment_html}</span></div>
            <div class=\"row\"><span>Amount Paid</span><span>{amount_html}</span></div>
            <div class=\"row\"><span>Available</span><span>{'Yes' if player.is_available else 'No'}</span></div>
        </div>"""

    return f"""
    <article class=\"card player-card\" id=\"player-{escape(player.id)}\">
        <div class=\"row\">
            <div>
                <h3>{escape(player.name)}</h3>
                <p class=\"muted\">{player.position.value} &bull; Age {player.age(today)}</p>
            </div>
            {eligibility_html}
        </div>
        {details_html}
    </article>"""


def render_index_page(
    *,
    teams: Sequence[Team],
    players: Sequence[Player],
    team_financials: Mapping[str, FinancialSummary],
    team_player_counts: Mapping[str, int],
    overall: FinancialSummary,
    payment_methods: Sequence[PaymentMethodConfig],
    currency: str = "$",
    show_add_player: bool = False,
    error: str | None = None,
    success: str | None = None,
) -> str:
    cards = "".join(
        render_team_card(team, team_financials[team.id], team_player_counts[team.id], currency)
        for team in teams
    )
    if not teams:
        cards = "<div class=\"empty\">No teams yet. Create your first team!</div>"
    modal = ""
    if show_add_player:
        modal = render_modal(
            render_add_player_form(payment_methods, redirect="/ui", cancel_url="/ui")
        )
    body = f"""
    <div class=\"row\">
        <h1>Soccer Teams</h1>
        <a class=\"button\" href=\"/ui?modal=add-player\">+ Add Player</a>
    </div>
    {_render_flash(error, success)}
    {render_financial_card("Overall Financial Summary", overall, currency)}
    <section>
        <h2>Teams ({len(teams)})</h2>
        {cards}
    </section>
    <section>
        <h2>Quick Stats</h2>
        <div class=\"stats\">
            <div class=\"card stat\"><strong>{len(players)}</strong>Total Players</div>
            <div class=\"card stat\"><strong>{len(teams)}</strong>Active Teams</div>
            <div class=\"card stat\"><strong class=\"good\">{escape(format_money(overall.total_collected, currency))}</strong>Total Collected</div>
        </div>
    </section>
    <section>
        <h2>Quick Actions</h2>
        <div class=\"stats\">
            <a class=\"card\" href=\"/ui?modal=add-player\"><strong>Add Player</strong><br><span class=\"muted\">Add a new player to any team</span></a>
            <a class=\"card\" href=\"/ui/payment-methods\"><strong>Payment Methods</strong><br><span class=\"muted\">Manage payment options</span></a>
        </div>
    </section>
    <section class=\"card\">
        {render_add_team_form()}
    </section>
    {modal}
    """
    return render_page(body)


def _render_tabs(team_id: str, active: str) -> str:
    links = "".join(
        f"<a href=\"{_team_url(team_id, view=key)}\" class=\"{'active' if key == active else ''}\">{label}</a>"
        for key, label in TEAM_VIEWS
    )
    return f"<div class=\"tabs\">{links}</div>"


def _render_detailed_view(
    team: Team,
    players: Sequence[Player],
    financials: FinancialSummary,
    payment_methods: Sequence[PaymentMethodConfig],
    *,
    show_details: bool,
    editing_debt: bool,
    currency: str,
    today: date | None,
) -> str:
    redirect = _team_url(team.id, details=show_details)
    if editing_debt:
        debt_html = f"""
        <form method=\"post\" action=\"/ui/teams/{quote(team.id)}/debt\" class=\"inline debt-form\">
            <span>{escape(currency)}</span>
            <input type=\"text\" inputmode=\"decimal\" name=\"total_owed\" value=\"{_input_amount(team.total_owed)}\" placeholder=\"0\" size=\"8\">
            <button type=\"submit\">Save</button>
            <a class=\"button secondary\" href=\"{_team_url(team.id)}\">Cancel</a>
        </form>"""
    else:
        debt_html = (
            f"<a href=\"{_team_url(team.id)}&edit=debt\" class=\"bad\">"
            f"<strong>{escape(format_money(team.total_owed, currency))}</strong> &#9998;</a>"
        )

    toggle_label = "Hide Details" if show_details else "Show Details"
    toggle_url = _team_url(team.id, details=not show_details)
    player_cards = "".join(
        render_player_card(
            player,
            payment_methods=payment_methods,
            redirect=redirect,
            show_details=show_details,
            allow_editing=show_details,
            currency=currency,
            today=today,
        )
        for player in players
    )
    if not players:
        player_cards = f"""
        <div class=\"empty\">
            <p>No players in this team yet</p>
            <a class=\"button\" href=\"{_team_url(team.id)}&modal=add-player\">Add First Player</a>
        </div>"""

    balance_class = "good" if financials.balance >= 0 else "bad"
    return f"""
    <section>
        <h2>Team Finances</h2>
        <div class=\"card\">
            <div class=\"row\"><span>Total Collected:</span><strong class=\"good\">{escape(format_money(financials.total_collected, currency))}</strong></div>
            <div class=\"row\"><span>Money Owed:</span>{debt_html}</div>
            <div class=\"row\"><span><strong>Balance:</strong></span><strong class=\"{balance_class}\">{escape(format_money(financials.balance, currency))}</strong></div>
        </div>
    </section>
    <section>
        <div class=\"row\">
            <h2>Players ({len(players)})</h2>
            <span>
                <a class=\"button secondary\" href=\"{toggle_url}\">{toggle_label}</a>
                <a class=\"button\" href=\"{_team_url(team.id)}&modal=add-player\">+</a>
            </span>
        </div>
        {player_cards}
    </section>
    <section>
        <h2>Team Information</h2>
        <div class=\"card\">
            <div class=\"row\"><span>Formation:</span><span>{team.formation.value}</span></div>
            <div class=\"row\"><span>Created:</span><span>{team.created_at.strftime('%B %d, %Y')}</span></div>
        </div>
    </section>"""


def _render_roster_view(players: Sequence[Player]) -> str:
    sections = []
    for position, group in group_by_position(players).items():
        rows = "".join(
            f"""
            <div class=\"card row\">
                <div><strong>{escape(player.name)}</strong><br>
                <span class=\"muted\">{player.eligibility.value} &bull; {'Available' if player.is_available else 'Unavailable'}</span></div>
                <span class=\"badge {'good' if player.is_available else 'bad'}\">{'Available' if player.is_available else 'Unavailable'}</span>
            </div>"""
            for player in group
        )
        if not group:
            rows = f"<p class=\"muted\">No {position.value.lower()}s assigned</p>"
        sections.append(f"<h3>{position.value}s ({len(group)})</h3>{rows}")
    return f"<section><h2>Team Roster</h2>{''.join(sections)}</section>"


def _render_gameday_view(team: Team, players: Sequence[Player], sheet: GamedaySheet) -> str:
    names = {player.id: player.name for player in players}
    markers = []
    for slot in sheet.positions:
        if slot.player_id is None:
            label = f"Open {slot.position.value}"
            css = "slot open"
        else:
            label = names.get(slot.player_id, slot.player_id)
            css = "slot"
        markers.append(
            f"<span class=\"{css}\" style=\"left: {slot.x}%; top: {slot.y}%;\">{escape(label)}</span>"
        )
    available = "".join(
        f"<div class=\"card row\"><strong>{escape(player.name)}</strong><span class=\"muted\">{player.position.value}</span></div>"
        for player in available_for_gameday(players)
    )
    if not available:
        available = "<p class=\"muted\">No available players</p>"
    bench = ", ".join(escape(player.name) for player in sheet.bench) or "None"
    return f"""
    <section>
        <h2>Game Day Setup</h2>
        <div class=\"card\">
            <h3>Formation: {team.formation.value}</h3>
            <p class=\"muted\">{sheet.filled} of {len(sheet.positions)} positions filled</p>
            <div class=\"pitch\">{''.join(markers)}</div>
            <p><strong>Bench:</strong> {bench}</p>
        </div>
        <h3>Available Players</h3>
        {available}
    </section>"""


def render_team_page(
    *,
    team: Team,
    players: Sequence[Player],
    financials: FinancialSummary,
    payment_methods: Sequence[PaymentMethodConfig],
    sheet: GamedaySheet,
    view: str = "detailed",
    show_details: bool = False,
    editing_debt: bool = False,
    show_add_player: bool = False,
    currency: str = "$",
    error: str | None = None,
    today: date | None = None,
) -> str:
    if view == "roster":
        content = _render_roster_view(players)
    elif view == "gameday":
        content = _render_gameday_view(team, players, sheet)
    else:
        view = "detailed"
        content = _render_detailed_view(
            team,
            players,
            financials,
            payment_methods,
            show_details=show_details,
            editing_debt=editing_debt,
            currency=currency,
            today=today,
        )
    modal = ""
    if show_add_player:
        url = _team_url(team.id, view=view)
        modal = render_modal(
            render_add_player_form(
                payment_methods,
                redirect=url,
                team_id=team.id,
                cancel_url=url,
                today=today,
            )
        )
    body = f"""
    <div class=\"row\">
        <a href=\"/ui\">&lsaquo; Back</a>
        <h1>{escape(team.name)}</h1>
        <a href=\"/ui/payment-methods\">Settings</a>
    </div>
    {_render_flash(error)}
    {_render_tabs(team.id, view)}
    {content}
    {modal}
    """
    return render_page(body, title=team.name)


def render_team_not_found() -> str:
    return render_page("<div class=\"empty\">Team not found</div>", title="Team not found")


def render_payment_methods_page(
    payment_methods: Sequence[PaymentMethodConfig],
    *,
    editing_id: str | None = None,
    show_add: bool = False,
    error: str | None = None,
    success: str | None = None,
) -> str:
    rows = []
    for method in payment_methods:
        method_path = f"/ui/payment-methods/{quote(method.id)}"
        if method.id == editing_id:
            rows.append(f"""
            <div class=\"card\">
                <form method=\"post\" action=\"{method_path}\" class=\"inline\">
                    <input type=\"text\" name=\"name\" value=\"{escape(method.name)}\" placeholder=\"Payment method name\">
                    <a class=\"button secondary\" href=\"/ui/payment-methods\">Cancel</a>
                    <button type=\"submit\">Save</button>
                </form>
            </div>""")
            continue
        default_badge = "<span class=\"badge\">Default</span>" if method.is_default else ""
        delete_html = ""
        if not method.is_default:
            delete_html = f"""
                <form method=\"post\" action=\"{method_path}/delete\" class=\"inline\" data-name=\"{escape(method.name)}\"
                      onsubmit=\"return confirm('Are you sure you want to delete &quot;' + this.dataset.name + '&quot;?');\">
                    <button type=\"submit\" class=\"danger\">Delete</button>
                </form>"""
        rows.append(f"""
            <div class=\"card row payment-method\">
                <span><strong>{escape(method.name)}</strong> {default_badge}</span>
                <span>
                    <a class=\"button secondary\" href=\"/ui/payment-methods?edit={quote(method.id)}\">Edit</a>
                    {delete_html}
                </span>
            </div>""")
    if not payment_methods:
        rows.append("<div class=\"empty\">No payment methods configured</div>")

    modal = ""
    if show_add:
        modal = render_modal("""
        <form method=\"post\" action=\"/ui/payment-methods\">
            <h2>Add Payment Method</h2>
            <input type=\"text\" name=\"name\" placeholder=\"e.g., Venmo, PayPal, Check\">
            <div class=\"row\">
                <a class=\"button secondary\" href=\"/ui/payment-methods\">Cancel</a>
                <button type=\"submit\">Add Method</button>
            </div>
        </form>""")

    body = f"""
    <div class=\"row\">
        <a href=\"/ui\">&lsaquo; Back</a>
        <h1>Payment Methods</h1>
        <a class=\"button\" href=\"/ui/payment-methods?modal=add\">+ Add</a>
    </div>
    {_render_flash(error, success)}
    <section>{''.join(rows)}</section>
    <section>
        <h2>About Payment Methods</h2>
        <ul class=\"notes\">
            <li>Default payment methods cannot be deleted</li>
            <li>Custom payment methods can be edited or removed</li>
            <li>Players can use any configured payment method</li>
        </ul>
    </section>
    {modal}
    """
    return render_page(body, title="Payment Methods")


__all__ = [
    "TEAM_VIEWS",
    "format_balance",
    "format_money",
    "render_add_player_form",
    "render_financial_card",
    "render_index_page",
    "render_page",
    "render_payment_methods_page",
    "render_player_card",
    "render_team_card",
    "render_team_not_found",
    "render_team_page",
]
