"""Management commands for the domain portfolio application."""

from __future__ import annotations

import functools
import logging
from datetime import date, datetime
from typing import Optional, Union

import click

from portfolio.client import ApiClient, ApiError, bulk_delete, bulk_update
from portfolio.core.config import get_password_min_length
from portfolio.core.exceptions import PortfolioError
from portfolio.core.validation import RegistrationValidator
from portfolio.domain.entities import normalize_status
from portfolio.domain.statistics import compute_statistics
from portfolio.domain.view import SORTABLE_FIELDS, ViewState

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

_DATE = click.DateTime(formats=["%Y-%m-%d"])


@click.group()
def cli() -> None:
    """Entry point for management commands."""


# ---- local database commands ----


@cli.command("init-db")
def init_db() -> None:
    """Create the database tables."""
    from portfolio.db.session import create_tables

    create_tables()
    click.echo("Database tables created.")


@cli.command("seed")
def seed() -> None:
    """Create the admin account and the default custom lists."""
    from portfolio.db.seed import ensure_admin_user, ensure_default_settings
    from portfolio.db.session import create_tables

    create_tables()
    admin = ensure_admin_user()
    settings = ensure_default_settings()
    click.echo(
        f"Admin account {'created' if admin else 'unchanged'}; "
        f"custom lists {'created' if settings else 'unchanged'}."
    )


@cli.command("create-user")
@click.option("--username", prompt=True)
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
def create_user(username: str, email: str, password: str) -> None:
    """Register an account directly in the database."""
    from portfolio.db.session import create_tables
    from portfolio.services.user_service import UserService

    result = RegistrationValidator(get_password_min_length()).validate(
        {"username": username, "email": email, "password": password}
    )
    if not result.is_valid:
        raise click.ClickException("; ".join(result.errors))

    create_tables()
    try:
        user = UserService().register(
            result.cleaned_data["username"],
            result.cleaned_data["email"],
            result.cleaned_data["password"],
        )
    except PortfolioError as exc:
        raise click.ClickException(f"{exc.code}: {exc.message}")
    click.echo(f"User {user.username} created (id={user.id}).")


# ---- API client commands ----


def _view_options(f):
    """Filter and sort options shared by the commands that read a view."""

    @click.option("--search", default="", help="Substring of the domain name.")
    @click.option("--status", default="", help="active, sold, expired or for-sale.")
    @click.option("--registrar", default="")
    @click.option("--category", default="")
    @click.option("--purchased-from", type=_DATE, default=None, help="YYYY-MM-DD, inclusive.")
    @click.option("--purchased-to", type=_DATE, default=None, help="YYYY-MM-DD, inclusive.")
    @click.option("--expires-from", type=_DATE, default=None, help="YYYY-MM-DD, inclusive.")
    @click.option("--expires-to", type=_DATE, default=None, help="YYYY-MM-DD, inclusive.")
    @click.option(
        "--sort",
        "sort_fields",
        multiple=True,
        help="Sort field, repeatable in priority order; prefix with '-' for descending.",
    )
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        kwargs["view"] = _build_view(
            search=kwargs.pop("search"),
            status=kwargs.pop("status"),
            registrar=kwargs.pop("registrar"),
            category=kwargs.pop("category"),
            purchased_from=kwargs.pop("purchased_from"),
            purchased_to=kwargs.pop("purchased_to"),
            expires_from=kwargs.pop("expires_from"),
            expires_to=kwargs.pop("expires_to"),
            sort_fields=kwargs.pop("sort_fields"),
        )
        return f(*args, **kwargs)

    return wrapper


def _day(value: Optional[datetime]) -> Union[date, str]:
    return value.date() if value is not None else ""


def _build_view(
    search: str,
    status: str,
    registrar: str,
    category: str,
    purchased_from: Optional[datetime],
    purchased_to: Optional[datetime],
    expires_from: Optional[datetime],
    expires_to: Optional[datetime],
    sort_fields: tuple[str, ...],
) -> ViewState:
    if status:
        canonical = normalize_status(status)
        if canonical is None:
            raise click.BadParameter(f"unknown status {status!r}", param_hint="--status")
        status = canonical

    view = ViewState().with_filters(
        search=search,
        status=status,
        registrar=registrar,
        category=category,
        purchase_date_from=_day(purchased_from),
        purchase_date_to=_day(purchased_to),
        expiration_date_from=_day(expires_from),
        expiration_date_to=_day(expires_to),
    )

    for raw in sort_fields:
        descending = raw.startswith("-")
        field_name = raw.lstrip("-").replace("-", "_")
        if field_name not in SORTABLE_FIELDS:
            raise click.BadParameter(
                f"choose from {', '.join(SORTABLE_FIELDS)}", param_hint="--sort"
            )
        view = view.toggle_sort(field_name)
        if descending:
            view = view.toggle_sort(field_name)
    return view


def _client(token: Optional[str]) -> ApiClient:
    return ApiClient(token=token)


def _format_price(value) -> str:
    return f"{value:.2f}" if value is not None else "-"


token_option = click.option(
    "--token", envvar="PORTFOLIO_API_TOKEN", default=None, help="Bearer token."
)


@cli.command("list")
@token_option
@_view_options
def list_domains(token: Optional[str], view: ViewState) -> None:
    """List domains from the API with local filters and sorting."""
    try:
        domains = _client(token).list_domains()
    except ApiError as exc:
        raise click.ClickException(str(exc))

    rows = view.visible(domains)
    for domain in rows:
        click.echo(
            f"{domain.id:>5}  {domain.name:<40} {domain.status:<9} "
            f"{domain.registrar:<15} {domain.category:<12} "
            f"{domain.expiration_date or '-'}  {_format_price(domain.purchase_price)}"
        )
    click.echo(f"{len(rows)} of {len(domains)} domains")


@cli.command("stats")
@token_option
def stats(token: Optional[str]) -> None:
    """Show purchase cost, sale proceeds, profit and ROI."""
    client = _client(token)
    try:
        result = compute_statistics(client.list_domains(), client.list_sales())
    except ApiError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Domains:         {result.domain_count}")
    click.echo(f"Total purchased: {result.total_purchased:.2f}")
    click.echo(f"Total sold:      {result.total_sold:.2f}")
    click.echo(f"Profit:          {result.profit:.2f}")
    click.echo(f"ROI:             {result.roi:.2f}%")
    click.echo(f"Average value:   {result.average_value:.2f}")
    for status, count in result.status_counts.items():
        click.echo(f"  {status:<9} {count}")


def _select(view: ViewState, domains, ids: tuple[int, ...], select_all: bool) -> ViewState:
    if select_all:
        return view.select_all(domains)
    for domain_id in ids:
        view = view.toggle_selection(domain_id)
    return view


def _report(outcome) -> None:
    click.echo(outcome.summary())
    for line in outcome.errors:
        click.echo(f"  {line}", err=True)
    if outcome.has_failures:
        raise SystemExit(1)


@cli.command("bulk-delete")
@token_option
@_view_options
@click.option("--id", "ids", type=int, multiple=True, help="Domain id to select.")
@click.option("--all", "select_all", is_flag=True, help="Select every visible domain.")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
def bulk_delete_command(
    token: Optional[str],
    view: ViewState,
    ids: tuple[int, ...],
    select_all: bool,
    yes: bool,
) -> None:
    """Delete the selected domains that match the filters."""
    client = _client(token)
    try:
        domains = client.list_domains()
    except ApiError as exc:
        raise click.ClickException(str(exc))

    view = _select(view, domains, ids, select_all)
    targets = view.selected_visible(domains)
    if not targets:
        click.echo("Nothing selected.")
        return
    if not yes:
        click.confirm(f"Delete {len(targets)} domain(s)?", abort=True)

    _report(bulk_delete(client, view, domains))


@cli.command("bulk-update")
@token_option
@_view_options
@click.option("--id", "ids", type=int, multiple=True, help="Domain id to select.")
@click.option("--all", "select_all", is_flag=True, help="Select every visible domain.")
@click.option("--set-status", default=None)
@click.option("--set-registrar", default=None)
@click.option("--set-category", default=None)
@click.option("--sale-date", default=None, help="YYYY-MM-DD, with --set-status sold.")
@click.option("--selling-price", type=float, default=None)
@click.option("--buyer", default=None)
def bulk_update_command(
    token: Optional[str],
    view: ViewState,
    ids: tuple[int, ...],
    select_all: bool,
    set_status: Optional[str],
    set_registrar: Optional[str],
    set_category: Optional[str],
    sale_date: Optional[str],
    selling_price: Optional[float],
    buyer: Optional[str],
) -> None:
    """Change status, registrar or category of the selected domains."""
    changes = {
        key: value
        for key, value in (
            ("status", set_status),
            ("registrar", set_registrar),
            ("category", set_category),
            ("saleDate", sale_date),
            ("sellingPrice", selling_price),
            ("buyer", buyer),
        )
        if value is not None
    }
    if not any(key in changes for key in ("status", "registrar", "category")):
        raise click.UsageError(
            "Give at least one of --set-status, --set-registrar, --set-category."
        )

    client = _client(token)
    try:
        domains = client.list_domains()
    except ApiError as exc:
        raise click.ClickException(str(exc))

    view = _select(view, domains, ids, select_all)
    if not view.selected_visible(domains):
        click.echo("Nothing selected.")
        return

    _report(bulk_update(client, view, domains, changes))


if __name__ == "__main__":
    cli()
