from __future__ import annotations

import functools

import click
import httpx

from client.api import DEFAULT_API_URL, TrackerApi, TrackerApiError
from client.form import ApplicationForm, delete_with_confirmation
from client.view import ALL, STATUSES, TrackerView


def _api_errors(func):
    """Report API and connection failures as click errors."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except TrackerApiError as exc:
            message = exc.error
            if exc.errors:
                message += "\n" + "\n".join(f"  - {e}" for e in exc.errors)
            raise click.ClickException(message) from exc
        except httpx.HTTPError as exc:
            raise click.ClickException(f"Could not reach the tracker API: {exc}") from exc

    return wrapper


def _format_row(app: dict) -> str:
    location = app.get("location") or "-"
    return f"{app['id']}\t{app['date']}\t{app['status']:<9}\t{app['company']}\t{app['role']}\t{location}"


def _echo_application(app: dict) -> None:
    for field in ("id", "company", "role", "date", "status", "location", "notes"):
        click.echo(f"{field:>9}: {app.get(field) or ''}")


@click.group()
@click.option(
    "--api-url",
    envvar="TRACKER_API_URL",
    default=DEFAULT_API_URL,
    show_default=True,
    help="Base URL of the tracker API.",
)
@click.pass_context
def cli(ctx: click.Context, api_url: str) -> None:
    """Career tracker client."""
    ctx.ensure_object(dict)
    if "api" not in ctx.obj:
        api = TrackerApi(api_url)
        ctx.obj["api"] = api
        ctx.call_on_close(api.close)


@cli.command("list")
@click.option("--status", "status_filter", type=click.Choice([ALL] + STATUSES), default=ALL, show_default=True)
@click.option("--search", default="", help="Match company or role, case-insensitive.")
@click.option("--sort", "sort_order", type=click.Choice(["desc", "asc"]), default="desc", show_default=True)
@click.pass_context
@_api_errors
def list_applications(ctx: click.Context, status_filter: str, search: str, sort_order: str) -> None:
    """Show statistics and the filtered application list."""
    view = TrackerView(ctx.obj["api"].list_applications())
    view.status_filter = status_filter
    view.search = search
    view.sort_order = sort_order

    counts = view.counts
    click.echo(
        f"Total {counts['total']} | Applied {counts['applied']} | Interview {counts['interview']}"
        f" | Offer {counts['offer']} | Rejected {counts['rejected']}"
    )
    if not view.visible:
        click.echo("No applications found")
        return
    for app in view.visible:
        click.echo(_format_row(app))


@cli.command()
@click.argument("application_id", type=int)
@click.pass_context
@_api_errors
def show(ctx: click.Context, application_id: int) -> None:
    """Show one application."""
    _echo_application(ctx.obj["api"].get_application(application_id))


def _form_options(func):
    for option in reversed([
        click.option("--company"),
        click.option("--role"),
        click.option("--date", "date_", help="YYYY-MM-DD"),
        click.option("--status", help=", ".join(STATUSES)),
        click.option("--location"),
        click.option("--notes"),
    ]):
        func = option(func)
    return func


def _submit(api: TrackerApi, form: ApplicationForm, **given) -> dict:
    form.update(**{k: v for k, v in given.items() if v is not None})
    for field in form.missing_fields():
        form.update(**{field: click.prompt(field.capitalize())})
    saved = form.submit(api, reload=api.list_applications)
    if saved is None:
        raise click.ClickException("Company, role and date are required")
    return saved


@cli.command()
@_form_options
@click.pass_context
@_api_errors
def add(ctx, company, role, date_, status, location, notes) -> None:
    """Record a new application."""
    form = ApplicationForm()
    form.open()
    saved = _submit(
        ctx.obj["api"], form,
        company=company, role=role, date=date_, status=status, location=location, notes=notes,
    )
    click.echo(f"Created application {saved['id']}")


@cli.command()
@click.argument("application_id", type=int)
@_form_options
@click.pass_context
@_api_errors
def edit(ctx, application_id, company, role, date_, status, location, notes) -> None:
    """Replace an application; unspecified fields keep their current values."""
    api = ctx.obj["api"]
    form = ApplicationForm()
    form.open(api.get_application(application_id))
    saved = _submit(
        api, form,
        company=company, role=role, date=date_, status=status, location=location, notes=notes,
    )
    click.echo(f"Updated application {saved['id']} ({saved['status']})")


@cli.command()
@click.argument("application_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
@_api_errors
def delete(ctx: click.Context, application_id: int, yes: bool) -> None:
    """Delete an application."""
    confirm = (lambda _: True) if yes else (lambda text: click.confirm(text, default=False))
    api = ctx.obj["api"]
    if delete_with_confirmation(api, application_id, confirm, reload=api.list_applications):
        click.echo(f"Deleted application {application_id}")
    else:
        click.echo("Cancelled")


@cli.command()
@click.pass_context
@_api_errors
def stats(ctx: click.Context) -> None:
    """Show aggregate statistics from the server."""
    data = ctx.obj["api"].stats()
    for key in ("total", "applied", "interview", "offer", "rejected"):
        click.echo(f"{key:>10}: {data[key]}")
    click.echo(f"{'offer rate':>10}: {data['successRate']}")


@cli.command()
@click.pass_context
@_api_errors
def health(ctx: click.Context) -> None:
    """Check that the server is up."""
    data = ctx.obj["api"].health()
    click.echo(f"{data['status']} ({data['timestamp']})")


if __name__ == "__main__":
    cli()
