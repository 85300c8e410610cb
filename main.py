"""Точка входа: обслуживание базы, HTTP-сервер и рассылка напоминаний."""

import logging

import click

from config import Settings, get_settings
from core.errors import LoungeError
from database.init import create_tables, init_from_env, seed_default_data
from services import alert_service, user_service
from utils.logging_config import setup_logging
from utils.money import format_money

__all__ = ["cli", "main"]

logger = logging.getLogger(__name__)


def _bootstrap(settings: Settings) -> None:
    if not settings.database_url:
        raise click.ClickException("DATABASE_URL не задан в .env")
    setup_logging(settings)
    init_from_env(settings.database_url)


def log_alert(alert) -> None:
    """Доставка напоминания по умолчанию: запись в журнал."""
    logger.warning(
        "🔔 Напоминание #%s: клиент %s, сумма %s, срок %s. %s",
        alert.id,
        alert.client.name,
        format_money(alert.amount),
        alert.due_at,
        alert.notes or "",
    )


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Касса и журнал клиентов компьютерного клуба."""
    settings = get_settings()
    _bootstrap(settings)
    ctx.obj = settings


@cli.command("init-db")
@click.option("--no-seed", is_flag=True, help="Только создать таблицы.")
@click.pass_obj
def init_db(settings: Settings, no_seed: bool) -> None:
    """Создать таблицы и заполнить справочники."""
    create_tables()
    if settings.seed_default_data and not no_seed:
        seed_default_data(settings.default_admin_password)
    click.echo("✅ База данных готова")


@cli.command("create-user")
@click.option("--username", prompt=True)
@click.option("--full-name", prompt=True)
@click.option("--role", type=click.Choice(["admin", "staff"]), default="staff")
@click.password_option()
def create_user(username: str, full_name: str, role: str, password: str) -> None:
    """Добавить сотрудника."""
    try:
        user = user_service.add_user(username, password, full_name, role)
    except LoungeError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"👤 Создан пользователь #{user.id} {user.username}")


@cli.command("check-alerts")
def check_alerts() -> None:
    """Отправить наступившие напоминания и отметить их показанными."""
    sent = alert_service.dispatch_overdue_alerts(log_alert)
    click.echo(f"🔔 Отправлено напоминаний: {sent}")


@cli.command("serve")
@click.option("--host", default=None, help="Адрес (по умолчанию API_HOST).")
@click.option("--port", type=int, default=None, help="Порт (по умолчанию API_PORT).")
@click.pass_obj
def serve(settings: Settings, host: str | None, port: int | None) -> None:
    """Запустить HTTP-диспетчер."""
    import uvicorn

    from app.main import app

    uvicorn.run(
        app,
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_config=None,
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
