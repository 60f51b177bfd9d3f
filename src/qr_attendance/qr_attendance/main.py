from __future__ import annotations

import asyncio
import importlib
import logging
from types import ModuleType

import click
from dotenv import load_dotenv

from .config import get_settings_module
from .container import Container, build_container
from .core.enums import NoticeLevel, Screen
from .core.exceptions import ValidationError
from .scanning.image_acquirer import ImageScanAcquirer
from .scanning.qr_generator import save_site_qr
from .workflow.surface import Notice, ScreenView

logger = logging.getLogger(__name__)

_NOTICE_COLORS = {
    NoticeLevel.INFO: "cyan",
    NoticeLevel.SUCCESS: "green",
    NoticeLevel.ERROR: "red",
}


def setup_logging(debug: bool) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s : %(message)s"))

    root = logging.getLogger("qr_attendance")
    root.setLevel(logging.DEBUG if debug else logging.WARNING)
    root.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def load_settings() -> ModuleType:
    load_dotenv(override=False)
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    if getattr(settings, "DEBUG", False):
        click.echo(f"[qr-attendance] settings={settings_module} api={getattr(settings, 'API_BASE_URL')}")
    return settings


class TerminalSurface:
    """ScreenSurface that prints views and notices to the terminal."""

    def show(self, view: ScreenView) -> None:
        click.secho(f"\n== {view.title} ==", bold=True)
        for line in view.lines:
            click.echo(f"  {line}")

    def notify(self, notice: Notice) -> None:
        click.secho(f"[{notice.level.value}] {notice.message}", fg=_NOTICE_COLORS.get(notice.level))


def _prompt_scanner(fps: int) -> ImageScanAcquirer:
    raw = click.prompt("Image file(s) with the QR code, comma separated", default="", show_default=False)
    frames = [p.strip() for p in raw.split(",") if p.strip()]
    return ImageScanAcquirer(frames, fps=fps)


async def _dashboard_turn(container: Container) -> bool:
    workflow = container.workflow
    availability = workflow.availability
    choices = []
    if availability.check_in:
        choices.append("i")
    if availability.check_out:
        choices.append("o")
    choices += ["x", "q"]

    labels = {"i": "check in", "o": "check out", "x": "logout", "q": "quit"}
    click.echo("  " + "  ".join(f"[{c}] {labels[c]}" for c in choices))
    choice = click.prompt("Choose", type=click.Choice(choices), show_choices=False)

    if choice == "i":
        await workflow.check_in()
    elif choice == "o":
        await workflow.check_out()
    elif choice == "x":
        workflow.logout()
    else:
        return False
    return True


async def run_shell(container: Container) -> None:
    workflow = container.workflow
    workflow.restore()
    try:
        while True:
            screen = workflow.screen
            if screen == Screen.UNAUTHENTICATED:
                if not click.confirm("Log in?", default=True):
                    break
                code = click.prompt("Employee code", default="", show_default=False)
                phone = click.prompt("Phone", default="", show_default=False)
                await workflow.login(code, phone)
            elif screen == Screen.DASHBOARD:
                if not await _dashboard_turn(container):
                    break
            elif screen == Screen.AWAITING_LOCATION:
                if click.confirm("Allow location access?", default=True):
                    await workflow.confirm_location()
                else:
                    workflow.cancel_location()
            else:
                # Only transient screens are left; they never outlive an awaited call.
                logger.error("Unexpected idle screen %s", screen.value)
                break
    finally:
        await container.aclose()


@click.group()
def cli():
    """QR code attendance client."""


@cli.command("run")
def run_command():
    """Interactive check-in/check-out session."""
    settings = load_settings()
    setup_logging(bool(getattr(settings, "DEBUG", False)))
    fps = int(getattr(settings, "SCAN_FPS", 10))

    container = build_container(
        settings=settings,
        scanner_factory=lambda: _prompt_scanner(fps),
        surface=TerminalSurface(),
    )
    asyncio.run(run_shell(container))


@cli.command("make-qr")
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--hash", "integrity_hash", required=True, help="Integrity hash issued for the site")
@click.option("--coordinate", "site_coordinate", required=True, help="Site position as 'lat,lon'")
def make_qr_command(output, integrity_hash, site_coordinate):
    """Write a printable site QR code (PNG) to OUTPUT."""
    try:
        path = save_site_qr(output, integrity_hash, site_coordinate)
    except ValidationError as e:
        raise click.ClickException(str(e))
    click.echo(f"Site QR code written to {path}")


if __name__ == "__main__":
    cli()
