"""Onboard - terminal entry point.

Runs the login or signup screen headlessly: fields are prompted for,
submitted through the screen controllers, and the resulting errors,
notifications and navigation are printed.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Sequence

import httpx
from dotenv import load_dotenv
from rich.console import Console
from rich.prompt import Confirm, Prompt

from onboard.client.controllers import FormController, LoginController, SignupController
from onboard.client.navigation.navigator import Navigator
from onboard.client.state import Severity, Store
from onboard.shared.core.configuration import LoggingConfig, SystemConfig, ValidationLevel, get_config_manager
from onboard.shared.core.event_bus import EventBus
from onboard.shared.core.service_registry import register_cleanup_handler, set_session_store
from onboard.shared.domain.session.session_store import create_session_store
from onboard.shared.infrastructure.auth.client import AuthServiceClient

logger = logging.getLogger(__name__)

SEVERITY_STYLES = {
    Severity.INFO: "cyan",
    Severity.SUCCESS: "green",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}

FIELD_LABELS = {
    "username": "Username",
    "password": "Password",
    "firstname": "First Name",
    "lastname": "Last Name",
    "email": "Email",
    "phone": "Phone",
}
SECRET_FIELDS = {"password"}


def configure_logging(config: LoggingConfig, project_root: Path) -> Path:
    """Configure the root logger.

    File handler: everything at the configured level, rotated at 10MB.
    Console handler: only the configured console level and above.

    Returns:
        Path of the log file
    """
    logs_dir = project_root / config.log_dir
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = logs_dir / "onboard.log"

    file_level = logging.getLevelName(config.level.upper())
    if not isinstance(file_level, int):
        file_level = logging.INFO
    console_level = logging.getLevelName(config.console_level.upper())
    if not isinstance(console_level, int):
        console_level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(min(file_level, console_level))

    # Remove existing handlers to avoid duplicates
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))
    root_logger.addHandler(console_handler)

    # Suppress verbose third-party library logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info(f"Logging configured: file={log_file_path}, console={logging.getLevelName(console_level)}+")
    return log_file_path


async def build_application(
    config: SystemConfig,
    project_root: Path,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> tuple[Store, AuthServiceClient]:
    """Wire the event bus, shell state, session store and service client."""
    event_bus = EventBus()

    session_store = create_session_store(
        config.session.backend,
        project_root / config.session.path,
    )
    set_session_store(session_store)

    navigator = Navigator(event_bus)
    store = Store.initialize(event_bus, session_store, navigator)
    register_cleanup_handler(Store.reset)
    await store.app.initialize()
    logger.info("AppState initialized")

    client = AuthServiceClient.from_config(config.api, transport=transport)
    logger.info(f"Auth service client ready for {client.base_url}")
    return store, client


def _prompt_fields(console: Console, controller: FormController) -> None:
    for name in controller.form.fields:
        default = "" if name in SECRET_FIELDS else controller.form.values[name]
        value = Prompt.ask(
            FIELD_LABELS.get(name, name),
            console=console,
            password=name in SECRET_FIELDS,
            default=default,
            show_default=bool(default),
        )
        controller.handle_change(name, value or "")


def _render(console: Console, controller: FormController) -> None:
    for name in controller.form.fields:
        error = controller.form.errors[name]
        if error:
            console.print(f"  [red]{FIELD_LABELS.get(name, name)}:[/red] {error}")

    notification = controller.notification
    if notification.visible:
        style = SEVERITY_STYLES[notification.severity]
        console.print(f"[{style}]{notification.message}[/{style}]")


async def _run_screen(console: Console, controller: FormController, title: str) -> bool:
    """Prompt, submit and render until success or the user gives up."""
    console.rule(title)
    try:
        while True:
            _prompt_fields(console, controller)
            await controller.submit()
            _render(console, controller)

            if controller.redirect is not None:
                await controller.redirect.wait()
                return True

            if not Confirm.ask("Try again?", console=console, default=True):
                return False
            controller.dismiss_notification()
    finally:
        controller.unmount()


async def run_login(console: Console, store: Store, client: AuthServiceClient, config: SystemConfig) -> bool:
    controller = LoginController.from_config(
        config.ui,
        client,
        store.navigator,
        store.session,
        store.bus,
        on_session_established=store.app.establish_session,
    )
    ok = await _run_screen(console, controller, "Login")
    if ok:
        await store.bus.wait_until_idle()
        console.print(f"Signed in as [bold]{store.app.authenticated_user}[/bold], now at {store.app.current_route}")
    return ok


async def run_signup(console: Console, store: Store, client: AuthServiceClient, config: SystemConfig) -> bool:
    controller = SignupController.from_config(config.ui, client, store.navigator, store.bus)
    ok = await _run_screen(console, controller, "Register")
    if ok and store.navigator.current is not None:
        console.print(f"Verify your account at {store.navigator.current.href}")
    return ok


async def run(flow: str, project_root: Path, console: Optional[Console] = None) -> int:
    console = console or Console()
    config = get_config_manager(project_root).get_config(ValidationLevel.LENIENT)
    configure_logging(config.logging, project_root)

    store, client = await build_application(config, project_root)
    async with client:
        try:
            if flow == "signup":
                ok = await run_signup(console, store, client, config)
            else:
                ok = await run_login(console, store, client, config)
        finally:
            Store.reset()
    return 0 if ok else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="onboard", description="Log in or register against the auth service")
    parser.add_argument("flow", nargs="?", choices=["login", "signup"], default="login")
    parser.add_argument("--project-root", type=Path, default=Path.cwd())
    args = parser.parse_args(argv)

    load_dotenv(dotenv_path=args.project_root / ".env")
    try:
        return asyncio.run(run(args.flow, args.project_root))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
