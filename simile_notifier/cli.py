from __future__ import annotations

import argparse
import logging
import sys

from . import config
from .build_step import SimileBuildStep, effective_server_config, notification_config_from_env
from .log_sink import StreamLogSink
from .models import ServerConfig
from .server_config_store import ServerConfigError, ServerConfigStore
from .validation import validate_email, validate_repository

logger = logging.getLogger(__name__)


def _cmd_notify(args: argparse.Namespace, settings: config.Settings) -> int:
    notification = notification_config_from_env(
        repository=args.repository,
        branch=args.branch,
        email=args.email,
    )
    step = SimileBuildStep(notification=notification)
    outcome = step.perform(settings, StreamLogSink(sys.stdout))
    if not outcome.succeeded:
        # Build result stays untouched.
        logger.warning("Simile notification did not succeed (status=%s)", outcome.http_status)
    return 0


def _cmd_validate(args: argparse.Namespace, settings: config.Settings) -> int:
    notification = notification_config_from_env(repository=args.repository, email=args.email)
    verdicts = [
        ("repository", validate_repository(notification.repository)),
        ("email", validate_email(notification.email)),
    ]
    for field, verdict in verdicts:
        line = f"{field}: {verdict.severity.upper()}"
        if verdict.message:
            line += f" - {verdict.message}"
        print(line)
    return 1 if any(v.is_error() for _, v in verdicts) else 0


def _cmd_configure(args: argparse.Namespace, settings: config.Settings) -> int:
    store = ServerConfigStore(settings.config_path)
    store.save(ServerConfig(base_url=args.simile_url))
    print(f"Simile Endpoint: {config.resolve_endpoint(args.simile_url)}")
    return 0


def _cmd_show_config(args: argparse.Namespace, settings: config.Settings) -> int:
    store = ServerConfigStore(settings.config_path)
    stored = store.load()
    effective = effective_server_config(settings, store)
    print(f"Config file:     {store.path}")
    print(f"Stored URL:      {stored.base_url or '(default)'}")
    if settings.simile_url:
        print(f"Override:        {settings.simile_url} (SIMILE_URL)")
    print(f"Simile Endpoint: {config.resolve_endpoint(effective.base_url)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="simile-notifier", description=config.DISPLAY_NAME)
    sub = p.add_subparsers(dest="cmd", required=True)

    notify = sub.add_parser("notify", help="Send this build's repository to Simile")
    notify.add_argument("--repository", default=None, help="Git web URL (default: $GIT_URL)")
    notify.add_argument("--branch", default=None, help="Branch name (default: $GIT_BRANCH without origin/)")
    notify.add_argument("--email", default=None, help="Contact email (default: $SIMILE_EMAIL)")
    notify.set_defaults(func=_cmd_notify)

    validate = sub.add_parser("validate", help="Check repository and email values")
    validate.add_argument("--repository", default=None, help="Git web URL (default: $GIT_URL)")
    validate.add_argument("--email", default=None, help="Contact email (default: $SIMILE_EMAIL)")
    validate.set_defaults(func=_cmd_validate)

    configure = sub.add_parser("configure", help="Save the Simile server base URL")
    configure.add_argument(
        "--simile-url",
        required=True,
        help=f'Base URL of the Simile server ("" resets to {config.DEFAULT_SIMILE_URL})',
    )
    configure.set_defaults(func=_cmd_configure)

    show = sub.add_parser("show-config", help="Print the stored and effective endpoint")
    show.set_defaults(func=_cmd_show_config)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s"
    )

    try:
        settings = config.Settings.from_env()
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    try:
        return int(args.func(args, settings))
    except ServerConfigError as exc:
        logger.error("Server configuration problem: %s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
