"""Subscriber manager: composition root and demo runner.

Wires engine → gateway → repository → view-model and drives one scripted
session, logging every status message and list change.

Usage:
  python app.py add --name "Jane Doe" --email jane@example.com
  python app.py list
  python app.py clear
"""
import argparse
import asyncio
import logging
import os
import sys
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from db.connection import dispose_engine, init_db
from db.gateway import SubscriberGateway
from db.repository import SubscriberRepository
from schemas.subscriber import Subscriber
from viewmodel import Event, SubscriberViewModel

logger = logging.getLogger(__name__)


async def build_view_model(
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> SubscriberViewModel:
    """Return a view-model over a gateway whose live list is already loaded."""
    gateway = SubscriberGateway(session_factory)
    await gateway.refresh()
    return SubscriberViewModel(SubscriberRepository(gateway))


def _log_message(event: Event[str]) -> None:
    text = event.get_content_if_not_handled()
    if text is not None:
        logger.info("Status: %s", text)


def _log_subscribers(subscribers: list[Subscriber]) -> None:
    logger.info("Subscribers (%d):", len(subscribers))
    for s in subscribers:
        logger.info("  #%d %s <%s>", s.id, s.name, s.email)


async def run(command: str, name: Optional[str] = None, email: Optional[str] = None) -> None:
    await init_db()
    try:
        view_model = await build_view_model()
        view_model.message.observe(_log_message)
        view_model.subscribers.observe(_log_subscribers)

        if command == "add":
            view_model.input_name.value = name
            view_model.input_email.value = email
            view_model.submit()
        elif command == "clear":
            view_model.clear_all_or_delete()

        await view_model.close()
    finally:
        await dispose_engine()


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Subscriber manager demo")
    sub = parser.add_subparsers(dest="command")

    add = sub.add_parser("add", help="Insert a subscriber")
    add.add_argument("--name", required=True)
    add.add_argument("--email", required=True)

    sub.add_parser("list", help="Print every subscriber")
    sub.add_parser("clear", help="Delete every subscriber")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    if args.command not in ("add", "list", "clear"):
        parser.print_help()
        sys.exit(1)
    asyncio.run(run(args.command, getattr(args, "name", None), getattr(args, "email", None)))


if __name__ == "__main__":
    main()
