"""
Event logger utility for account events.
"""
from datetime import datetime, timezone
from fastapi import Request
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
import sys
import logging
import os

from ..models import AccountEvent, ACCOUNT_EVENT_TYPES

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """Configure stdout logging, plus a file under log_dir when it is writable."""
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_dir:
        # Continue without the file handler if the directory is unusable
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(log_dir, "account_events.log")))
        except OSError as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def client_ip(request: Request) -> Optional[str]:
    # X-Forwarded-For can contain multiple IPs, take the first one
    if request.client:
        return request.client.host
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return None


def log_account_event(
    event_type: str,
    email: str,
    request: Request,
    db: Session,
    user_id: Optional[int] = None,
) -> None:
    """
    Record an account event in the database and the service log.

    Only identity and request metadata are recorded; tokens and passwords
    never reach this function.

    Args:
        event_type: One of: signup, login_success, login_failure, login_forbidden
        email: Email the request was made for
        request: FastAPI Request object
        db: Database session
        user_id: ID of the stored user, when one exists

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ACCOUNT_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(ACCOUNT_EVENT_TYPES)}"
        )

    ip_address = client_ip(request)
    user_agent = request.headers.get("user-agent")

    try:
        event = AccountEvent(
            user_id=user_id,
            email=email,
            event_type=event_type,
            ip_address=ip_address,
            user_agent=user_agent,
            timestamp=datetime.now(timezone.utc),
        )
        db.add(event)
        db.commit()

        logger.info(
            "ACCOUNT %s user_id=%s email=%s ip=%s",
            event_type, user_id, email, ip_address
        )

    except SQLAlchemyError as e:
        # Auditing failure must not break the auth flow
        logger.warning(
            "Failed to log account event - user_id=%s, event_type=%s, error=%s",
            user_id, event_type, e
        )
        db.rollback()
