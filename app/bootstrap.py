import logging

from api.client import Session
from app.settings import Settings


def build_session(settings: Settings, **session_kwargs) -> Session:
    """Log in with the configured credentials and select the configured application, if any."""
    logging.info(f"Logging in as {settings.username} ({settings.region})")

    session = Session(
        settings.credentials(),
        verify_ssl=settings.verify_ssl,
        timeout=settings.timeout,
        **session_kwargs,
    )

    if settings.app_name:
        try:
            session.set_used_application(settings.app_name, settings.delayed_data)
        except Exception:
            session.close()
            raise

    logging.info("Session ready.")
    return session
