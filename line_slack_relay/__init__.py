"""line-slack-relay - Relays LINE customer inquiries to Slack with AI reply suggestions."""

from .platform.server.app import create_app
from .platform.settings import Settings


def app():
    """Create the FastAPI application instance."""
    settings = Settings()
    return create_app(settings)
