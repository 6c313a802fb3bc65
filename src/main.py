"""Main application entry point.

Serves the NiceGUI chat page, which talks to the chat backend configured by
API_BASE_URL. Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run the chat UI."""
    from nicegui import ui

    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    port = int(os.getenv("PORT", "8080"))
    logger.info(f"Chat UI available at http://localhost:{port}/")
    logger.info(f"Using chat backend at {os.getenv('API_BASE_URL', 'http://localhost:3001/api')}")

    ui.run(
        title="Chat",
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        reload=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "chat-client-secret"),
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
