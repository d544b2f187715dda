"""Main application entry point.

Runs FastAPI with NiceGUI mounted for the chat interface, or both as
separate processes. Environment variables are loaded from .env file.
"""

import logging
import os
import subprocess
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))


def run_integrated() -> None:
    """Serve the API and the NiceGUI page from one uvicorn process."""
    import uvicorn
    from nicegui import ui

    from deepsearch.api.app import create_app
    from deepsearch.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="Deepsearch",
        favicon="🔎",
        dark=True,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "deepsearch-secret"),
    )

    logger.info(f"Chat UI on http://localhost:{PORT}/, API docs on http://localhost:{PORT}/docs")

    uvicorn.run(app, host=HOST, port=PORT, log_level=os.getenv("LOG_LEVEL", "info").lower())


def run_separate() -> None:
    """Run the API (PORT) and the NiceGUI page (8080) as two processes.

    Stops both as soon as either exits.
    """
    logger.info(f"Starting API on http://localhost:{PORT}, UI on http://localhost:8080")

    processes = [
        subprocess.Popen(
            [
                sys.executable, "-m", "uvicorn", "deepsearch.api.app:app",
                "--host", HOST, "--port", str(PORT), "--reload",
            ]
        ),
        subprocess.Popen(
            [sys.executable, "-c", "from deepsearch.ui.chat_page import main; main()"]
        ),
    ]

    try:
        while all(proc.poll() is None for proc in processes):
            try:
                processes[0].wait(timeout=1)
            except subprocess.TimeoutExpired:
                continue
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in processes:
            proc.terminate()
        for proc in processes:
            proc.wait()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run the API and NiceGUI on different ports.
    Default is integrated mode (both on PORT).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Deepsearch in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
