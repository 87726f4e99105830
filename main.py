"""
Entry point for the Job Matching Service.

Builds the FastAPI application and serves it with uvicorn. Host, port,
log level and auto-reload come from the environment (or a .env file).
"""

import os

import uvicorn
from dotenv import load_dotenv

from api.app import create_app

load_dotenv()

app = create_app()


def run() -> None:
    uvicorn.run(
        "main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
        reload=os.getenv("API_RELOAD", "false").lower() in ("1", "true", "yes"),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    run()
