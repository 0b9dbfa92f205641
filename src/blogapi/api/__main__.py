"""
blogapi.api.__main__

Entrypoint for running the service via `python -m blogapi.api`.

Responsibilities:
- Load settings from env, overridable by command-line flags (`--db_host`, `--api_port`, ...).
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from blogapi.api.app import create_app
from blogapi.settings import Settings


def main() -> None:
    settings = Settings(_cli_parse_args=True)
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
