"""CLI entrypoint to run the ArbLab FastAPI server."""

from __future__ import annotations

import uvicorn

from arblab.config import configure_logging, get_settings


def main() -> None:
    settings = get_settings()
    configure_logging()
    uvicorn.run("arblab.api.server:app", host=settings.api_host, port=settings.api_port, reload=False)


if __name__ == "__main__":  # pragma: no cover
    main()
