"""Write the ArbLab OpenAPI document to disk."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any

from fastapi.encoders import jsonable_encoder

from arblab.api.server import app
from arblab.config import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = Path("api_spec/openapi.json")


def build_schema(public_base: str | None = None) -> dict[str, Any]:
    schema = app.openapi()
    if public_base:
        schema = {**schema, "servers": [{"url": public_base.rstrip("/")}]}
    return jsonable_encoder(schema)


def export_openapi(output: Path = DEFAULT_OUTPUT, public_base: str | None = None) -> Path:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(build_schema(public_base), indent=2))
    logger.info("OpenAPI schema written to %s", output)
    return output


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT)
    parser.add_argument(
        "--public-base",
        default=os.getenv("PUBLIC_API_BASE_URL"),
        help="Server URL advertised in the document (defaults to $PUBLIC_API_BASE_URL).",
    )
    args = parser.parse_args()
    configure_logging()
    export_openapi(args.output, args.public_base)


if __name__ == "__main__":  # pragma: no cover
    main()
