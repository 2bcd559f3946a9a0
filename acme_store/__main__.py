"""Run the API with uvicorn: ``python -m acme_store``."""

from __future__ import annotations

import uvicorn

from acme_store.settings import get_settings


def main() -> None:
    settings = get_settings()
    # uvicorn runs the lifespan shutdown (pool drain) on SIGINT/SIGTERM and
    # exits non-zero when startup fails.
    uvicorn.run(
        "acme_store.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
