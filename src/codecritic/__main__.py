"""Run the review API: ``python -m codecritic``."""

from __future__ import annotations

import uvicorn

from codecritic.api.dependencies import get_app_settings


def main() -> None:
    settings = get_app_settings()
    uvicorn.run(
        "codecritic.api.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    main()
