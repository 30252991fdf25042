"""Run the server: ``python -m globe_server``."""

from __future__ import annotations

import uvicorn

from globe_server.config import load_config


def main() -> None:
    config = load_config()
    uvicorn.run(
        "globe_server.main:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.env == "dev",
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
