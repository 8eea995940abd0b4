"""Run the catalog with uvicorn: ``python -m src.catalog``."""

import uvicorn

from src.catalog.runtime.context import get_config


def main() -> None:
    config = get_config()
    uvicorn.run(
        "src.catalog.api.http.app:app",
        host=config.app.host,
        port=config.app.port,
        reload=config.app.environment == "development",
        log_config=None,
    )


if __name__ == "__main__":
    main()
