"""Run the ForecastRank API with uvicorn.

Usage:
    python -m forecastrank
"""

import uvicorn

from forecastrank.core.config import get_settings


def main() -> None:
    """Serve the application on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "forecastrank.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
