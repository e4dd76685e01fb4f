"""Run the API with uvicorn: ``python -m petfinder``."""

import uvicorn

from petfinder.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "petfinder.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,  # keep the handlers installed by setup_logging
    )


if __name__ == "__main__":
    main()
