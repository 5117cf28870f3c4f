"""Run the backend with uvicorn on the configured host and port."""

import uvicorn

from postboard.config import settings


def main() -> None:
    uvicorn.run(
        "postboard.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
