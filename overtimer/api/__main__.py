"""Run the Overtimer API server: python -m overtimer.api"""

import uvicorn

from .. import config


def main() -> None:
    config.configure_logging()
    uvicorn.run(
        "overtimer.api.app:create_app",
        factory=True,
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
