import logging

from rich.logging import RichHandler
import uvicorn

from app import config


def main() -> None:
    conf = config.Config()
    logging.basicConfig(
        level=conf.log_level.upper(),
        format="%(name)s: %(message)s",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    uvicorn.run(
        "app.app:create_app",
        factory=True,
        host=conf.host,
        port=conf.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
