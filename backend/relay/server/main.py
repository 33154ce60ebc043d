"""Command-line entry point: serve the relay with uvicorn."""

import uvicorn

from relay.server.settings import RelayServerSettings


def main() -> None:  # pragma: no cover
    settings = RelayServerSettings()
    # log_config=None keeps the structlog setup done by the app factory.
    uvicorn.run(
        "relay.server.app:get_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":  # pragma: no cover
    main()
