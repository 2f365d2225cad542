# equivalent of uvicorn fixihub.main:app --host $HOST --port $PORT, except
# that open event streams are ended as soon as shutdown starts
import uvicorn

import fixihub.main
from fixihub.lifespan import close_hubs


class Server(uvicorn.Server):
    async def shutdown(self, sockets=None):
        # uvicorn waits for open connections before the lifespan teardown
        # runs, and an event stream never finishes by itself
        close_hubs(fixihub.main.app)
        await super().shutdown(sockets=sockets)


def main():
    settings = fixihub.main.app.state.settings
    log_level = "debug" if settings.debug else "info"
    config = uvicorn.Config(
        fixihub.main.app,
        host=settings.host,
        port=settings.port,
        log_level=log_level,
    )
    Server(config).run()


if __name__ == "__main__":
    main()
