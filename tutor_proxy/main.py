import uvicorn

from tutor_proxy.core.app_factory import create_app
from tutor_proxy.core.config import settings

app = create_app()


def run() -> None:
    """Serve the app with uvicorn on APP_HOST:PORT."""
    uvicorn.run(
        app,
        host=settings.app.host,
        port=settings.app.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
