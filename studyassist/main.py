import uvicorn

from studyassist.api.app import build_app
from studyassist.config.settings import Settings
from studyassist.database.connection import close_pool, init_pool
from studyassist.logging.logger import Log


def main() -> None:
    """Entry point: settings -> pool -> wire services -> serve HTTP."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        app = build_app(settings)
        uvicorn.run(app, host=settings.http_host, port=settings.http_port)
    finally:
        close_pool()


if __name__ == "__main__":
    main()
