import uvicorn
from .config import load_settings


def run() -> None:
    settings = load_settings()
    uvicorn.run(
        "receipt_processor.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_keep_alive=settings.timeout_keep_alive,
        timeout_graceful_shutdown=settings.timeout_graceful_shutdown,
    )


if __name__ == "__main__":
    run()
