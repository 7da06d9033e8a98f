"""Run the API: python -m task_tracker"""
import uvicorn

from task_tracker.config import Settings


def main() -> None:
    settings = Settings.from_env()
    uvicorn.run(
        "task_tracker.app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,  # setup_logging owns the handlers
    )


if __name__ == "__main__":
    main()
