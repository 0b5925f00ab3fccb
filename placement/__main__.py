"""Run the HTTP surface with uvicorn: ``python -m placement``."""
import uvicorn

from placement.config.settings import settings


def main() -> None:
    uvicorn.run(
        "placement.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_config=None,
    )


if __name__ == "__main__":
    main()
