import uvicorn

from meme_vault.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "meme_vault.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
