import uvicorn

from .config import get_settings


def main():
    settings = get_settings()
    uvicorn.run("petprofiles.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
