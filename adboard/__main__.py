import uvicorn

from adboard.config import settings


def main() -> None:
    uvicorn.run("adboard.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
