import uvicorn

from string_analyzer.config import settings


def main() -> None:
    uvicorn.run("string_analyzer.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
