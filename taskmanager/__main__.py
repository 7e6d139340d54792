"""Run the API with uvicorn: python -m taskmanager"""

import uvicorn

from taskmanager.config import settings


def main() -> None:
    uvicorn.run(
        "taskmanager.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
