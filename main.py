# Entry point for the Inkboard drawing surface.

from app import run_app
from logging_config import init_logging


def main() -> None:
    init_logging()
    run_app()


if __name__ == "__main__":
    main()
