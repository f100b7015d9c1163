import logging

from app import ScoreboardKiosk
import config, web_remote


def setup_logging() -> None:
    level = getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=[logging.StreamHandler(),
                  logging.FileHandler(config.LOG_FILE, encoding="utf-8")],
    )


def main():
    setup_logging()
    kiosk = ScoreboardKiosk()
    web_remote.start(kiosk)
    kiosk.run()

if __name__ == "__main__":
    main()
