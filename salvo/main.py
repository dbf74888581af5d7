"""Application entry point."""

import logging

from salvo.game.app.engine import GameEngine
from salvo.game.infra.app_data import ensure_app_data_dirs
from salvo.game.infra.config import load_default_env_files, load_game_config
from salvo.game.infra.logging import setup_logging, shutdown_logging
from salvo.game.ui.console import ConsoleFrontend

logger = logging.getLogger(__name__)


def main() -> None:
    """Run a hot-seat game in the terminal."""
    load_default_env_files()
    paths = ensure_app_data_dirs()
    setup_logging()
    logger.info("app_data_paths root=%s logs=%s", paths["root"], paths["logs"])
    try:
        config = load_game_config()
        logger.info(
            "game_config board_size=%d fleet=%s",
            config.board_size,
            [f"{ship.name}:{ship.length}" for ship in config.fleet],
        )
        ConsoleFrontend(GameEngine(config)).run()
    except KeyboardInterrupt:
        logger.info("interrupted")
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()
