"""Game Collection Manager: entry point."""

import asyncio
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
from loguru import logger

from app.config import Config
from app.logger import setup_logger
from app.i18n import init as i18n_init
from app.core.collection import CollectionStore
from app.core.storage import JsonFileStorage
from app.ui.main_window import MainWindow


def main() -> None:
    # ---- 1. Config ----
    config = Config()

    # ---- 2. Logger ----
    setup_logger(config.log_dir, config.log_level)
    logger.info("Game Collection Manager starting…")

    # ---- 3. i18n ----
    i18n_init(config.language)
    logger.info("Language: {}", config.language)

    # ---- 4. Store ----
    loop = asyncio.new_event_loop()
    storage = JsonFileStorage(config.storage_path)
    store = CollectionStore(storage)
    loop.run_until_complete(store.load())
    loop.run_until_complete(store.load_theme())
    logger.info("Storage: {}", storage.path)

    # ---- 5. Qt Application ----
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough,
    )
    app = QApplication(sys.argv)

    # ---- 6. Main Window ----
    window = MainWindow(store, loop)
    window.show()
    logger.info("Window shown, entering event loop")

    code = app.exec()
    loop.close()
    sys.exit(code)


if __name__ == "__main__":
    main()
