"""
ShapedView demo application.

This is the main entry point for the demo.
Run with: python -m shapedview.app [image_path]
"""

import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtGui import QImage
from PySide6.QtWidgets import QApplication

from shapedview.services.config_service import ConfigService
from shapedview.services.logging_service import get_logger, setup_logging
from shapedview.ui.demo_window import DemoWindow


def load_image(path: str) -> Optional[QImage]:
    """
    Load an image file for the demo.

    Returns:
        The image, or None if the path is empty or cannot be decoded.
    """
    logger = get_logger(__name__)

    if not path:
        return None

    image = QImage(str(Path(path).expanduser()))
    if image.isNull():
        logger.warning(f"Could not load image '{path}'. Using the sample image.")
        return None

    logger.info(f"Loaded image '{path}' ({image.width()}x{image.height()})")
    return image


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the ShapedView demo.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    argv = list(sys.argv if argv is None else argv)

    setup_logging()
    logger = get_logger(__name__)

    try:
        logger.info("Starting ShapedView demo...")

        app = QApplication.instance() or QApplication(argv)
        app.setApplicationName("ShapedView")
        app.setApplicationVersion("0.1.0")

        config = ConfigService()
        image_path = argv[1] if len(argv) > 1 else config.demo_image_path

        window = DemoWindow(config, load_image(image_path))
        window.show()

        exit_code = app.exec()

        logger.info(f"ShapedView exiting with code {exit_code}")
        return exit_code

    except Exception as e:
        logger.critical(f"Fatal error during startup: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
