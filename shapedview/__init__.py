"""
ShapedView - image widgets clipped to circles, ovals, rounded and cut-corner
rectangles and parametric shapes, for PySide6.

This package contains:
- core: Shape geometry, image fit matrices and rendering
- widgets: The ShapedImageWidget Qt widget
- ui: Demo window
- services: Application services (config, logging)
"""

import logging

__version__ = "0.1.0"

# Silent unless the host application (or setup_logging) adds handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())
