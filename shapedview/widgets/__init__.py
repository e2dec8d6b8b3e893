"""Qt widgets built on the shape renderer."""

from shapedview.widgets.shaped_image_widget import ShapedImageWidget

__all__ = ["ShapedImageWidget"]
