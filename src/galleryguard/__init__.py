"""
galleryguard - Protected photo gallery viewer for client proofing

Renders gallery images so their pixel data is never exposed as a loadable
resource, with features including:
- Watermark compositing onto an owned drawing surface
- Screenshot shortcut detection per platform family
- Blur-on-focus-loss and violation flash overlays
- Right-click and drag-to-save blocking
"""

__version__ = "0.1.0"
__author__ = "galleryguard"
__description__ = "Protected photo gallery viewer with watermarking and capture deterrence"
