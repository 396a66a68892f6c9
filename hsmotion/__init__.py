"""Hierarchical block-matching motion estimation, compensation and PSNR for raw YUV 4:2:0 luma frames."""

__version__ = "0.1.0"