"""Image Catalog Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Image catalog keeping S3 objects and relational metadata in sync"
)

__all__ = ["handlers", "core"]
