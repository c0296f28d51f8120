from image_catalog.handlers.get_image.models import ImagePathRequest


class DeleteImageRequest(ImagePathRequest):
    """Validation model for delete image request."""
