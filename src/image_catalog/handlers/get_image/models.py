from pydantic import BaseModel, Field, StrictStr, field_validator


class ImagePathRequest(BaseModel):
    """Validation model for routes addressing one image by id.

    The id arrives as a path segment string and must be a positive integer.
    """

    image_id: StrictStr = Field(..., min_length=1, description="Image id path segment")

    @field_validator("image_id")
    @classmethod
    def validate_numeric(cls, value: str) -> str:
        value = value.strip()
        if not (value.isascii() and value.isdigit()) or int(value) < 1:
            raise ValueError("image_id must be a positive integer")
        return value

    @property
    def id(self) -> int:
        return int(self.image_id)
