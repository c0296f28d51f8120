from pydantic import BaseModel, ConfigDict, Field

from image_catalog.core.utils.constants import MAX_DESCRIPTION_LENGTH


class UpdateDescriptionRequest(BaseModel):
    """Validation model for the description update body.

    ``description`` must be present; ``null`` clears it.
    """

    model_config = ConfigDict(extra="ignore")

    description: str | None = Field(..., max_length=MAX_DESCRIPTION_LENGTH)
