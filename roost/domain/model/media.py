"""Media entity."""

from pydantic import Field

from roost.domain.model.common import DomainModel
from roost.domain.value import MediaId, PostId


class Media(DomainModel):
    """An image attached to a post."""

    id: MediaId
    post_id: PostId
    content_url: str
    alt_text: str = Field(default="", max_length=300)
