"""
Internal record types produced by the converters.

Records are immutable once built. The image source is a discriminated union,
so exactly one of the marketplace, compute-gallery or shared-gallery variants
is present on an ``Image`` and the active variant is known from its type.
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel


class ProvisioningState(str, Enum):
    """Provisioning states reported by Azure for compute resources."""

    ACCEPTED = "Accepted"
    CREATING = "Creating"
    DELETING = "Deleting"
    FAILED = "Failed"
    MIGRATING = "Migrating"
    SUCCEEDED = "Succeeded"
    UPDATING = "Updating"
    CANCELED = "Canceled"
    DELETED = "Deleted"


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MarketplaceImage(_Record):
    """An image published to the Azure Marketplace."""

    kind: Literal["marketplace"] = "marketplace"
    publisher: str = Field(default="", description="Image publisher")
    offer: str = Field(default="", description="Image offer")
    sku: str = Field(default="", description="Image SKU")
    version: str = Field(default="", description="Image version or 'latest'")
    third_party_image: bool = Field(
        default=False,
        description="Whether the image carries a purchase plan",
    )


class ComputeGalleryImage(_Record):
    """An image version stored in an Azure Compute Gallery."""

    kind: Literal["computeGallery"] = "computeGallery"
    subscription_id: Optional[str] = Field(
        default=None, description="Subscription owning the gallery"
    )
    resource_group: Optional[str] = Field(
        default=None, description="Resource group owning the gallery"
    )
    gallery: str = Field(default="", description="Gallery name")
    name: str = Field(default="", description="Image definition name")
    version: str = Field(default="", description="Image version")


class SharedGalleryImage(_Record):
    """An image version in a gallery shared directly to the subscription."""

    kind: Literal["sharedGallery"] = "sharedGallery"
    gallery: str = Field(default="", description="Unique name of the shared gallery")
    name: str = Field(default="", description="Image definition name")
    version: str = Field(default="", description="Image version")


ImageSource = Annotated[
    Union[MarketplaceImage, ComputeGalleryImage, SharedGalleryImage],
    Field(discriminator="kind"),
]


class Image(_Record):
    """
    Image used by a scale set or one of its instances.

    Fields:
        id: Original image ID string, verbatim. Empty for marketplace images.
        source: The resolved image variant.
    """

    id: str = ""
    source: ImageSource

    @property
    def marketplace(self) -> Optional[MarketplaceImage]:
        return self.source if isinstance(self.source, MarketplaceImage) else None

    @property
    def compute_gallery(self) -> Optional[ComputeGalleryImage]:
        return self.source if isinstance(self.source, ComputeGalleryImage) else None

    @property
    def shared_gallery(self) -> Optional[SharedGalleryImage]:
        return self.source if isinstance(self.source, SharedGalleryImage) else None


class GalleryImageID(_Record):
    """Typed fields of a compute-gallery image version resource ID."""

    subscription_id: str
    resource_group: str
    gallery: str
    name: str
    version: str


class SharedGalleryImageID(_Record):
    """Typed fields of a shared-gallery image version ID."""

    gallery: str
    name: str
    version: str


class ScaleSetVM(_Record):
    """A single virtual machine instance of a scale set."""

    id: str = ""
    instance_id: str = ""
    name: str = ""
    state: str = ""
    availability_zone: str = ""
    image: Optional[Image] = None


class ScaleSet(_Record):
    """A virtual machine scale set together with its instances."""

    id: str = ""
    name: str = ""
    state: str = ""
    sku: str = ""
    capacity: Optional[int] = Field(
        default=None,
        description=(
            "Instance count reported by the SKU. Left as None when the scale "
            "set has no SKU or the SKU reports no capacity, so an unknown "
            "count is not confused with a scale set scaled to zero."
        ),
    )
    zones: tuple[str, ...] = ()
    tags: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    instances: tuple[ScaleSetVM, ...] = ()
    image: Optional[Image] = None

    @field_validator("tags", mode="after")
    @classmethod
    def _freeze_tags(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("tags")
    def _dump_tags(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)
