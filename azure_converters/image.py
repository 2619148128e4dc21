"""Classification of SDK image references into internal image variants."""

from typing import Any, Optional

from .models import (
    ComputeGalleryImage,
    Image,
    MarketplaceImage,
    SharedGalleryImage,
)
from .resource_id import parse_gallery_image_id, parse_shared_gallery_image_id


def _str(value: Optional[str]) -> str:
    return value or ""


def resolve_image_reference(
    image_reference: Any, is_third_party_image: bool = False
) -> Image:
    """
    Convert an SDK ``ImageReference`` into an ``Image``.

    Classification:
    1. ``id`` set: the reference points at a Compute Gallery image version
    2. ``shared_gallery_image_id`` set: a directly shared gallery image
    3. otherwise: a marketplace image described by publisher/offer/sku/version

    Args:
        image_reference: azure.mgmt.compute.models.ImageReference
        is_third_party_image: Whether the image carries a purchase plan

    Returns:
        Image with exactly one populated variant

    Raises:
        ResourceIDError: If a gallery ID is present but malformed
    """
    image_id = _str(image_reference.id)

    if image_id:
        parsed = parse_gallery_image_id(image_id)
        return Image(
            id=image_id,
            source=ComputeGalleryImage(
                subscription_id=parsed.subscription_id,
                resource_group=parsed.resource_group,
                gallery=parsed.gallery,
                name=parsed.name,
                version=parsed.version,
            ),
        )

    # Older API versions of the SDK model do not have this attribute
    shared_id = _str(getattr(image_reference, "shared_gallery_image_id", None))
    if shared_id:
        shared = parse_shared_gallery_image_id(shared_id)
        return Image(
            id=shared_id,
            source=SharedGalleryImage(
                gallery=shared.gallery,
                name=shared.name,
                version=shared.version,
            ),
        )

    return Image(
        id=image_id,
        source=MarketplaceImage(
            publisher=_str(image_reference.publisher),
            offer=_str(image_reference.offer),
            sku=_str(image_reference.sku),
            version=_str(image_reference.version),
            third_party_image=is_third_party_image,
        ),
    )


def unresolved_image(image_reference: Any) -> Image:
    """Image with an empty gallery variant, used when the ID cannot be parsed."""
    image_id = _str(image_reference.id)
    if image_id:
        return Image(id=image_id, source=ComputeGalleryImage())
    shared_id = _str(getattr(image_reference, "shared_gallery_image_id", None))
    return Image(id=shared_id, source=SharedGalleryImage())
