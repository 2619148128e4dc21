"""
Parsing of Azure image resource IDs.

Compute Gallery image versions are addressed as:

    /subscriptions/{sub}/resourceGroups/{rg}/providers/Microsoft.Compute/galleries/{gallery}/images/{image}/versions/{version}

Images shared directly to a subscription use the shorter form:

    /SharedGalleries/{gallery}/Images/{image}/Versions/{version}

Literal segments are matched case-insensitively. Both grammars are described
by an ordered table of (position, keyword, value required) rules; once an ID
has been validated its fields are read in a single keyword-indexed pass.
"""

from typing import Dict, List, Sequence, Tuple

from .exceptions import ResourceIDError
from .models import GalleryImageID, SharedGalleryImageID

COMPUTE_PROVIDER = "Microsoft.Compute"
GALLERIES = "galleries"

# Minimum number of non-empty segments in a gallery image version ID
GALLERY_IMAGE_ID_SEGMENTS = 12
SHARED_GALLERY_IMAGE_ID_SEGMENTS = 6

KeywordRule = Tuple[int, str, bool]

GALLERY_IMAGE_ID_RULES: Sequence[KeywordRule] = (
    (0, "subscriptions", True),
    (2, "resourceGroups", True),
    (4, "providers", False),
    (8, "images", True),
    (10, "versions", True),
)

SHARED_GALLERY_IMAGE_ID_RULES: Sequence[KeywordRule] = (
    (0, "sharedGalleries", True),
    (2, "images", True),
    (4, "versions", True),
)


def split_resource_id(resource_id: str) -> List[str]:
    """Split a resource ID on '/', dropping empty segments."""
    return [segment for segment in resource_id.split("/") if segment]


def _check_prefix(resource_id: str) -> None:
    if not resource_id:
        raise ResourceIDError("id cannot be empty")
    if not resource_id.startswith("/"):
        raise ResourceIDError(
            f"invalid resource ID {resource_id!r}: must start with '/'",
            resource_id=resource_id,
        )


def _check_rules(
    segments: List[str], rules: Sequence[KeywordRule], resource_id: str
) -> None:
    for position, keyword, value_required in rules:
        if segments[position].lower() != keyword.lower():
            raise ResourceIDError(
                f"invalid resource ID: expected '{keyword}' at segment {position}, "
                f"got '{segments[position]}'",
                resource_id=resource_id,
            )
        if value_required and not segments[position + 1].strip():
            raise ResourceIDError(
                f"invalid resource ID: missing value after '{keyword}'",
                resource_id=resource_id,
            )


def _index_segments(segments: List[str]) -> Dict[str, str]:
    """Map each lower-cased keyword to the segment that follows it."""
    index: Dict[str, str] = {}
    for keyword, value in zip(segments[::2], segments[1::2]):
        index.setdefault(keyword.lower(), value)
    return index


def parse_image_id(resource_id: str) -> List[str]:
    """
    Validate a compute-gallery image version ID.

    Args:
        resource_id: Full Azure resource ID of a gallery image version

    Returns:
        The non-empty '/'-separated segments of the ID, in order

    Raises:
        ResourceIDError: If the ID is empty, relative, too short, points at
            another resource type, or is missing one of its keywords

    Example:
        >>> parse_image_id(
        ...     "/subscriptions/sub/resourceGroups/rg/providers/Microsoft.Compute"
        ...     "/galleries/gal/images/img/versions/1.0.0"
        ... )[-1]
        '1.0.0'
    """
    _check_prefix(resource_id)

    segments = split_resource_id(resource_id)
    if len(segments) < GALLERY_IMAGE_ID_SEGMENTS:
        raise ResourceIDError(
            f"invalid resource ID: expected at least {GALLERY_IMAGE_ID_SEGMENTS} "
            f"segments, got {len(segments)}",
            resource_id=resource_id,
        )

    if (
        segments[5].lower() != COMPUTE_PROVIDER.lower()
        or segments[6].lower() != GALLERIES
    ):
        raise ResourceIDError(
            f"invalid resource ID: resource type '{segments[5]}/{segments[6]}' "
            f"is not '{COMPUTE_PROVIDER}/{GALLERIES}'",
            resource_id=resource_id,
        )

    _check_rules(segments, GALLERY_IMAGE_ID_RULES, resource_id)
    return segments


def parse_gallery_image_id(resource_id: str) -> GalleryImageID:
    """
    Parse a compute-gallery image version ID into its typed fields.

    Raises:
        ResourceIDError: If the ID fails validation (see ``parse_image_id``)
    """
    index = _index_segments(parse_image_id(resource_id))
    return GalleryImageID(
        subscription_id=index["subscriptions"],
        resource_group=index["resourcegroups"],
        gallery=index["galleries"],
        name=index["images"],
        version=index["versions"],
    )


def parse_shared_gallery_image_id(resource_id: str) -> SharedGalleryImageID:
    """
    Parse a shared-gallery image version ID into its typed fields.

    Raises:
        ResourceIDError: If the ID does not match
            /SharedGalleries/{gallery}/Images/{image}/Versions/{version}
    """
    _check_prefix(resource_id)

    segments = split_resource_id(resource_id)
    if len(segments) < SHARED_GALLERY_IMAGE_ID_SEGMENTS:
        raise ResourceIDError(
            f"invalid resource ID: expected at least {SHARED_GALLERY_IMAGE_ID_SEGMENTS} "
            f"segments, got {len(segments)}",
            resource_id=resource_id,
        )
    _check_rules(segments, SHARED_GALLERY_IMAGE_ID_RULES, resource_id)

    index = _index_segments(segments)
    return SharedGalleryImageID(
        gallery=index["sharedgalleries"],
        name=index["images"],
        version=index["versions"],
    )
