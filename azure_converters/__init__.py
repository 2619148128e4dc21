"""
azure-converters

Converts Azure SDK scale set, instance, image reference and subnet models
into the internal records used by the cluster-management layer.
"""

from .config import ConverterConfig, load_config
from .exceptions import (
    AzureConvertersError,
    ConfigError,
    ImageResolutionError,
    ResourceIDError,
)
from .image import resolve_image_reference
from .logging_config import configure_logging
from .models import (
    ComputeGalleryImage,
    GalleryImageID,
    Image,
    MarketplaceImage,
    ProvisioningState,
    ScaleSet,
    ScaleSetVM,
    SharedGalleryImage,
    SharedGalleryImageID,
)
from .resource_id import (
    parse_gallery_image_id,
    parse_image_id,
    parse_shared_gallery_image_id,
)
from .subnets import get_subnet_addresses
from .tags import map_to_tags
from .vmss import (
    ConversionWarning,
    ResourceConverter,
    convert_instance,
    convert_scale_set,
)

__all__ = [
    "AzureConvertersError",
    "ComputeGalleryImage",
    "ConfigError",
    "ConversionWarning",
    "ConverterConfig",
    "GalleryImageID",
    "Image",
    "ImageResolutionError",
    "MarketplaceImage",
    "ProvisioningState",
    "ResourceConverter",
    "ResourceIDError",
    "ScaleSet",
    "ScaleSetVM",
    "SharedGalleryImage",
    "SharedGalleryImageID",
    "configure_logging",
    "convert_instance",
    "convert_scale_set",
    "get_subnet_addresses",
    "load_config",
    "map_to_tags",
    "parse_gallery_image_id",
    "parse_image_id",
    "parse_shared_gallery_image_id",
    "resolve_image_reference",
]
