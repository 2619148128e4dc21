"""
Conversion of Azure SDK scale set models into internal records.

Design:
- Pure field projection; absent optional fields are skipped, never fatal
- Image parse failures are raised by the resolver and handled here: logged
  and recorded as warnings, or re-raised when strict resolution is configured
- Warnings are tracked on the converter for the caller to inspect

Usage:
    converter = ResourceConverter(config)
    scale_set = converter.convert_scale_set(sdk_vmss, sdk_instances)
    for warning in converter.get_warnings():
        ...
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

import structlog

from .config.models import ConverterConfig
from .exceptions import ImageResolutionError, ResourceIDError
from .image import resolve_image_reference, unresolved_image
from .models import Image, ScaleSet, ScaleSetVM
from .tags import map_to_tags

logger = structlog.get_logger(__name__)


@dataclass
class ConversionWarning:
    """A non-fatal problem encountered while converting a resource."""

    resource_id: str
    """ID of the scale set or instance being converted"""

    image_id: str
    """Image reference ID that could not be resolved"""

    message: str
    """Description of the failure"""


def _vmss_image_reference(sdk_vmss: Any) -> Optional[Any]:
    profile = sdk_vmss.virtual_machine_profile
    if profile is None or profile.storage_profile is None:
        return None
    return profile.storage_profile.image_reference


def _instance_image_reference(sdk_instance: Any) -> Optional[Any]:
    if sdk_instance.storage_profile is None:
        return None
    return sdk_instance.storage_profile.image_reference


class ResourceConverter:
    """
    Converts scale sets, their instances and image references.

    Instances are cheap; create one per conversion batch. The warnings list
    is not synchronised, so a converter should not be shared across threads.
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        """
        Initialize converter with configuration.

        Args:
            config: Converter configuration. Defaults are used when None.
        """
        self.config = config or ConverterConfig()
        self._warnings: List[ConversionWarning] = []

    def convert_scale_set(
        self,
        sdk_vmss: Any,
        sdk_instances: Optional[Iterable[Any]] = None,
    ) -> ScaleSet:
        """
        Convert an SDK scale set and its instances to a ScaleSet record.

        Args:
            sdk_vmss: azure.mgmt.compute.models.VirtualMachineScaleSet
            sdk_instances: azure.mgmt.compute.models.VirtualMachineScaleSetVM items

        Returns:
            ScaleSet record

        Raises:
            ImageResolutionError: If strict image resolution is enabled and an
                image reference ID is malformed
        """
        vmss_id = sdk_vmss.id or ""
        fields: dict[str, Any] = {
            "id": vmss_id,
            "name": sdk_vmss.name or "",
            "state": sdk_vmss.provisioning_state or "",
        }

        if sdk_vmss.sku is not None:
            fields["sku"] = sdk_vmss.sku.name or ""
            fields["capacity"] = sdk_vmss.sku.capacity

        if sdk_vmss.zones:
            fields["zones"] = tuple(sdk_vmss.zones)

        if sdk_vmss.tags:
            fields["tags"] = map_to_tags(sdk_vmss.tags)

        fields["instances"] = tuple(
            self.convert_instance(instance) for instance in sdk_instances or ()
        )

        image_reference = _vmss_image_reference(sdk_vmss)
        if image_reference is not None:
            fields["image"] = self.resolve_image(
                image_reference,
                is_third_party_image=sdk_vmss.plan is not None,
                resource_id=vmss_id,
            )

        return ScaleSet(**fields)

    def convert_instance(self, sdk_instance: Any) -> ScaleSetVM:
        """
        Convert an SDK scale set instance to a ScaleSetVM record.

        Instances without a provisioning state are reported with the
        configured default state. Only the first availability zone is kept.
        """
        instance_id = sdk_instance.id or ""
        fields: dict[str, Any] = {
            "id": instance_id,
            "instance_id": sdk_instance.instance_id or "",
        }
        if sdk_instance.provisioning_state is not None:
            fields["state"] = sdk_instance.provisioning_state
        else:
            fields["state"] = self.config.default_instance_state.value

        os_profile = sdk_instance.os_profile
        if os_profile is not None and os_profile.computer_name is not None:
            fields["name"] = os_profile.computer_name

        image_reference = _instance_image_reference(sdk_instance)
        if image_reference is not None:
            fields["image"] = self.resolve_image(
                image_reference,
                is_third_party_image=sdk_instance.plan is not None,
                resource_id=instance_id,
            )

        if sdk_instance.zones:
            fields["availability_zone"] = sdk_instance.zones[0]

        return ScaleSetVM(**fields)

    def resolve_image(
        self,
        image_reference: Any,
        is_third_party_image: bool = False,
        resource_id: str = "",
    ) -> Image:
        """
        Resolve an image reference, applying the configured failure policy.

        Args:
            image_reference: azure.mgmt.compute.models.ImageReference
            is_third_party_image: Whether the owning resource has a purchase plan
            resource_id: ID of the owning resource, used for warnings

        Raises:
            ImageResolutionError: If the reference is malformed and strict
                image resolution is enabled
        """
        try:
            return resolve_image_reference(image_reference, is_third_party_image)
        except ResourceIDError as e:
            image = unresolved_image(image_reference)
            if self.config.strict_image_resolution:
                raise ImageResolutionError(
                    f"Cannot resolve image reference of {resource_id or 'resource'}",
                    image_id=image.id,
                    cause=e,
                ) from e

            logger.warning(
                "image_reference_unresolved",
                resource_id=resource_id,
                image_id=image.id,
                error=e.message,
            )
            self._warnings.append(
                ConversionWarning(
                    resource_id=resource_id,
                    image_id=image.id,
                    message=e.message,
                )
            )
            return image

    def get_warnings(self) -> List[ConversionWarning]:
        """Get warnings recorded since the converter was created or cleared."""
        return list(self._warnings)

    def clear_warnings(self) -> None:
        self._warnings.clear()


def convert_scale_set(
    sdk_vmss: Any,
    sdk_instances: Optional[Iterable[Any]] = None,
    config: Optional[ConverterConfig] = None,
) -> ScaleSet:
    """Convert an SDK scale set and its instances with a one-off converter."""
    return ResourceConverter(config).convert_scale_set(sdk_vmss, sdk_instances)


def convert_instance(
    sdk_instance: Any, config: Optional[ConverterConfig] = None
) -> ScaleSetVM:
    """Convert one SDK scale set instance with a one-off converter."""
    return ResourceConverter(config).convert_instance(sdk_instance)
