"""
Unit tests for scale set and instance conversion.

Tests ResourceConverter including:
- Field projection from SDK scale sets and instances
- Optional blocks (SKU, zones, tags, image chain) being skipped when absent
- Instance state defaults and first-zone selection
- Malformed image IDs degrading with a warning or raising in strict mode
"""

from unittest.mock import patch

import pytest
from azure.mgmt.compute.models import (
    ImageReference,
    Plan,
    Sku,
    VirtualMachineScaleSetVMProfile,
)

from azure_converters.config import ConverterConfig
from azure_converters.exceptions import ImageResolutionError, ResourceIDError
from azure_converters.models import (
    ComputeGalleryImage,
    MarketplaceImage,
    ProvisioningState,
    ScaleSet,
)
from azure_converters.vmss import (
    ResourceConverter,
    convert_instance,
    convert_scale_set,
)
from tests.sdk_builders import VMSS_ID, make_instance, make_scale_set

MALFORMED_IMAGE_ID = "/subscriptions/sub/resourceGroups/rg/providers/Microsoft.Compute/images/custom"


class TestConvertScaleSet:
    """Test cases for scale set conversion."""

    @pytest.fixture
    def converter(self):
        return ResourceConverter()

    def test_full_scale_set(self, converter, marketplace_reference):
        """Test that every populated field is projected."""
        sdk_vmss = make_scale_set(
            sku=Sku(name="Standard_D2s_v3", capacity=3),
            zones=["1", "2", "3"],
            tags={"sigs.k8s.io_cluster-name": "prod", "owner": None},
            image_reference=marketplace_reference,
        )
        instances = [
            make_instance(instance_id="0", zones=["1"]),
            make_instance(instance_id="1", zones=["2"]),
        ]

        scale_set = converter.convert_scale_set(sdk_vmss, instances)

        assert scale_set.id == VMSS_ID
        assert scale_set.name == "pool0"
        assert scale_set.state == "Succeeded"
        assert scale_set.sku == "Standard_D2s_v3"
        assert scale_set.capacity == 3
        assert scale_set.zones == ("1", "2", "3")
        assert scale_set.tags == {"sigs.k8s.io_cluster-name": "prod", "owner": ""}
        assert [vm.instance_id for vm in scale_set.instances] == ["0", "1"]
        assert [vm.availability_zone for vm in scale_set.instances] == ["1", "2"]
        assert scale_set.image.source == MarketplaceImage(
            publisher="cncf-upstream",
            offer="capi",
            sku="ubuntu-2204-gen1",
            version="127.3.20230718",
        )
        assert converter.get_warnings() == []

    def test_minimal_scale_set(self, converter):
        """Test that absent optional blocks leave defaults in place."""
        sdk_vmss = make_scale_set(id=None, name=None, provisioning_state=None)

        scale_set = converter.convert_scale_set(sdk_vmss)

        assert scale_set == ScaleSet()
        assert scale_set.capacity is None
        assert scale_set.zones == ()
        assert scale_set.tags == {}
        assert scale_set.instances == ()
        assert scale_set.image is None

    def test_empty_zones_and_tags_skipped(self, converter):
        sdk_vmss = make_scale_set(zones=[], tags={})

        scale_set = converter.convert_scale_set(sdk_vmss, [])

        assert scale_set.zones == ()
        assert scale_set.tags == {}

    def test_sku_without_capacity(self, converter):
        """Test that a SKU with no capacity leaves the count unknown."""
        sdk_vmss = make_scale_set(sku=Sku(name="Standard_B2s"))

        scale_set = converter.convert_scale_set(sdk_vmss)

        assert scale_set.sku == "Standard_B2s"
        assert scale_set.capacity is None

    def test_collections_are_read_only(self, converter):
        sdk_vmss = make_scale_set(zones=["1"], tags={"env": "prod"})

        scale_set = converter.convert_scale_set(sdk_vmss, [make_instance()])

        with pytest.raises(AttributeError):
            scale_set.zones.append("9")
        with pytest.raises(TypeError):
            scale_set.tags["env"] = "dev"
        with pytest.raises(AttributeError):
            scale_set.instances.append(make_instance())
        assert scale_set.zones == ("1",)
        assert scale_set.tags == {"env": "prod"}
        assert len(scale_set.instances) == 1

    def test_tags_detached_from_input(self):
        tags = {"env": "prod"}

        scale_set = ScaleSet(tags=tags)
        tags["env"] = "dev"

        assert scale_set.tags == {"env": "prod"}

    def test_plan_marks_third_party_image(self, converter, marketplace_reference):
        sdk_vmss = make_scale_set(
            plan=Plan(name="plan", publisher="vendor", product="appliance"),
            image_reference=marketplace_reference,
        )

        scale_set = converter.convert_scale_set(sdk_vmss)

        assert scale_set.image.marketplace.third_party_image is True

    def test_incomplete_image_chain_skips_image(self, converter):
        """Test that a profile without storage profile yields no image."""
        sdk_vmss = make_scale_set(
            virtual_machine_profile=VirtualMachineScaleSetVMProfile()
        )

        scale_set = converter.convert_scale_set(sdk_vmss)

        assert scale_set.image is None

    def test_gallery_image(self, converter, gallery_reference, gallery_image_id):
        sdk_vmss = make_scale_set(image_reference=gallery_reference)

        scale_set = converter.convert_scale_set(sdk_vmss)

        assert scale_set.image.id == gallery_image_id
        assert scale_set.image.compute_gallery.gallery == "capi_gallery"
        assert scale_set.image.compute_gallery.version == "1.27.3"

    def test_malformed_image_degrades_with_warning(self, converter):
        sdk_vmss = make_scale_set(
            image_reference=ImageReference(id=MALFORMED_IMAGE_ID)
        )

        with patch("azure_converters.vmss.logger") as mock_logger:
            scale_set = converter.convert_scale_set(sdk_vmss)

        assert scale_set.image.id == MALFORMED_IMAGE_ID
        assert scale_set.image.source == ComputeGalleryImage()
        assert mock_logger.warning.called

        warnings = converter.get_warnings()
        assert len(warnings) == 1
        assert warnings[0].resource_id == VMSS_ID
        assert warnings[0].image_id == MALFORMED_IMAGE_ID
        assert "invalid resource ID" in warnings[0].message

    def test_malformed_image_raises_in_strict_mode(self):
        converter = ResourceConverter(ConverterConfig(strict_image_resolution=True))
        sdk_vmss = make_scale_set(
            image_reference=ImageReference(id=MALFORMED_IMAGE_ID)
        )

        with pytest.raises(ImageResolutionError) as exc_info:
            converter.convert_scale_set(sdk_vmss)

        assert isinstance(exc_info.value.__cause__, ResourceIDError)
        assert exc_info.value.context["image_id"] == MALFORMED_IMAGE_ID
        assert converter.get_warnings() == []

    def test_clear_warnings(self, converter):
        sdk_vmss = make_scale_set(
            image_reference=ImageReference(id=MALFORMED_IMAGE_ID)
        )
        converter.convert_scale_set(sdk_vmss)

        converter.clear_warnings()

        assert converter.get_warnings() == []

    def test_module_level_function(self, marketplace_reference):
        sdk_vmss = make_scale_set(image_reference=marketplace_reference)

        scale_set = convert_scale_set(sdk_vmss, [make_instance()])

        assert scale_set.name == "pool0"
        assert len(scale_set.instances) == 1

    def test_dump_by_alias(self, converter):
        sdk_vmss = make_scale_set(sku=Sku(name="Standard_B2s", capacity=1))

        data = converter.convert_scale_set(sdk_vmss, [make_instance()]).model_dump(
            by_alias=True
        )

        assert data["capacity"] == 1
        assert data["tags"] == {}
        assert isinstance(data["tags"], dict)
        assert data["instances"][0]["instanceId"] == "0"
        assert data["instances"][0]["availabilityZone"] == ""


class TestConvertInstance:
    """Test cases for instance conversion."""

    def test_full_instance(self, gallery_reference):
        sdk_instance = make_instance(
            instance_id="7",
            provisioning_state="Updating",
            zones=["3"],
            computer_name="pool0000007",
            image_reference=gallery_reference,
        )

        vm = convert_instance(sdk_instance)

        assert vm.id == f"{VMSS_ID}/virtualMachines/7"
        assert vm.instance_id == "7"
        assert vm.state == "Updating"
        assert vm.name == "pool0000007"
        assert vm.availability_zone == "3"
        assert vm.image.compute_gallery.name == "capi-ubuntu-2204"

    def test_missing_state_defaults_to_creating(self):
        vm = convert_instance(make_instance(provisioning_state=None))

        assert vm.state == ProvisioningState.CREATING.value

    def test_configured_default_state(self):
        config = ConverterConfig(default_instance_state="Accepted")

        vm = convert_instance(make_instance(provisioning_state=None), config)

        assert vm.state == "Accepted"

    def test_empty_state_kept(self):
        """Test that only a missing state falls back to the default."""
        vm = convert_instance(make_instance(provisioning_state=""))

        assert vm.state == ""

    def test_unknown_state_passes_through(self):
        vm = convert_instance(make_instance(provisioning_state="Reimaging"))

        assert vm.state == "Reimaging"

    def test_only_first_zone_kept(self):
        vm = convert_instance(make_instance(zones=["2", "1"]))

        assert vm.availability_zone == "2"

    def test_absent_optional_fields(self):
        vm = convert_instance(make_instance(instance_id=None))

        assert vm.id == ""
        assert vm.instance_id == ""
        assert vm.name == ""
        assert vm.availability_zone == ""
        assert vm.image is None

    def test_plan_marks_third_party_image(self, marketplace_reference):
        sdk_instance = make_instance(
            image_reference=marketplace_reference,
            plan=Plan(name="plan", publisher="vendor", product="appliance"),
        )

        vm = convert_instance(sdk_instance)

        assert vm.image.marketplace.third_party_image is True

    def test_malformed_instance_image_warning(self):
        converter = ResourceConverter()
        sdk_instance = make_instance(
            instance_id="4", image_reference=ImageReference(id=MALFORMED_IMAGE_ID)
        )

        vm = converter.convert_instance(sdk_instance)

        assert vm.image.source == ComputeGalleryImage()
        assert converter.get_warnings()[0].resource_id == vm.id
