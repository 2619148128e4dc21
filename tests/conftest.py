import pytest
import structlog
from azure.mgmt.compute.models import ImageReference

from tests.sdk_builders import GALLERY_IMAGE_ID


@pytest.fixture
def gallery_image_id() -> str:
    return GALLERY_IMAGE_ID


@pytest.fixture
def marketplace_reference() -> ImageReference:
    return ImageReference(
        publisher="cncf-upstream",
        offer="capi",
        sku="ubuntu-2204-gen1",
        version="127.3.20230718",
    )


@pytest.fixture
def gallery_reference(gallery_image_id: str) -> ImageReference:
    return ImageReference(id=gallery_image_id)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Keep structlog configuration from leaking between tests."""
    yield
    structlog.reset_defaults()
