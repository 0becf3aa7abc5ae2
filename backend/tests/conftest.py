import importlib
import os
import sys
from pathlib import Path

import boto3
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from moto import mock_aws

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from media_gateway.api.deps import get_storage
from media_gateway.core.config import get_settings
from media_gateway.services.storage import StorageService

from tests.consts import TEST_BUCKET_NAME, TEST_REGION
from tests.fakes import RecordingStorage


@pytest.fixture(scope="session", autouse=True)
def configure_environment():
    os.environ["ENV"] = "test"
    os.environ["S3_BUCKET"] = TEST_BUCKET_NAME
    os.environ["S3_REGION"] = TEST_REGION
    os.environ["S3_ACCESS_KEY"] = "testing"
    os.environ["S3_SECRET_KEY"] = "testing"
    os.environ.pop("S3_ENDPOINT_URL", None)
    os.environ.pop("S3_FORCE_PATH_STYLE", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mocked_aws(configure_environment):
    with mock_aws():
        s3_client = boto3.client(
            "s3",
            region_name=TEST_REGION,
            aws_access_key_id="testing",
            aws_secret_access_key="testing",
        )
        s3_client.create_bucket(Bucket=TEST_BUCKET_NAME)
        yield s3_client


@pytest.fixture
def storage(mocked_aws):
    return StorageService(get_settings())


@pytest.fixture
def recording_storage(app_instance):
    fake = RecordingStorage()
    app_instance.dependency_overrides[get_storage] = lambda: fake
    yield fake
    app_instance.dependency_overrides.pop(get_storage, None)


@pytest.fixture(scope="session")
def app_instance(configure_environment):
    from media_gateway import main as app_module

    importlib.reload(app_module)
    return app_module.app


@pytest_asyncio.fixture
async def client(app_instance, storage):
    # Mimic the lifespan startup, which ASGITransport does not run
    app_instance.state.storage = storage
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
