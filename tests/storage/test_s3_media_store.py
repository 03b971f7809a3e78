from unittest.mock import MagicMock

import pytest
import boto3
from botocore.exceptions import ClientError, EndpointConnectionError
from botocore.stub import Stubber

from core.exceptions import MediaDeleteError, UploadError
from domain.services.media_store import MediaKind
from infrastructure.storage import s3_media_store
from infrastructure.storage.s3_media_store import S3MediaStore

pytestmark = pytest.mark.asyncio


def client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "Operation")


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def store(client):
    return S3MediaStore(bucket="videos-bucket", region="eu-west-1", client=client)


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"video-bytes")
    return path


async def test_upload_puts_object_and_probes_duration(store, client, source, monkeypatch):
    async def fake_probe(path):
        return 7.5

    monkeypatch.setattr(s3_media_store, "probe_duration", fake_probe)

    upload = await store.upload(str(source), MediaKind.VIDEO)

    client.upload_file.assert_called_once()
    args, kwargs = client.upload_file.call_args
    assert args[0] == str(source)
    assert args[1] == "videos-bucket"
    assert args[2] == upload.public_id
    assert kwargs["ExtraArgs"] == {"ContentType": "video/mp4"}
    assert upload.url == f"https://videos-bucket.s3.eu-west-1.amazonaws.com/{upload.public_id}"
    assert upload.duration == 7.5


async def test_upload_failure_raises_upload_error(store, client, source):
    client.upload_file.side_effect = EndpointConnectionError(endpoint_url="https://s3")

    with pytest.raises(UploadError):
        await store.upload(str(source), MediaKind.IMAGE)


async def test_rejected_put_object_raises_upload_error(source):
    client = boto3.client(
        "s3",
        region_name="eu-west-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )
    store = S3MediaStore(bucket="videos-bucket", region="eu-west-1", client=client)

    with Stubber(client) as stubber:
        stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)

        with pytest.raises(UploadError):
            await store.upload(str(source), MediaKind.IMAGE)


async def test_delete_calls_delete_object(store, client):
    await store.delete("images/abc.png", MediaKind.IMAGE)

    client.delete_object.assert_called_once_with(Bucket="videos-bucket", Key="images/abc.png")


async def test_delete_of_missing_key_is_a_no_op(store, client):
    client.delete_object.side_effect = client_error("NoSuchKey")

    await store.delete("images/gone.png", MediaKind.IMAGE)


async def test_delete_failure_raises(store, client):
    client.delete_object.side_effect = client_error("AccessDenied")

    with pytest.raises(MediaDeleteError):
        await store.delete("videos/abc.mp4", MediaKind.VIDEO)


async def test_url_prefers_public_url_then_endpoint(client):
    public = S3MediaStore(bucket="b", public_url="https://cdn.example.com/", client=client)
    minio = S3MediaStore(bucket="b", endpoint_url="http://localhost:9000", client=client)

    assert public.get_url("videos/x.mp4") == "https://cdn.example.com/videos/x.mp4"
    assert minio.get_url("videos/x.mp4") == "http://localhost:9000/b/videos/x.mp4"
