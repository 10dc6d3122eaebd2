import io
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from botocore.response import StreamingBody

from services.object_storage import ObjectNotFoundError, ObjectStorageService


def _client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "GetObject")


def test_upload_url_requires_session(client):
    assert client.post("/api/objects/upload").status_code == 401


def test_upload_url(player, s3_client):
    s3_client.generate_presigned_url.return_value = "https://signed.example/put"
    alice, _ = player("Alice")

    resp = alice.post("/api/objects/upload")
    assert resp.status_code == 200
    assert resp.json() == {"uploadURL": "https://signed.example/put"}

    args, kwargs = s3_client.generate_presigned_url.call_args
    assert args == ("put_object",)
    assert kwargs["Params"]["Bucket"] == "test-bucket"
    assert kwargs["Params"]["Key"].startswith("uploads/")
    assert kwargs["ExpiresIn"] == 900


def test_media_attachment_normalizes_presigned_url(player):
    alice, _ = player("Alice")
    resp = alice.put(
        "/api/media-attachments",
        json={
            "mediaUrl": "https://test-bucket.s3.us-west-2.amazonaws.com/uploads/abc?X-Amz-Signature=x",
            "fileType": "image/png",
        },
    )
    assert resp.status_code == 200
    assert resp.json()["objectPath"] == "/objects/uploads/abc"


def test_download_streams_object(client, s3_client):
    data = b"fake-png-bytes"
    s3_client.get_object.return_value = {
        "Body": StreamingBody(io.BytesIO(data), len(data)),
        "ContentType": "image/png",
        "ContentLength": len(data),
    }

    resp = client.get("/objects/uploads/abc")
    assert resp.status_code == 200
    assert resp.content == data
    assert resp.headers["content-type"] == "image/png"
    assert resp.headers["cache-control"] == "public, max-age=3600"
    s3_client.get_object.assert_called_once_with(Bucket="test-bucket", Key="uploads/abc")


def test_download_missing_object(client, s3_client):
    s3_client.get_object.side_effect = _client_error("NoSuchKey")
    resp = client.get("/objects/uploads/missing")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Object not found"


def test_download_provider_failure_is_internal_error(client, s3_client):
    s3_client.get_object.side_effect = _client_error("AccessDenied")
    resp = client.get("/objects/uploads/abc")
    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error"}


class TestNormalizeObjectPath:
    @pytest.fixture
    def service(self):
        return ObjectStorageService(bucket="thetraitorsapp", region="us-west-2", client=MagicMock())

    def test_virtual_hosted_url(self, service):
        url = "https://thetraitorsapp.s3.us-west-2.amazonaws.com/uploads/1234?X-Amz-Expires=900"
        assert service.normalize_object_path(url) == "/objects/uploads/1234"

    def test_path_style_url(self, service):
        url = "https://s3.us-west-2.amazonaws.com/thetraitorsapp/uploads/1234"
        assert service.normalize_object_path(url) == "/objects/uploads/1234"

    def test_bare_key(self, service):
        assert service.normalize_object_path("uploads/1234") == "/objects/uploads/1234"

    def test_already_normalized(self, service):
        assert service.normalize_object_path("/objects/uploads/1234") == "/objects/uploads/1234"


async def test_open_missing_object_raises():
    s3 = MagicMock()
    s3.head_object.side_effect = _client_error("404")
    s3.get_object.side_effect = _client_error("404")
    service = ObjectStorageService(bucket="b", region="us-west-2", client=s3)
    with pytest.raises(ObjectNotFoundError):
        await service.open_object("uploads/nope")
