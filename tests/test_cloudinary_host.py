import pytest
import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from app.config import Settings
from app.exceptions import HostRejected, HostUnavailable
from app.infrastructure.asset_host import cloudinary_host
from app.infrastructure.asset_host.cloudinary_host import CloudinaryAssetHost, configure_cloudinary


PNG = "data:image/png;base64,AAAA"


def test_upload_returns_secure_url_and_public_id(monkeypatch):
    calls = []

    def fake_upload(file, **options):
        calls.append((file, options))
        return {"secure_url": "https://cdn/x.png", "url": "http://cdn/x.png", "public_id": "abc123"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    asset = CloudinaryAssetHost(folder="gallery").upload(PNG)

    assert asset.url == "https://cdn/x.png"
    assert asset.asset_id == "abc123"
    assert calls[0][0] == PNG
    assert calls[0][1]["folder"] == "gallery"


def test_upload_without_folder_sends_no_folder(monkeypatch):
    seen = {}

    def fake_upload(file, **options):
        seen.update(options)
        return {"secure_url": "https://cdn/x.png", "public_id": "abc123"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    CloudinaryAssetHost(folder="").upload(PNG)
    assert "folder" not in seen


def test_upload_client_error_is_rejected(monkeypatch):
    monkeypatch.setattr(
        cloudinary.uploader, "upload",
        lambda file, **o: {"error": {"message": "Invalid image file", "http_code": 400}},
    )
    with pytest.raises(HostRejected) as exc:
        CloudinaryAssetHost(folder="").upload(PNG)
    assert exc.value.status_code == 502
    assert "Invalid image file" in exc.value.detail


def test_upload_server_error_is_unavailable(monkeypatch):
    monkeypatch.setattr(
        cloudinary.uploader, "upload",
        lambda file, **o: {"error": {"message": "General Error", "http_code": 500}},
    )
    with pytest.raises(HostUnavailable):
        CloudinaryAssetHost(folder="").upload(PNG)


def test_upload_transport_error_is_unavailable(monkeypatch):
    def boom(file, **options):
        raise CloudinaryError("Socket error: connection refused")

    monkeypatch.setattr(cloudinary.uploader, "upload", boom)
    with pytest.raises(HostUnavailable) as exc:
        CloudinaryAssetHost(folder="").upload(PNG)
    assert exc.value.status_code == 503


def test_upload_incomplete_response_is_rejected(monkeypatch):
    monkeypatch.setattr(cloudinary.uploader, "upload", lambda file, **o: {"secure_url": "https://cdn/x.png"})
    with pytest.raises(HostRejected):
        CloudinaryAssetHost(folder="").upload(PNG)


@pytest.mark.parametrize("image", [
    "data:image/png;base64,AA AA",
    "data:image/png;base64,AA.AA",
    "data:image/jpeg;base64,-AAAA",
])
def test_upload_malformed_base64_never_reaches_sdk(monkeypatch, image):
    def fail_upload(file, **options):
        raise AssertionError("upload should not be called")

    monkeypatch.setattr(cloudinary.uploader, "upload", fail_upload)
    with pytest.raises(HostRejected) as exc:
        CloudinaryAssetHost(folder="").upload(image)
    assert "malformed" in exc.value.detail


def test_upload_missing_credentials_is_unavailable(monkeypatch):
    def no_key(file, **options):
        raise ValueError("Must supply api_key")

    monkeypatch.setattr(cloudinary.uploader, "upload", no_key)
    with pytest.raises(HostUnavailable):
        CloudinaryAssetHost(folder="").upload(PNG)


def test_delete_missing_credentials_is_unavailable(monkeypatch):
    def no_key(public_id, **options):
        raise ValueError("Must supply api_key")

    monkeypatch.setattr(cloudinary.uploader, "destroy", no_key)
    with pytest.raises(HostUnavailable):
        CloudinaryAssetHost(folder="").delete("abc123")


@pytest.mark.parametrize("result,expected", [("ok", True), ("not found", False)])
def test_delete_maps_destroy_result(monkeypatch, result, expected):
    calls = []

    def fake_destroy(public_id, **options):
        calls.append(public_id)
        return {"result": result}

    monkeypatch.setattr(cloudinary.uploader, "destroy", fake_destroy)
    assert CloudinaryAssetHost(folder="").delete("abc123") is expected
    assert calls == ["abc123"]


def test_delete_transport_error_is_unavailable(monkeypatch):
    def boom(public_id, **options):
        raise CloudinaryError("Socket error")

    monkeypatch.setattr(cloudinary.uploader, "destroy", boom)
    with pytest.raises(HostUnavailable):
        CloudinaryAssetHost(folder="").delete("abc123")


def test_configure_cloudinary_applies_settings(monkeypatch):
    seen = {}
    monkeypatch.setattr(cloudinary_host.cloudinary, "config", lambda **kw: seen.update(kw))
    configure_cloudinary(Settings(
        CLOUDINARY_CLOUD_NAME="demo",
        CLOUDINARY_API_KEY="key",
        CLOUDINARY_API_SECRET="secret",
    ))
    assert seen == {"cloud_name": "demo", "api_key": "key", "api_secret": "secret", "secure": True}


def test_configure_cloudinary_skips_when_unset(monkeypatch):
    seen = {}
    monkeypatch.setattr(cloudinary_host.cloudinary, "config", lambda **kw: seen.update(kw))
    configure_cloudinary(Settings(CLOUDINARY_CLOUD_NAME="", CLOUDINARY_API_KEY="", CLOUDINARY_API_SECRET=""))
    assert seen == {}
