from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from medschedule.routes import upload


def test_upload_url_requires_identity(client):
    assert client.post("/files/upload-url").status_code == 401


def test_upload_url_scoped_to_caller(client, caller, monkeypatch):
    r2 = MagicMock()
    r2.generate_presigned_url.return_value = "https://r2.example/signed"
    monkeypatch.setattr(upload, "get_r2_client", lambda: r2)
    caller.as_user("doctor-uid")

    response = client.post("/files/upload-url")

    assert response.status_code == 200
    body = response.json()
    assert body["uploadUrl"] == "https://r2.example/signed"
    assert body["storageKey"].startswith("uploads/doctor-uid/")
    args, kwargs = r2.generate_presigned_url.call_args
    assert args == ("put_object",)
    assert kwargs["Params"]["Key"] == body["storageKey"]


def test_storage_failure_is_bad_gateway(client, caller, monkeypatch):
    r2 = MagicMock()
    r2.generate_presigned_url.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
    )
    monkeypatch.setattr(upload, "get_r2_client", lambda: r2)
    caller.as_user("doctor-uid")

    assert client.post("/files/upload-url").status_code == 502
