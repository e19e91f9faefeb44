from unittest.mock import AsyncMock

from bson import ObjectId
from pymongo.errors import PyMongoError


def test_delete_unknown_id_is_not_found(client, upload, images_collection):
    upload("cat.png")

    r = client.delete(f"/delete/{ObjectId()}")
    assert r.status_code == 404
    assert r.json() == {"error": "Image not found."}
    assert len(images_collection.documents) == 1


def test_delete_malformed_id_is_not_found(client, upload, images_collection):
    upload("cat.png")

    r = client.delete("/delete/not-an-object-id")
    assert r.status_code == 404
    assert len(images_collection.documents) == 1


def test_delete_removes_record_and_files(client, upload, images_collection, upload_dir):
    image = upload("cat.png").json()["image"]

    r = client.delete(f"/delete/{image['_id']}")
    assert r.status_code == 200
    assert r.json() == {"message": "Image deleted successfully"}

    assert images_collection.documents == []
    assert not (upload_dir / image["filename"]).exists()
    assert not (upload_dir / image["processedFilename"]).exists()


def test_delete_succeeds_when_files_are_missing(client, upload, images_collection, upload_dir):
    image = upload("cat.png").json()["image"]
    (upload_dir / image["filename"]).unlink()
    (upload_dir / image["processedFilename"]).unlink()

    r = client.delete(f"/delete/{image['_id']}")
    assert r.status_code == 200
    assert images_collection.documents == []


def test_delete_swallows_file_removal_errors(client, upload, images_collection, monkeypatch):
    image = upload("cat.png").json()["image"]
    monkeypatch.setattr(
        "imageproc.routers.images.delete_file",
        AsyncMock(side_effect=PermissionError("read-only filesystem")),
    )

    r = client.delete(f"/delete/{image['_id']}")
    assert r.status_code == 200
    assert images_collection.documents == []


def test_delete_twice_is_not_found(client, upload):
    image = upload("cat.png").json()["image"]

    assert client.delete(f"/delete/{image['_id']}").status_code == 200
    assert client.delete(f"/delete/{image['_id']}").status_code == 404


def test_delete_store_failure_is_generic_error(client, upload, images_collection):
    image = upload("cat.png").json()["image"]
    images_collection.find_one_and_delete = AsyncMock(side_effect=PyMongoError("primary stepped down"))

    r = client.delete(f"/delete/{image['_id']}")
    assert r.status_code == 500
    assert r.json() == {"error": "Error deleting image."}
