"""BatchUploader validation, ordering and concurrency limits."""

import asyncio

import pytest

from app.config import settings
from app.services.batch_uploader import BatchUploader, validate_image
from app.services.media_client import UploadRequest
from tests.fakes import FakeMediaClient

MB = 1024 * 1024


def _image(name: str, size: int = 1024, content_type: str = "image/jpeg") -> UploadRequest:
    return UploadRequest(filename=name, content_type=content_type, content=b"\xff" * size)


def _run(coro):
    return asyncio.run(asyncio.wait_for(coro, timeout=5))


def test_outcomes_follow_input_order():
    fake = FakeMediaClient(delay=0.01)
    files = [_image("a.jpg"), _image("b.png", content_type="image/png"), _image("c.jpeg")]

    outcomes = _run(BatchUploader(fake).upload_all(files, max_concurrency=3))

    assert [o.filename for o in outcomes] == ["a.jpg", "b.png", "c.jpeg"]
    assert all(o.success for o in outcomes)
    assert all(o.url and o.public_id for o in outcomes)
    assert len({o.public_id for o in outcomes}) == 3


def test_invalid_files_are_rejected_without_network_call():
    fake = FakeMediaClient()
    files = [
        _image("empty.jpg", size=0),
        _image("huge.png", size=5 * MB + 1, content_type="image/png"),
        _image("anim.gif", content_type="image/gif"),
        _image("fake.jpg", content_type="application/pdf"),
    ]

    outcomes = _run(BatchUploader(fake).upload_all(files, max_concurrency=3))

    assert fake.upload_calls == []
    assert [o.success for o in outcomes] == [False] * 4
    assert outcomes[0].error == "File is empty"
    assert "5MB" in outcomes[1].error
    assert "Invalid file type" in outcomes[2].error
    assert "Invalid file type" in outcomes[3].error
    assert all(o.url is None and o.public_id is None for o in outcomes)


def test_exactly_five_megabytes_is_accepted():
    assert validate_image(_image("edge.jpg", size=5 * MB), settings) is None


def test_every_file_is_attempted_when_one_fails():
    fake = FakeMediaClient(fail_uploads={"a.jpg"})
    files = [_image("a.jpg"), _image("b.jpg"), _image("c.jpg")]

    outcomes = _run(BatchUploader(fake).upload_all(files, max_concurrency=3))

    assert fake.upload_calls.count("a.jpg") == 1
    assert sorted(fake.upload_calls) == ["a.jpg", "b.jpg", "c.jpg"]
    assert [o.success for o in outcomes] == [False, True, True]
    assert outcomes[0].error == "Upload quota exceeded"


def test_transport_error_becomes_failed_outcome_and_releases_gate():
    fake = FakeMediaClient(raise_uploads={"a.jpg", "b.jpg"})
    files = [_image("a.jpg"), _image("b.jpg"), _image("c.jpg")]

    # a single slot: a leaked acquisition would hang the remaining uploads
    outcomes = _run(BatchUploader(fake).upload_all(files, max_concurrency=1))

    assert len(fake.upload_calls) == 3
    assert [o.success for o in outcomes] == [False, False, True]
    assert "network unreachable" in outcomes[0].error


def test_in_flight_uploads_never_exceed_limit():
    fake = FakeMediaClient(delay=0.02)
    files = [_image(f"{i}.jpg") for i in range(6)]

    outcomes = _run(BatchUploader(fake).upload_all(files, max_concurrency=2))

    assert all(o.success for o in outcomes)
    assert fake.max_in_flight == 2


def test_simultaneous_batches_stay_within_per_batch_limit():
    fakes = [FakeMediaClient(delay=0.01) for _ in range(10)]

    async def run_batches():
        return await asyncio.gather(*(
            BatchUploader(fake).upload_all([_image(f"{n}-{i}.jpg") for i in range(3)], max_concurrency=3)
            for n, fake in enumerate(fakes)
        ))

    results = _run(run_batches())

    assert all(o.success for batch in results for o in batch)
    assert all(fake.max_in_flight <= 3 for fake in fakes)


def test_rejects_non_positive_concurrency():
    with pytest.raises(ValueError):
        _run(BatchUploader(FakeMediaClient()).upload_all([_image("a.jpg")], max_concurrency=0))


def test_missing_client_fails_each_valid_file():
    files = [_image("a.jpg"), _image("b.gif", content_type="image/gif")]

    outcomes = _run(BatchUploader(None).upload_all(files, max_concurrency=3))

    assert [o.success for o in outcomes] == [False, False]
    assert outcomes[0].error == "Media host is not configured"
    assert outcomes[1].error.startswith("Invalid file type")
