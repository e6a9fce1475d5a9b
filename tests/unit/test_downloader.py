"""
Unit tests for ghasset.core.downloader module.
"""

import errno
import os
import stat
from pathlib import Path

import pytest

from ghasset.core.assets import AssetRequest
from ghasset.core.downloader import Downloader, DownloadStep
from ghasset.core.errors import AuthError, InvalidDestination, TransferError, WriteError
from tests.mocks.fakes import FakeCredentialProvider, FakeTransferClient, not_found_error


@pytest.fixture
def make_downloader(credential_provider, transfer_client):
    def _make(**overrides):
        kwargs = {
            "credential_provider": credential_provider,
            "transfer_client": transfer_client,
        }
        kwargs.update(overrides)
        return Downloader(**kwargs)

    return _make


class TestSuccessfulDownload:
    """End-to-end downloads on the real filesystem."""

    def test_directory_destination(self, tmp_path, asset_id, make_downloader, transfer_client):
        """Test that a directory receives <id>.png with the response body."""
        request = AssetRequest.create(asset_id, str(tmp_path))

        outcome = make_downloader().download(request)

        expected = tmp_path / f"{asset_id}.png"
        assert outcome.path == expected
        assert expected.read_bytes() == transfer_client.body
        assert outcome.bytes_written == len(transfer_client.body)
        assert outcome.extension == ".png"
        assert outcome.content_type == "image/png"

    def test_file_destination_keeps_name(self, tmp_path, asset_id, make_downloader):
        """Test that a file destination is used verbatim."""
        target = tmp_path / "my-image.jpeg"
        request = AssetRequest.create(asset_id, str(target))

        outcome = make_downloader().download(request)

        assert outcome.path == target
        assert target.exists()
        assert not list(tmp_path.glob("*.part"))

    def test_round_trip_is_byte_identical(self, tmp_path, asset_id, make_downloader):
        """Test that reading back the written file yields the response body."""
        body = bytes(range(256)) * 64
        client = FakeTransferClient(body=body, content_type="application/pdf")
        request = AssetRequest.create(asset_id, str(tmp_path))

        outcome = make_downloader(transfer_client=client).download(request)

        assert outcome.path.read_bytes() == body

    def test_overwrites_existing_file(self, tmp_path, asset_id, make_downloader, transfer_client):
        """Test that an existing file is truncated and replaced."""
        target = tmp_path / "existing.png"
        target.write_bytes(b"old contents that are much longer than the new body" * 10)

        make_downloader().download(AssetRequest.create(asset_id, str(target)))

        assert target.read_bytes() == transfer_client.body

    def test_creates_missing_parent_directories(self, tmp_path, asset_id, make_downloader):
        """Test that parents are created and reported."""
        target = tmp_path / "a" / "b" / "image.png"

        outcome = make_downloader().download(AssetRequest.create(asset_id, str(target)))

        assert target.exists()
        assert outcome.destination.created_parent_dirs is True

    def test_existing_parent_not_reported_as_created(self, tmp_path, asset_id, make_downloader):
        """Test created_parent_dirs stays False when nothing was created."""
        outcome = make_downloader().download(AssetRequest.create(asset_id, str(tmp_path / "x.png")))

        assert outcome.destination.created_parent_dirs is False

    def test_generic_content_type_uses_final_url(self, tmp_path, asset_id, make_downloader):
        """Test extension sniffing from the redirected URL."""
        client = FakeTransferClient(
            content_type="application/octet-stream",
            final_url="https://objects.githubusercontent.com/store/report.pdf?sig=abc",
        )

        outcome = make_downloader(transfer_client=client).download(
            AssetRequest.create(asset_id, str(tmp_path))
        )

        assert outcome.path == tmp_path / f"{asset_id}.pdf"

    def test_unrecognised_type_writes_without_extension(self, tmp_path, asset_id, make_downloader):
        """Test that sniffing failure is not fatal."""
        client = FakeTransferClient(content_type="application/x-unknown")

        outcome = make_downloader(transfer_client=client).download(
            AssetRequest.create(asset_id, str(tmp_path))
        )

        assert outcome.path == tmp_path / asset_id
        assert outcome.path.exists()

    def test_reports_progress(self, tmp_path, asset_id, make_downloader, transfer_client):
        """Test that transfer progress reaches the callback."""
        updates = []
        downloader = make_downloader(progress_callback=lambda d, t: updates.append((d, t)))

        downloader.download(AssetRequest.create(asset_id, str(tmp_path)))

        size = len(transfer_client.body)
        assert updates[-1] == (size, size)

    def test_passes_token_to_transfer(self, tmp_path, asset_id, asset_url, make_downloader, transfer_client):
        """Test that the credential provider's token is used for the request."""
        make_downloader().download(AssetRequest.create(asset_id, str(tmp_path)))

        assert transfer_client.requests == [(asset_url, "test-token")]

    def test_final_step_is_done(self, tmp_path, asset_id, make_downloader):
        """Test the state machine ends in DONE."""
        downloader = make_downloader()
        downloader.download(AssetRequest.create(asset_id, str(tmp_path)))

        assert downloader.step is DownloadStep.DONE


class TestFailures:
    """Each step fails with its own error and stops the download."""

    def test_auth_failure_makes_no_request(self, tmp_path, asset_id, make_downloader, transfer_client):
        """Test that an AuthError stops before any network call."""
        provider = FakeCredentialProvider(error=AuthError("GitHub CLI authentication failed: not logged in"))

        with pytest.raises(AuthError) as exc_info:
            make_downloader(credential_provider=provider).download(
                AssetRequest.create(asset_id, str(tmp_path))
            )

        assert exc_info.value.step == "authenticating"
        assert transfer_client.requests == []
        assert list(tmp_path.iterdir()) == []

    def test_not_found_writes_nothing(self, tmp_path, asset_id, make_downloader):
        """Test that a 404 leaves the destination untouched."""
        client = FakeTransferClient(error=not_found_error())
        target = tmp_path / "image.png"

        with pytest.raises(TransferError) as exc_info:
            make_downloader(transfer_client=client).download(AssetRequest.create(asset_id, str(target)))

        assert exc_info.value.step == "requesting"
        assert exc_info.value.status_code == 404
        assert not target.exists()

    def test_invalid_destination(self, asset_id, make_downloader):
        """Test that a protected destination fails in the resolving step."""
        with pytest.raises(InvalidDestination) as exc_info:
            make_downloader().download(AssetRequest.create(asset_id, "/etc/evil.png"))

        assert exc_info.value.step == "resolving"

    def test_empty_destination(self, asset_id, make_downloader):
        """Test that an empty destination fails in the resolving step."""
        with pytest.raises(InvalidDestination):
            make_downloader().download(AssetRequest.create(asset_id, ""))

    def test_parent_is_a_file(self, tmp_path, asset_id, make_downloader):
        """Test that filesystem errors become WriteError."""
        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"")

        with pytest.raises(WriteError) as exc_info:
            make_downloader().download(AssetRequest.create(asset_id, str(blocker / "image.png")))

        assert exc_info.value.step == "writing"


class TestPartialWrites:
    """Failed writes leave no partial file behind."""

    def test_part_file_removed_on_failure(self, mock_repository, asset_id, make_downloader):
        """Test that the .part file is deleted when the write fails."""
        mock_repository.mkdir("out")
        mock_repository.write_error = OSError(errno.ENOSPC, "No space left on device")

        with pytest.raises(WriteError, match="No space left on device"):
            make_downloader(repository=mock_repository).download(AssetRequest.create(asset_id, "out"))

        assert mock_repository.files == {}

    def test_existing_file_survives_failure(self, mock_repository, asset_id, make_downloader):
        """Test that an existing destination is not damaged by a failed write."""
        mock_repository.files[str(Path("keep.png"))] = b"original"
        mock_repository.write_error = OSError(errno.EACCES, "Permission denied")

        with pytest.raises(WriteError):
            make_downloader(repository=mock_repository).download(AssetRequest.create(asset_id, "keep.png"))

        assert mock_repository.files == {"keep.png": b"original"}

    def test_writes_through_repository(self, mock_repository, asset_id, make_downloader, transfer_client):
        """Test that a successful download lands in the repository."""
        mock_repository.mkdir("out")

        outcome = make_downloader(repository=mock_repository).download(AssetRequest.create(asset_id, "out"))

        assert mock_repository.read_binary(outcome.path) == transfer_client.body
        assert not any(name.endswith(".part") for name in mock_repository.files)

    def test_unrelated_part_file_is_left_alone(self, tmp_path, asset_id, make_downloader, transfer_client):
        """Test that a user's own image.png.part survives a download to image.png."""
        target = tmp_path / "image.png"
        neighbour = tmp_path / "image.png.part"
        neighbour.write_bytes(b"user data")

        make_downloader().download(AssetRequest.create(asset_id, str(target)))

        assert neighbour.read_bytes() == b"user data"
        assert target.read_bytes() == transfer_client.body
        assert sorted(p.name for p in tmp_path.iterdir()) == ["image.png", "image.png.part"]

    def test_temp_file_name_avoids_existing_files(self, mock_repository, asset_id, make_downloader):
        """Test that the temporary file never reuses a name already taken."""
        mock_repository.mkdir("out")
        taken = str(Path("out") / f".{asset_id}.png.0.part")
        mock_repository.files[taken] = b"not ours"

        make_downloader(repository=mock_repository).download(AssetRequest.create(asset_id, "out"))

        assert mock_repository.files[taken] == b"not ours"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_written_file_uses_umask_mode(self, tmp_path, asset_id, make_downloader):
        """Test that the downloaded file is not left owner-only."""
        previous = os.umask(0o022)
        try:
            outcome = make_downloader().download(AssetRequest.create(asset_id, str(tmp_path)))
        finally:
            os.umask(previous)

        assert stat.S_IMODE(outcome.path.stat().st_mode) == 0o644
