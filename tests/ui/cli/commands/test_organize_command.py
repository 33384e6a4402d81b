"""
Summary: Tests for the organize CLI command.
Why: Playlist confirmation and Ctrl-C handling sit between arguments and the service.
"""

from __future__ import annotations

import signal
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from tracksort.application.services.organize_service import OrganizeMusicService, OrganizeRequest
from tracksort.config.config import Config
from tracksort.features.organization import BatchContext, BatchOptions
from tracksort.shared.track_metadata import RawFields
from tracksort.ui.cli.args.options import OrganizeArgs
from tracksort.ui.cli.commands import OrganizeCommand
from tracksort.ui.cli.commands.organize import cancel_on_interrupt


def _args(source: Path, target: Path, **overrides: object) -> OrganizeArgs:
    values: dict[str, object] = {
        "command": "organize",
        "source_path": source,
        "target_path": target,
        "dry_run": False,
        "workers": None,
        "online": False,
        "remove_playlists": False,
        "yes": False,
        "manifest": None,
        "verbose": False,
        "quiet": True,
    }
    values.update(overrides)
    return OrganizeArgs(**values)  # type: ignore[arg-type]


def _service(mocker: MockerFixture) -> OrganizeMusicService:
    app = OrganizeMusicService(Config())
    original = app.build_context

    def build_context(request: OrganizeRequest) -> BatchContext:
        context = original(request)
        context.tag_reader = lambda _path: RawFields()
        return context

    _ = mocker.patch.object(app, "build_context", side_effect=build_context)
    return app


def _library(tmp_path: Path) -> Path:
    source = tmp_path / "src"
    album = source / "1989 - Bleach"
    album.mkdir(parents=True)
    _ = (album / "01 - Blew.mp3").write_bytes(b"blew")
    _ = (album / "bleach.m3u").write_text("01 - Blew.mp3\n")
    return source


def test_execute_organizes_files(tmp_path: Path, mocker: MockerFixture) -> None:
    source = _library(tmp_path)
    target = tmp_path / "out"

    snapshot = OrganizeCommand(_args(source, target), _service(mocker)).execute()

    assert snapshot.processed == 1
    assert (target / "Pop" / "Unknown Artist" / "1989 - Bleach" / "01 - Blew.mp3").exists()


def test_declined_confirmation_keeps_playlists(tmp_path: Path, mocker: MockerFixture) -> None:
    source = _library(tmp_path)
    ask = mocker.patch("tracksort.ui.cli.commands.organize.Confirm.ask", return_value=False)

    command = OrganizeCommand(_args(source, tmp_path / "out", remove_playlists=True), _service(mocker))
    snapshot = command.execute()

    ask.assert_called_once()
    assert not command.request.remove_playlists
    assert (source / "1989 - Bleach" / "bleach.m3u").exists()
    assert not snapshot.playlists_removed


def test_yes_skips_confirmation(tmp_path: Path, mocker: MockerFixture) -> None:
    source = _library(tmp_path)
    ask = mocker.patch("tracksort.ui.cli.commands.organize.Confirm.ask")

    snapshot = OrganizeCommand(
        _args(source, tmp_path / "out", remove_playlists=True, yes=True), _service(mocker)
    ).execute()

    ask.assert_not_called()
    assert not (source / "1989 - Bleach" / "bleach.m3u").exists()
    assert snapshot.playlists_removed


def test_dry_run_never_asks(tmp_path: Path, mocker: MockerFixture) -> None:
    source = _library(tmp_path)
    ask = mocker.patch("tracksort.ui.cli.commands.organize.Confirm.ask")
    command = OrganizeCommand(_args(source, tmp_path / "out", remove_playlists=True, dry_run=True), _service(mocker))

    assert command.confirm_playlist_removal()
    ask.assert_not_called()


def test_results_are_displayed_unless_quiet(tmp_path: Path, mocker: MockerFixture) -> None:
    source = _library(tmp_path)
    command = OrganizeCommand(_args(source, tmp_path / "out", quiet=False, dry_run=True), _service(mocker))
    show_preview = mocker.patch.object(command.preview_display, "show_preview")

    snapshot = command.execute()

    show_preview.assert_called_once_with(snapshot, tmp_path / "out")


def test_first_interrupt_cancels_second_aborts(tmp_path: Path) -> None:
    context = BatchContext(BatchOptions(output_root=tmp_path / "out"))
    previous = signal.getsignal(signal.SIGINT)

    with cancel_on_interrupt(context):
        handler = signal.getsignal(signal.SIGINT)
        assert callable(handler)
        handler(signal.SIGINT, None)
        assert context.cancelled
        with pytest.raises(KeyboardInterrupt):
            handler(signal.SIGINT, None)

    assert signal.getsignal(signal.SIGINT) is previous
