"""
Summary: Tests for the organize application service wiring.
Why: Provider selection and manifest export live outside the batch runner.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from tracksort.application.services.organize_service import (
    OrganizeMusicService,
    OrganizeRequest,
    build_providers,
)
from tracksort.config.config import Config
from tracksort.platform.providers.http_client import HTTPResult
from tracksort.shared.errors import TemplateError
from tracksort.shared.track_metadata import RawFields


class UnusedHTTP:
    def get_json(self, url: str, params: dict[str, str]) -> HTTPResult:
        raise AssertionError("no network access expected in tests")


def _write(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_bytes(b"audio")
    return path


def test_keyless_providers_are_used_when_none_enabled() -> None:
    providers = build_providers(Config(), UnusedHTTP())
    assert [provider.name for provider in providers] == ["musicbrainz", "itunes"]


def test_enabled_providers_follow_configured_order() -> None:
    config = Config(
        provider_order=["lastfm", "itunes", "musicbrainz"],
        providers={"itunes": {"enabled": True}, "lastfm": {"enabled": True, "api_key": "k"}},
    )
    assert [provider.name for provider in build_providers(config, UnusedHTTP())] == ["lastfm", "itunes"]


def test_lastfm_without_key_is_skipped(caplog: pytest.LogCaptureFixture) -> None:
    config = Config(providers={"lastfm": {"enabled": True}})

    with caplog.at_level(logging.WARNING, logger="tracksort"):
        providers = build_providers(config, UnusedHTTP())

    assert providers == []
    assert "Last.fm" in caplog.text


def test_build_context_applies_configuration(tmp_path: Path) -> None:
    config = Config(workers=3, path_max_length=120, prefer_online=True)
    service = OrganizeMusicService(config, http_factory=lambda _config: UnusedHTTP())

    context = service.build_context(OrganizeRequest(source_root=tmp_path, output_root=tmp_path / "out"))

    assert context.options.workers == 3
    assert context.options.prefer_online
    assert context.path_builder.max_length == 120
    assert context.online is None


def test_request_workers_override_configuration(tmp_path: Path) -> None:
    service = OrganizeMusicService(Config(workers=3))
    request = OrganizeRequest(source_root=tmp_path, output_root=tmp_path / "out", workers=1)
    assert service.build_context(request).options.workers == 1


def test_online_request_builds_adapter(tmp_path: Path) -> None:
    factory_calls: list[Config] = []

    def factory(config: Config) -> UnusedHTTP:
        factory_calls.append(config)
        return UnusedHTTP()

    service = OrganizeMusicService(Config(), http_factory=factory)
    context = service.build_context(OrganizeRequest(source_root=tmp_path, output_root=tmp_path / "out", online=True))

    assert context.online is not None
    assert [provider.name for provider in context.online.providers] == ["musicbrainz", "itunes"]
    assert len(factory_calls) == 1
    context.online.close()


def test_invalid_templates_surface_before_any_work(tmp_path: Path) -> None:
    service = OrganizeMusicService(Config(file_template="{track}/{title}"))
    with pytest.raises(TemplateError):
        _ = service.build_context(OrganizeRequest(source_root=tmp_path, output_root=tmp_path / "out"))


def test_run_writes_manifest(tmp_path: Path) -> None:
    source = tmp_path / "src"
    _ = _write(source / "1989 - Bleach" / "01 - Blew.mp3")
    manifest = tmp_path / "reports" / "manifest.json"
    request = OrganizeRequest(source_root=source, output_root=tmp_path / "out", dry_run=True, manifest_path=manifest)
    service = OrganizeMusicService(Config())
    context = service.build_context(request)
    context.tag_reader = lambda _path: RawFields()

    snapshot = service.run(request, context)

    assert snapshot.processed == 1
    data = json.loads(manifest.read_text(encoding="utf-8"))
    assert data["dry_run"] is True
    assert data["files"][0]["new_path"].endswith("01 - Blew.mp3")
    assert not (tmp_path / "out").exists()
