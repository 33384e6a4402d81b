"""Application service for organizing music files.

This layer centralizes orchestration and construction of feature and platform
objects so that UIs only describe *what* to organize.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import final

from tracksort.config.config import Config
from tracksort.features.metadata.usecases.genre.classifier import GenreClassifier
from tracksort.features.metadata.usecases.genre.taxonomy import default_taxonomy
from tracksort.features.metadata.usecases.online.adapter import OnlineCorrectionAdapter
from tracksort.features.metadata.usecases.resolution.resolver import MetadataResolver
from tracksort.features.organization.usecases.batch_runner import (
    BatchContext,
    BatchOptions,
    BatchRunner,
    ProgressCallback,
)
from tracksort.features.path.domain.templates import PathTemplates
from tracksort.features.path.usecases.path_builder import PathBuilder
from tracksort.features.statistics.aggregator import BatchSnapshot
from tracksort.features.statistics.manifest import write_manifest
from tracksort.platform.logging import logger
from tracksort.platform.providers.base import MetadataProvider
from tracksort.platform.providers.http_client import HTTPClient, ProviderHTTPClient
from tracksort.platform.providers.itunes import ITunesProvider
from tracksort.platform.providers.lastfm import LastFmProvider
from tracksort.platform.providers.musicbrainz import MusicBrainzProvider
from tracksort.platform.providers.rate_limit import ProviderGate
from tracksort.platform.providers.user_agent import resolve_user_agent

# Providers usable without credentials; used when --online is given but none is enabled.
KEYLESS_PROVIDERS: tuple[str, ...] = ("musicbrainz", "itunes")


@dataclass(frozen=True)
class OrganizeRequest:
    """Input parameters for organizing operations.

    Attributes:
        source_root: Directory scanned recursively for audio files.
        output_root: Root directory for organized output.
        dry_run: If True, performs no file mutations.
        workers: Planning threads; ``None`` uses the configured value.
        online: Query online providers for missing metadata.
        remove_playlists: Delete ``.m3u`` files under the source root.
        manifest_path: Where to write the JSON manifest, if anywhere.
    """

    source_root: Path
    output_root: Path
    dry_run: bool = False
    workers: int | None = None
    online: bool = False
    remove_playlists: bool = False
    manifest_path: Path | None = None


def build_providers(config: Config, http: HTTPClient) -> list[MetadataProvider]:
    """Instantiate enabled providers in configured priority order."""

    names = config.enabled_providers()
    if not names:
        names = [name for name in config.provider_order if name in KEYLESS_PROVIDERS]

    providers: list[MetadataProvider] = []
    for name in names:
        if name == "musicbrainz":
            providers.append(MusicBrainzProvider(http))
        elif name == "itunes":
            providers.append(ITunesProvider(http))
        elif name == "lastfm":
            api_key = config.providers[name].api_key
            if not api_key:
                logger.warning("Last.fm is enabled but has no api_key; skipping it")
                continue
            providers.append(LastFmProvider(http, api_key))
    return providers


@final
class OrganizeMusicService:
    """Application service that wires a batch from configuration and a request."""

    def __init__(
        self,
        config: Config | None = None,
        *,
        http_factory: Callable[[Config], HTTPClient] | None = None,
    ) -> None:
        self.config: Config = config or Config.load()
        self._http_factory: Callable[[Config], HTTPClient] = http_factory or _default_http_client

    def build_context(self, request: OrganizeRequest) -> BatchContext:
        """Construct the batch context for ``request``.

        Raises:
            TemplateError: If configured naming templates are invalid.
            ConfigError: If configured genre tables reference unknown genres.
        """

        config = self.config
        taxonomy = default_taxonomy().with_overrides(config.genre_keywords, config.artist_genres)
        resolver = MetadataResolver(GenreClassifier(taxonomy), prefer_online=config.prefer_online)
        templates = PathTemplates(
            folder=config.folder_template,
            folder_no_year=config.folder_template_no_year,
            file=config.file_template,
        )
        path_builder = PathBuilder(max_length=config.path_max_length, templates=templates)

        online: OnlineCorrectionAdapter | None = None
        if request.online:
            providers = build_providers(config, self._http_factory(config))
            if providers:
                online = OnlineCorrectionAdapter(
                    providers,
                    timeout=config.provider_timeout,
                    gate=ProviderGate(config.provider_concurrency, config.provider_min_interval),
                )
                logger.info("Online lookups enabled: %s", ", ".join(p.name for p in providers))

        options = BatchOptions(
            output_root=request.output_root,
            dry_run=request.dry_run,
            workers=request.workers or config.workers,
            remove_playlists=request.remove_playlists,
            prefer_online=config.prefer_online,
        )
        return BatchContext(options, resolver=resolver, path_builder=path_builder, online=online)

    def run(
        self,
        request: OrganizeRequest,
        context: BatchContext | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> BatchSnapshot:
        """Run a batch and write the manifest when requested."""

        batch_context = context or self.build_context(request)
        try:
            snapshot = BatchRunner(batch_context, progress_callback).run(request.source_root)
        finally:
            if batch_context.online is not None:
                batch_context.online.close()

        if request.manifest_path is not None:
            _ = write_manifest(snapshot, request.manifest_path)
        return snapshot


def _default_http_client(config: Config) -> HTTPClient:
    return ProviderHTTPClient(
        timeout=config.provider_timeout,
        user_agent=resolve_user_agent(config.mb_app_name, config.mb_app_version, config.mb_contact),
    )


__all__ = ["KEYLESS_PROVIDERS", "OrganizeMusicService", "OrganizeRequest", "build_providers"]
