"""Pipeline orchestration for generate/list/sync/init flows."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import List, Optional, Set

from .config import (
    AppConfig,
    AppPaths,
    config_to_dict,
    expand_path,
    load_config,
    write_default_config,
)
from .detection import TechnologyDetector, find_git_root
from .errors import IgnrError, NotAGitRepositoryError, SyncError
from .logging import get_logger
from .merger import ManagedSectionMerger
from .models import GenerateOutcome, GenerateRequest, MergeMode
from .sync import SyncResult, TemplateSyncer
from .templates import (
    BuiltinSource,
    ManagedDataSource,
    TemplateSource,
    build_block,
    build_sources,
    list_available,
)

GITIGNORE_FILENAME = ".gitignore"
NOTHING_DETECTED = "No technologies detected and none specified"


class Orchestrator:
    """Coordinates detection, composition and merging for one invocation."""

    def __init__(
        self,
        config: AppConfig | None = None,
        paths: AppPaths | None = None,
        *,
        dry_run: bool = False,
        today: date | None = None,
        detector: TechnologyDetector | None = None,
        merger: ManagedSectionMerger | None = None,
        syncer: TemplateSyncer | None = None,
    ) -> None:
        self.paths = paths or AppPaths.discover()
        self.config = config or load_config(self.paths.config_file)
        self.dry_run = dry_run
        self.today = today
        self.detector = detector or TechnologyDetector(self.config.detection)
        self.merger = merger or ManagedSectionMerger()
        self._syncer = syncer
        self.logger = get_logger("orchestrator")

    @classmethod
    def from_environment(
        cls, config_path: Path | str | None = None, *, dry_run: bool = False
    ) -> "Orchestrator":
        """Resolve paths and configuration, creating the default config on first run."""
        paths = AppPaths.discover(config_path)
        logger = get_logger("orchestrator")
        if not paths.config_file.exists():
            if dry_run:
                logger.info("dry-run: would create default config at %s", paths.config_file)
            else:
                write_default_config(paths.config_file)
        config = load_config(paths.config_file)
        paths = paths.apply_overrides(config)
        logger.debug("resolved paths: %s", paths)
        return cls(config, paths, dry_run=dry_run)

    def sources(self) -> List[TemplateSource]:
        """Build the ordered template sources, seeding the data directory if needed."""
        builtin = BuiltinSource()
        ManagedDataSource(self.paths.templates_dir).seed(builtin, dry_run=self.dry_run)
        template_dir = self.config.templates.template_dir
        return build_sources(
            self.paths.templates_dir,
            custom_dir=expand_path(template_dir) if template_dir else None,
            prefer_local=self.config.templates.prefer_local,
            builtin=builtin,
        )

    def collect_tags(self, directory: Path, request: GenerateRequest) -> List[str]:
        tags: Set[str] = set()
        if not request.no_detect:
            tags.update(self.detector.detect(directory, request.depth))
        tags.update(tag.strip().lower() for tag in request.add if tag.strip())
        tags.update(
            tag.strip().lower() for tag in self.config.templates.always_include if tag.strip()
        )
        return sorted(tags)

    def run_generate(self, request: GenerateRequest) -> GenerateOutcome:
        """Detect, compose and write (or return) the managed ignore block."""
        directory = request.directory.expanduser()
        directory = directory.resolve() if directory.exists() else directory
        self.logger.info("Starting generate run for %s", directory)

        if not request.force and find_git_root(directory) is None:
            raise NotAGitRepositoryError(
                "Not in a git repository. Use --force to create .gitignore anyway."
            )

        tags = self.collect_tags(directory, request)
        if not tags:
            return GenerateOutcome(tags=[], content="", message=NOTHING_DETECTED)

        block, composed = build_block(tags, self.sources(), self.today)
        outcome = GenerateOutcome(tags=tags, content=block, missing=list(composed.missing))
        if request.print_only:
            return outcome

        target = directory / GITIGNORE_FILENAME
        outcome.path = target
        if self.dry_run:
            self.logger.info("dry-run: would write %s to %s", GITIGNORE_FILENAME, target)
            return outcome

        existing = self._read_existing(target)
        mode = MergeMode.APPEND if request.append else MergeMode.REPLACE
        final = self.merger.merge(existing, block, mode)
        target.write_text(final, encoding="utf-8")
        outcome.written = True
        self.logger.info("Wrote %s with: %s", target, ", ".join(tags))
        return outcome

    @staticmethod
    def _read_existing(target: Path) -> Optional[str]:
        if not target.exists():
            return None
        try:
            return target.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise IgnrError(f"reading existing {GITIGNORE_FILENAME} at {target}: {exc}") from exc

    def run_list(self) -> List[str]:
        return sorted(list_available(self.sources()))

    def run_sync(self, url: str | None = None) -> SyncResult | None:
        """Pull remote templates into the managed data directory."""
        syncer = self._syncer
        if syncer is None:
            base_url = url or self.config.templates.template_url
            if not base_url:
                raise SyncError(
                    "No template URL configured. Set templates.template_url in config or use --url"
                )
            syncer = TemplateSyncer(base_url, self.paths.templates_dir)

        if self.dry_run:
            self.logger.info(
                "dry-run: would sync templates from %s to %s",
                syncer.base_url,
                syncer.templates_dir,
            )
            return None
        return syncer.sync()

    def run_init(self, *, force: bool = False) -> Optional[Path]:
        """Write the default configuration file."""
        config_file = self.paths.config_file
        if config_file.exists() and not force:
            raise IgnrError(f"config already exists at {config_file} (use --force to overwrite)")
        if self.dry_run:
            self.logger.info("dry-run: would write default config to %s", config_file)
            return None
        write_default_config(config_file)
        return config_file

    def reset_config(self) -> Optional[Path]:
        return self.run_init(force=True)

    def show_config(self) -> dict:
        return config_to_dict(self.config)


__all__ = ["GITIGNORE_FILENAME", "NOTHING_DETECTED", "Orchestrator", "find_git_root"]
