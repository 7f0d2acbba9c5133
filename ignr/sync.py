"""Fetches templates from a gitignore.io compatible endpoint into the data directory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .errors import SyncError
from .logging import get_logger
from .templates.sources import TEMPLATE_SUFFIX

Fetcher = Callable[[str, float], str]

_UNSAFE_NAME_PARTS = ("/", "\\", "..")


@dataclass
class SyncResult:
    """Counts reported after a sync run."""

    found: int
    synced: int
    failed: int


def http_fetch(url: str, timeout: float) -> str:
    """GET ``url`` and return the decoded body, raising on non-2xx responses."""
    request = Request(url, headers={"User-Agent": "ignr", "Accept": "text/plain"})
    with urlopen(request, timeout=timeout) as response:  # type: ignore[arg-type]
        charset = response.headers.get_content_charset() or "utf-8"
        return response.read().decode(charset)


class TemplateSyncer:
    """Downloads every listed template into ``templates_dir``."""

    def __init__(
        self,
        base_url: str,
        templates_dir: Path,
        *,
        timeout: float = 30.0,
        fetch: Fetcher | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.templates_dir = templates_dir
        self.timeout = timeout
        self._fetch = fetch or http_fetch
        self.logger = get_logger("sync")

    def list_remote(self) -> List[str]:
        list_url = f"{self.base_url}/list"
        self.logger.info("Fetching template list from %s", list_url)
        try:
            payload = self._fetch(list_url, self.timeout)
        except HTTPError as exc:
            raise SyncError(f"Failed to fetch template list: HTTP {exc.code}") from exc
        except (URLError, OSError) as exc:
            raise SyncError(f"Failed to fetch template list from {list_url}: {exc}") from exc

        names: List[str] = []
        seen = set()
        for line in payload.splitlines():
            for item in line.split(","):
                name = item.strip().lower()
                if not name or name in seen:
                    continue
                if any(part in name for part in _UNSAFE_NAME_PARTS):
                    self.logger.warning("Skipping unsafe template name from remote list: %r", name)
                    continue
                seen.add(name)
                names.append(name)
        return names

    def sync(self) -> SyncResult:
        names = self.list_remote()
        self.templates_dir.mkdir(parents=True, exist_ok=True)

        synced = 0
        failed = 0
        for name in names:
            content = self._fetch_template(name)
            if content is None:
                failed += 1
                continue
            path = self.templates_dir / f"{name}{TEMPLATE_SUFFIX}"
            try:
                path.write_text(content, encoding="utf-8")
            except OSError as exc:
                failed += 1
                self.logger.warning("Failed to write %s: %s", name, exc)
                continue
            synced += 1
            self.logger.debug("Saved: %s", name)

        return SyncResult(found=len(names), synced=synced, failed=failed)

    def _fetch_template(self, name: str) -> Optional[str]:
        url = f"{self.base_url}/{name}"
        self.logger.debug("Fetching template: %s", name)
        try:
            return self._fetch(url, self.timeout)
        except HTTPError as exc:
            self.logger.debug("HTTP %s for template: %s", exc.code, name)
        except (URLError, OSError, UnicodeDecodeError) as exc:
            self.logger.debug("Failed to fetch %s: %s", name, exc)
        return None


__all__ = ["SyncResult", "TemplateSyncer", "http_fetch"]
