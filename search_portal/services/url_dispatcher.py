"""
Open generated search URLs one after another and copy them in bulk.

Every browser-level effect goes through a SearchEnvironment so the dispatch
logic can run against a fake in tests and against the desktop browser from the
open_search script.
"""
import logging
import time
import webbrowser
from dataclasses import dataclass, field
from typing import Iterable, Protocol

import pyperclip

from search_portal.config import settings
from search_portal.schemas.search import Notice

logger = logging.getLogger(__name__)


class SearchEnvironment(Protocol):
    def open_url(self, url: str) -> None: ...

    def write_clipboard(self, text: str) -> None: ...

    def sleep(self, seconds: float) -> None: ...


class BrowserEnvironment:
    """Desktop environment: default web browser tabs and the system clipboard."""

    def open_url(self, url: str) -> None:
        if not webbrowser.open_new_tab(url):
            raise RuntimeError(f"No browser accepted {url}")

    def write_clipboard(self, text: str) -> None:
        pyperclip.copy(text)
        # Read back; headless or ownerless clipboards drop the write silently.
        if pyperclip.paste() != text:
            raise RuntimeError("Clipboard did not keep the copied text")

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


@dataclass
class DispatchResult:
    opened: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    def notice(self) -> Notice:
        if self.failed:
            return Notice(
                title="Some searches did not open",
                description=f"Opened {len(self.opened)} searches; {len(self.failed)} could not be opened. "
                "Check that pop-ups are allowed.",
                variant="destructive",
            )
        return Notice(title="Searches opened", description=f"Opened {len(self.opened)} searches.")


class UrlDispatcher:
    """Opens URLs in order with a fixed delay between consecutive openings."""

    def __init__(self, environment: SearchEnvironment, stagger_ms: int | None = None):
        self.environment = environment
        self.stagger_ms = settings.open_stagger_ms if stagger_ms is None else max(0, stagger_ms)

    def open_all(self, urls: Iterable[str]) -> DispatchResult:
        result = DispatchResult()
        for position, url in enumerate(urls):
            if position and self.stagger_ms:
                self.environment.sleep(self.stagger_ms / 1000)
            try:
                self.environment.open_url(url)
                result.opened.append(url)
            except Exception as e:
                logger.warning("Failed to open search URL %s: %s", url, e)
                result.failed.append(url)
        logger.info("Dispatched %d URLs (%d failed)", len(result.opened), len(result.failed))
        return result

    def copy_all(self, urls: Iterable[str]) -> Notice:
        urls = list(urls)
        if not urls:
            return Notice(title="Nothing to copy", description="No search URLs were generated.")
        try:
            self.environment.write_clipboard("\n".join(urls))
        except Exception as e:
            logger.exception("Clipboard write failed: %s", e)
            return Notice(
                title="Copy failed",
                description="Failed to copy search URLs to clipboard.",
                variant="destructive",
            )
        return Notice(title="Copied to clipboard", description=f"Copied {len(urls)} search URLs to clipboard.")
