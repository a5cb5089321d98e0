"""HTML to PDF conversion with headless Chromium (Playwright).

A LaunchProfile is resolved once from settings and injected into PdfRenderer,
so the offline/managed difference is configuration rather than a branch in
the issuance workflow. Both profiles produce the same document.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from playwright.async_api import async_playwright

from core.config import Settings

logger = logging.getLogger(__name__)

# Flags needed to run Chromium inside the Lambda sandbox (no setuid helper,
# tiny /dev/shm, no GPU, single process).
MANAGED_CHROMIUM_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-first-run",
    "--no-zygote",
    "--single-process",
    "--hide-scrollbars",
    "--mute-audio",
)

PDF_OPTIONS: dict[str, Any] = {
    "format": "A4",
    "landscape": True,
    "print_background": True,
    "prefer_css_page_size": True,
}


@dataclass(frozen=True)
class LaunchProfile:
    """Browser launch configuration."""

    sandbox_args: tuple[str, ...]
    headless: bool
    ignore_https_errors: bool
    local_debug_output_path: Path | None = None
    executable_path: str | None = None

    @classmethod
    def offline(
        cls,
        local_debug_output_path: Path | None = Path("./certificate.pdf"),
        executable_path: str | None = None,
    ) -> "LaunchProfile":
        return cls(
            sandbox_args=(),
            headless=True,
            ignore_https_errors=False,
            local_debug_output_path=local_debug_output_path,
            executable_path=executable_path,
        )

    @classmethod
    def managed(cls, executable_path: str | None = None) -> "LaunchProfile":
        return cls(
            sandbox_args=MANAGED_CHROMIUM_ARGS,
            headless=True,
            ignore_https_errors=True,
            local_debug_output_path=None,
            executable_path=executable_path,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "LaunchProfile":
        executable_path = settings.chromium_executable_path or None
        if settings.is_offline:
            debug_path = settings.local_debug_output_path
            return cls.offline(
                local_debug_output_path=Path(debug_path) if debug_path else None,
                executable_path=executable_path,
            )
        return cls.managed(executable_path=executable_path)

    def launch_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "args": list(self.sandbox_args),
            "headless": self.headless,
        }
        if self.executable_path:
            kwargs["executable_path"] = self.executable_path
        return kwargs

    def pdf_kwargs(self) -> dict[str, Any]:
        kwargs = dict(PDF_OPTIONS)
        if self.local_debug_output_path is not None:
            kwargs["path"] = self.local_debug_output_path
        return kwargs


class PdfRenderer:
    """Converts filled certificate HTML into a single landscape PDF page."""

    def __init__(self, profile: LaunchProfile) -> None:
        self.profile = profile

    async def render(self, html: str) -> bytes:
        """Render HTML to PDF bytes in a fresh browser session.

        The browser is closed on every exit path. A failure while closing is
        logged and does not replace the result or the original error.
        """
        async with async_playwright() as playwright:
            browser = await playwright.chromium.launch(**self.profile.launch_kwargs())
            try:
                page = await browser.new_page(
                    ignore_https_errors=self.profile.ignore_https_errors
                )
                await page.set_content(html, wait_until="load")
                return await page.pdf(**self.profile.pdf_kwargs())
            finally:
                await _close_quietly(browser)


async def _close_quietly(browser: Any) -> None:
    try:
        await browser.close()
    except Exception:
        logger.warning("browser.close.failed", exc_info=True)
