#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import atexit
import io
import logging
from dataclasses import dataclass
from typing import Protocol

from PIL import Image, UnidentifiedImageError
from playwright.sync_api import Browser, Error as PlaywrightError, Playwright, sync_playwright

from ..config import MIN_SCALE_FACTOR
from ..core.errors import RenderFailure
from .surface import VisualSurface

logger = logging.getLogger(__name__)

_PLAYWRIGHT: Playwright | None = None
_BROWSER: Browser | None = None


@dataclass(frozen=True)
class RasterImage:
    png: bytes
    width_px: int
    height_px: int
    scale_factor: int


class Rasterizer(Protocol):
    def rasterize(self, surface: VisualSurface, scale_factor: int) -> RasterImage: ...


def _shutdown_playwright() -> None:
    global _BROWSER, _PLAYWRIGHT
    browser = _BROWSER
    playwright = _PLAYWRIGHT
    _BROWSER = None
    _PLAYWRIGHT = None
    if browser is not None:
        browser.close()
    if playwright is not None:
        playwright.stop()


def _discard_disconnected_browser() -> None:
    """Forget a browser that has lost its connection so the next render relaunches."""
    global _BROWSER, _PLAYWRIGHT
    browser = _BROWSER
    if browser is None or browser.is_connected():
        return
    logger.warning("browser disconnected; relaunching on next render")
    playwright = _PLAYWRIGHT
    _BROWSER = None
    _PLAYWRIGHT = None
    if playwright is not None:
        try:
            playwright.stop()
        except PlaywrightError as exc:
            logger.debug("stopping playwright after disconnect failed: %s", exc)


def _get_browser() -> Browser:
    global _BROWSER, _PLAYWRIGHT
    _discard_disconnected_browser()
    if _BROWSER is not None:
        return _BROWSER
    _PLAYWRIGHT = sync_playwright().start()
    _BROWSER = _PLAYWRIGHT.chromium.launch()
    atexit.unregister(_shutdown_playwright)
    atexit.register(_shutdown_playwright)
    return _BROWSER


def _close_context(context, order_id: str) -> None:
    try:
        context.close()
    except PlaywrightError as exc:
        logger.warning("order %s: closing browser context failed: %s", order_id, exc)
        _discard_disconnected_browser()


def flatten_png(data: bytes, *, scale_factor: int) -> RasterImage:
    """Composite a screenshot onto white and re-encode it without alpha."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            if image.mode in ("RGBA", "LA") or "transparency" in image.info:
                rgba = image.convert("RGBA")
                flat = Image.new("RGB", rgba.size, (255, 255, 255))
                flat.paste(rgba, mask=rgba.getchannel("A"))
            else:
                flat = image.convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise RenderFailure(f"rasterizer returned an unreadable image: {exc}") from exc
    buffer = io.BytesIO()
    flat.save(buffer, format="PNG")
    return RasterImage(
        png=buffer.getvalue(),
        width_px=flat.width,
        height_px=flat.height,
        scale_factor=scale_factor,
    )


def rasterize_surface(surface: VisualSurface, scale_factor: int) -> RasterImage:
    if scale_factor < MIN_SCALE_FACTOR:
        raise ValueError(f"scale_factor must be at least {MIN_SCALE_FACTOR}")
    width_px, height_px = surface.css_size_px
    try:
        browser = _get_browser()
        context = browser.new_context(
            viewport={"width": width_px, "height": height_px},
            device_scale_factor=scale_factor,
        )
    except PlaywrightError as exc:
        _discard_disconnected_browser()
        raise RenderFailure(
            f"order {surface.order_id}: rendering engine unavailable: {exc}",
            order_id=surface.order_id,
        ) from exc
    try:
        page = context.new_page()
        page.set_content(surface.html, wait_until="networkidle")
        element = page.query_selector(surface.selector)
        if element is None:
            raise RenderFailure(
                f"order {surface.order_id}: template has no {surface.selector} element",
                order_id=surface.order_id,
            )
        png = element.screenshot(type="png", omit_background=False, animations="disabled")
    except PlaywrightError as exc:
        _discard_disconnected_browser()
        raise RenderFailure(
            f"order {surface.order_id}: rasterization failed: {exc}",
            order_id=surface.order_id,
        ) from exc
    finally:
        _close_context(context, surface.order_id)
    raster = flatten_png(png, scale_factor=scale_factor)
    logger.debug(
        "rasterized %s at %dx%d px", surface.order_number, raster.width_px, raster.height_px
    )
    return raster


class PlaywrightRasterizer:
    """Headless Chromium rasterizer; one isolated browser context per label."""

    def rasterize(self, surface: VisualSurface, scale_factor: int) -> RasterImage:
        return rasterize_surface(surface, scale_factor)

    def close(self) -> None:
        _shutdown_playwright()


__all__ = [
    "PlaywrightRasterizer",
    "RasterImage",
    "Rasterizer",
    "flatten_png",
    "rasterize_surface",
]
