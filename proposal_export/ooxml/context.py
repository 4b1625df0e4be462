"""Per-export rendering state shared between the section renderers."""

from __future__ import annotations

import logging

from proposal_export._constants import image_relationship_id

from .media import EmbeddedImage, parse_data_uri

logger = logging.getLogger(__name__)


class RenderContext:
    """Allocate media parts and their relationship ids for one package.

    The context is the only place relationship ids for images are handed out.
    A renderer asks for an id while it builds its fragment, so every
    ``r:embed`` in ``document.xml`` names a part that is already registered.
    """

    def __init__(self, *, include_images: bool = True) -> None:
        self.include_images = include_images
        self._images: list[EmbeddedImage] = []

    @property
    def images(self) -> tuple[EmbeddedImage, ...]:
        """Return the registered images in encounter order."""
        return tuple(self._images)

    @property
    def image_extensions(self) -> list[str]:
        """Return each distinct embedded extension once, in first-seen order."""
        return list(dict.fromkeys(image.extension for image in self._images))

    def embed_image(self, src: str) -> EmbeddedImage | None:
        """Register ``src`` as a media part and return it.

        Returns ``None`` when images are disabled, the source is empty, or the
        source is not an embeddable data URI; callers then render without a
        drawing.
        """
        if not self.include_images or not src:
            return None
        parsed = parse_data_uri(src)
        if parsed is None:
            if src.startswith("data:"):
                logger.warning("Skipping malformed data URI image")
            else:
                logger.info("Skipping non-embeddable image source %s", src[:80])
            return None
        index = len(self._images) + 1
        image = EmbeddedImage(
            index=index,
            filename=f"image{index}.{parsed.extension}",
            extension=parsed.extension,
            relationship_id=image_relationship_id(index),
            payload=parsed.payload,
        )
        self._images.append(image)
        return image


__all__ = ["RenderContext"]
