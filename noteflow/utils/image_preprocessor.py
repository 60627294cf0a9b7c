"""Image preprocessing for OCR of scanned notes and photographed pages.

Photos of handwritten or printed pages arrive in every size and colour
scheme.  A single preprocessing pass brings them into a shape Tesseract
handles well:

    1. Resize so the image fits inside ``max_dim`` x ``max_dim`` (never
       enlarged; very large phone photos are scaled down).
    2. Convert to grayscale.
    3. Normalize contrast (autocontrast stretches the histogram).
    4. Sharpen to crisp up letter edges softened by the camera.
"""

from __future__ import annotations

from PIL import Image, ImageFilter, ImageOps


class ImagePreprocessor:
    """Prepares document images for OCR."""

    def __init__(self, max_dim: int = 2000) -> None:
        self._max_dim = max_dim

    def prepare_for_ocr(self, image: Image.Image) -> Image.Image:
        """Run the full resize -> grayscale -> normalize -> sharpen pass."""
        resized = self.resize_for_ocr(image)
        gray = self.to_grayscale(resized)
        normalized = self.normalize(gray)
        return self.sharpen(normalized)

    def resize_for_ocr(self, image: Image.Image) -> Image.Image:
        """Scale *image* down so it fits within the bounding square.

        Preserves aspect ratio.  Images already inside the bounds are
        returned unchanged.
        """
        width, height = image.size
        largest = max(width, height)
        if largest <= self._max_dim:
            return image

        scale = self._max_dim / largest
        new_size = (max(1, int(width * scale)), max(1, int(height * scale)))
        return image.resize(new_size, Image.Resampling.LANCZOS)

    @staticmethod
    def to_grayscale(image: Image.Image) -> Image.Image:
        if image.mode == "L":
            return image
        # Palette and alpha images need an RGB hop before dropping colour.
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        return image.convert("L")

    @staticmethod
    def normalize(image: Image.Image) -> Image.Image:
        return ImageOps.autocontrast(image)

    @staticmethod
    def sharpen(image: Image.Image) -> Image.Image:
        return image.filter(ImageFilter.SHARPEN)
