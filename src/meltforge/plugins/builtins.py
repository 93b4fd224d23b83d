"""Built-in Pillow codecs for PNG and JPEG."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from meltforge.application.options import EncodeOptions
from meltforge.formats import ImageFormat
from meltforge.types import RgbColor

_JPEG_MODES = frozenset({"RGB", "L", "CMYK"})
_WIDE_GRAY_MODES = frozenset({"I", "I;16", "I;16L", "I;16B", "I;16N"})


def _decode(path: Path, image_format: ImageFormat) -> Image.Image:
    """Open ``path`` as ``image_format`` and load all pixel data.

    Raises
    ------
    PIL.UnidentifiedImageError
        If the file content is not ``image_format``.
    OSError
        If the file is truncated or unreadable.
    """
    with Image.open(path, formats=[image_format.pillow_format]) as image:
        image.load()
        return image


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in {"RGBA", "LA", "PA"} or (
        image.mode == "P" and "transparency" in image.info
    )


def flatten_alpha(image: Image.Image, background: RgbColor) -> Image.Image:
    """Composite a transparent image onto an opaque ``background``."""
    rgba = image.convert("RGBA")
    canvas = Image.new("RGB", rgba.size, background)
    canvas.paste(rgba, mask=rgba.getchannel("A"))
    return canvas


def prepare_for_jpeg(image: Image.Image, background: RgbColor) -> Image.Image:
    """Return an image in a mode the JPEG encoder accepts."""
    if _has_alpha(image):
        return flatten_alpha(image, background)
    if image.mode in _JPEG_MODES:
        return image
    if image.mode in _WIDE_GRAY_MODES:
        return reduce_to_8bit_gray(image)
    return image.convert("RGB")


def reduce_to_8bit_gray(image: Image.Image) -> Image.Image:
    """Scale 16-bit grayscale samples into the 0..255 range of mode ``L``."""
    if image.mode != "I":
        image = image.convert("I")
    return image.point(lambda value: value * (1 / 256)).convert("L")


def prepare_for_png(image: Image.Image) -> Image.Image:
    """Return an image in a mode the PNG encoder accepts."""
    if image.mode == "CMYK":
        return image.convert("RGB")
    return image


class PngCodec:
    """Decode and encode PNG files with Pillow."""

    name = "pillow_png"
    format = ImageFormat.PNG

    def decode(self, path: Path) -> Image.Image:
        """Load a PNG file into memory."""
        return _decode(path, self.format)

    def encode(self, image: Image.Image, path: Path, options: EncodeOptions) -> None:
        """Write ``image`` as a new PNG file.

        Raises
        ------
        FileExistsError
            If ``path`` already exists.
        """
        prepared = prepare_for_png(image)
        with path.open("xb") as handle:
            prepared.save(handle, format=self.format.pillow_format, optimize=options.optimize)


class JpegCodec:
    """Decode and encode JPEG files with Pillow.

    Notes
    -----
    Transparency is flattened onto ``EncodeOptions.background`` because JPEG
    has no alpha channel.
    """

    name = "pillow_jpeg"
    format = ImageFormat.JPEG

    def decode(self, path: Path) -> Image.Image:
        """Load a JPEG file into memory."""
        return _decode(path, self.format)

    def encode(self, image: Image.Image, path: Path, options: EncodeOptions) -> None:
        """Write ``image`` as a new JPEG file.

        Raises
        ------
        FileExistsError
            If ``path`` already exists.
        """
        prepared = prepare_for_jpeg(image, options.background)
        with path.open("xb") as handle:
            prepared.save(
                handle,
                format=self.format.pillow_format,
                quality=options.jpeg_quality,
                optimize=options.optimize,
            )


BUILTIN_CODECS = (PngCodec, JpegCodec)
