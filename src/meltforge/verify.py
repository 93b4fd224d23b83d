"""Post-conversion output checks."""

from __future__ import annotations

from pathlib import Path

from meltforge.errors import ConversionExecutionFailed
from meltforge.formats import ImageFormat


def verify_output_if_requested(
    output_path: Path,
    target_format: ImageFormat,
    verify: bool,
) -> None:
    """Re-open a written image and check that it decodes.

    Parameters
    ----------
    output_path : Path
        Path to the converted image.
    target_format : ImageFormat
        Format the file is expected to hold.
    verify : bool
        Whether verification should be executed.

    Raises
    ------
    ConversionExecutionFailed
        If the file is not a decodable image of ``target_format``.
    """
    if not verify:
        return

    from PIL import Image

    try:
        with Image.open(output_path) as image:
            if image.format != target_format.pillow_format:
                raise ValueError(
                    f"expected {target_format.pillow_format}, found {image.format}"
                )
            image.load()
    except Exception as exc:
        raise ConversionExecutionFailed(output_path, f"output verification failed: {exc}") from exc
