"""
Image utility functions for loading, resizing and colour handling
"""

import re
import cv2
import numpy as np
from pathlib import Path
from typing import Union, Tuple
from PIL import ImageColor

_RGBA_PATTERN = re.compile(
    r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([0-9]*\.?[0-9]+)\s*)?\)",
    re.IGNORECASE,
)


def load_image(image_path: Union[str, Path]) -> np.ndarray:
    """
    Load image from file path

    Args:
        image_path: Path to image file

    Returns:
        Image as numpy array in RGB format
    """
    image_path = Path(image_path)
    if not image_path.exists():
        raise FileNotFoundError(f"Image not found: {image_path}")

    # Load with OpenCV and convert BGR to RGB
    img = cv2.imread(str(image_path))
    if img is None:
        raise ValueError(f"Failed to load image: {image_path}")

    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def save_image(image: np.ndarray, output_path: Union[str, Path], compression: int = 9) -> None:
    """
    Save image to file

    Args:
        image: Image as numpy array (RGB format)
        output_path: Output file path
        compression: PNG compression level (0-9)
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Convert RGB to BGR for OpenCV
    img_bgr = cv2.cvtColor(image, cv2.COLOR_RGB2BGR)

    if output_path.suffix.lower() == ".png":
        cv2.imwrite(str(output_path), img_bgr, [cv2.IMWRITE_PNG_COMPRESSION, compression])
    else:
        cv2.imwrite(str(output_path), img_bgr)


def resize_image(
    image: np.ndarray,
    target_size: Tuple[int, int],
    keep_aspect: bool = True
) -> np.ndarray:
    """
    Resize image to target size

    Args:
        image: Input image
        target_size: (width, height)
        keep_aspect: Keep aspect ratio

    Returns:
        Resized image
    """
    if keep_aspect:
        h, w = image.shape[:2]
        target_w, target_h = target_size

        # Calculate scaling factor
        scale = min(target_w / w, target_h / h)
        new_w = max(1, int(w * scale))
        new_h = max(1, int(h * scale))

        interpolation = cv2.INTER_AREA if scale < 1 else cv2.INTER_LANCZOS4
        return cv2.resize(image, (new_w, new_h), interpolation=interpolation)
    else:
        return cv2.resize(image, target_size, interpolation=cv2.INTER_LANCZOS4)


def fit_contain(
    image: np.ndarray,
    target_size: Tuple[int, int],
    background: Tuple[int, int, int] = (255, 255, 255)
) -> np.ndarray:
    """
    Resize image to fit inside target size and pad the rest

    Args:
        image: Input image (RGB)
        target_size: (width, height)
        background: RGB padding colour

    Returns:
        Image of exactly target_size, content centered
    """
    target_w, target_h = target_size
    resized = resize_image(image, target_size, keep_aspect=True)
    h, w = resized.shape[:2]

    canvas = np.full((target_h, target_w, 3), background, dtype=np.uint8)
    left = (target_w - w) // 2
    top = (target_h - h) // 2
    canvas[top:top + h, left:left + w] = resized[:, :, :3]

    return canvas


def parse_color(value: str) -> Tuple[int, int, int, int]:
    """
    Parse a CSS colour string into RGBA

    Handles '#rrggbb', named colours and rgb()/rgba() with a 0-1 alpha.

    Args:
        value: Colour string

    Returns:
        (r, g, b, a) with every channel in 0-255
    """
    match = _RGBA_PATTERN.fullmatch(value.strip())
    if match:
        r, g, b, alpha = match.groups()
        a = 255 if alpha is None else int(round(min(float(alpha), 1.0) * 255))
        return int(r), int(g), int(b), a

    rgb = ImageColor.getrgb(value)
    if len(rgb) == 4:
        return rgb
    return rgb[0], rgb[1], rgb[2], 255

