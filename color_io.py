import base64
import io
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import requests
from PIL import Image

from color_errors import DecodeFailure
from color_histogram import rgba_image

FETCH_TIMEOUT = 30  # seconds, per URL fetch
PREVIEW_QUALITY = 85

def _is_url(source):
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))

def _fetch(url, timeout):
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise DecodeFailure(f"could not fetch {url}: {e}") from e
    return io.BytesIO(r.content)

def load_image(source, timeout=FETCH_TIMEOUT):
    """
    Decode a file path, http(s) URL or binary stream into an RgbaImage.

    Raises DecodeFailure when the source cannot be read or decoded.
    """
    stream = _fetch(source, timeout) if _is_url(source) else source
    try:
        with Image.open(stream) as img:
            rgba = img.convert("RGBA")
    except (OSError, Image.DecompressionBombError) as e:
        raise DecodeFailure(f"could not decode image {source!r}: {e}") from e
    pixels = np.asarray(rgba, dtype=np.uint8).reshape(-1)
    return rgba_image(rgba.width, rgba.height, pixels)

def load_pair(source, reference, timeout=FETCH_TIMEOUT):
    """Load source and reference concurrently; returns once both are decoded."""
    with ThreadPoolExecutor(max_workers=2) as pool:
        source_future = pool.submit(load_image, source, timeout)
        reference_future = pool.submit(load_image, reference, timeout)
        return source_future.result(), reference_future.result()

def to_pil(image):
    pixels = np.asarray(image.pixels, dtype=np.uint8).reshape(image.height, image.width, 4)
    return Image.fromarray(pixels)

def encode_image(image, format="JPEG", quality=PREVIEW_QUALITY):
    """Compress an RgbaImage to bytes. JPEG drops the (opaque) alpha channel."""
    pil = to_pil(image)
    buf = io.BytesIO()
    if format.upper() in ("JPEG", "JPG"):
        pil.convert("RGB").save(buf, format="JPEG", quality=quality)
    else:
        pil.save(buf, format=format)
    return buf.getvalue()

def to_data_url(image, format="JPEG", quality=PREVIEW_QUALITY):
    mime = "image/jpeg" if format.upper() in ("JPEG", "JPG") else f"image/{format.lower()}"
    b64 = base64.b64encode(encode_image(image, format, quality)).decode("utf-8")
    return f"data:{mime};base64,{b64}"

def save_image(image, path, quality=PREVIEW_QUALITY):
    """Save by file extension; JPEG targets get the preview quality."""
    pil = to_pil(image)
    if str(path).lower().endswith((".jpg", ".jpeg")):
        pil.convert("RGB").save(path, quality=quality)
    else:
        pil.save(path)
