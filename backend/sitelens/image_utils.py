"""Screenshot encoding for the analysis report."""
import base64
import io

from PIL import Image


def encode_screenshot(png: bytes, max_width: int = 1440, quality: int = 80) -> str:
    """
    PNG viewport capture -> base64 WebP data URL.
    Transparent areas render white; captures wider than max_width are downscaled.
    """
    img = Image.open(io.BytesIO(png)).convert("RGBA")

    if img.width > max_width:
        img = img.resize((max_width, round(img.height * max_width / img.width)), Image.LANCZOS)

    flat = Image.new("RGB", img.size, "white")
    flat.paste(img, mask=img.getchannel("A"))

    buf = io.BytesIO()
    flat.save(buf, format="WEBP", quality=quality)
    return "data:image/webp;base64," + base64.b64encode(buf.getvalue()).decode()
