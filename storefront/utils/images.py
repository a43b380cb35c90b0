# storefront/utils/images.py
from typing import Any, Optional
from urllib.parse import urlsplit

# Hosts that only make sense on the developer's machine or emulator
LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "10.0.2.2"})


def get_image_url(path: Any, base_url: str) -> Optional[str]:
    """Turn a storage path or absolute URL into an absolute URL on `base_url`"""
    if not path or not isinstance(path, str):
        return None
    base_url = base_url.rstrip("/")

    if path.startswith("http"):
        try:
            hostname = urlsplit(path).hostname
        except ValueError:
            return path
        if hostname in LOOPBACK_HOSTS:
            return f"{base_url}{urlsplit(path).path}"
        return path

    clean_path = path if path.startswith("/") else f"/{path}"
    # Laravel storage link
    if not clean_path.startswith("/storage"):
        clean_path = f"/storage{clean_path}"
    return f"{base_url}{clean_path}"
