# storefront/models/slide.py
from .base import CanonicalModel, EntityId


class Slide(CanonicalModel):
    """Home screen banner"""
    id: EntityId = 0
    title: str = ""
    subtitle: str = ""
    image: str = ""

    # Per-locale copies, shown in the admin-style language pickers
    title_en: str = ""
    title_ar: str = ""
    title_ku: str = ""
    title_ku_sorani: str = ""
    title_ku_badini: str = ""
    subtitle_en: str = ""
    subtitle_ar: str = ""
    subtitle_ku: str = ""
    subtitle_ku_sorani: str = ""
    subtitle_ku_badini: str = ""

    link_type: str = "url"
    link_value: str = ""
