# storefront/normalizers/catalog.py
from typing import Any, Dict, List

from ..i18n.locale import NormalizationContext, get_localized_field
from ..models import Category, HomeFeed, PageMeta, Product, ProductPage, ProductVariant, Slide, Vendor
from ..utils.coercion import (
    to_boolean,
    to_entity_id,
    to_int,
    to_money_string,
    to_optional_money_string,
    to_safe_number,
    to_safe_string,
)
from ..utils.envelope import unwrap_collection
from .common import (
    DEFAULT_CONTEXT,
    as_mapping,
    coalesce,
    image_url,
    is_present,
    locale_variants,
    plain_text,
)


def normalize_slide(slide: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> Slide:
    """Home banner"""
    s = as_mapping(slide)
    return Slide(
        id=to_entity_id(s.get("id")),
        title=get_localized_field(s, "title", plain_text(s.get("title")), ctx.locale),
        subtitle=get_localized_field(s, "subtitle", plain_text(s.get("subtitle")), ctx.locale),
        image=image_url(coalesce(s.get("image_url"), s.get("image")), ctx),
        **locale_variants(s, "title"),
        **locale_variants(s, "subtitle"),
        link_type=to_safe_string(s.get("link_type"), "url"),
        link_value=to_safe_string(coalesce(s.get("link_value"), s.get("link"))),
    )


def normalize_category(category: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> Category:
    """Category with its whole subtree"""
    c = as_mapping(category)
    hero_images = c.get("hero_images")
    products_count = c.get("products_count")

    return Category(
        id=to_entity_id(c.get("id")),
        name=get_localized_field(c, "name", plain_text(c.get("name")), ctx.locale),
        slug=to_safe_string(c.get("slug")),
        icon=to_safe_string(c.get("icon")),
        image=image_url(coalesce(c.get("image_url"), c.get("image")), ctx),
        hero_images=_image_list(hero_images, ctx),
        **locale_variants(c, "name"),
        parent_id=to_entity_id(c.get("parent_id"), None),
        products_count=None if products_count is None else to_int(products_count, 0, minimum=0),
        children=[normalize_category(child, ctx) for child in unwrap_collection(c.get("children"))],
    )


def normalize_vendor(vendor: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> Vendor:
    v = as_mapping(vendor)
    if v.get("is_verified") is not None:
        is_verified = to_boolean(v["is_verified"], "vendor.is_verified")
    else:
        is_verified = v.get("status") == "approved"

    return Vendor(
        id=to_entity_id(v.get("id")),
        name=to_safe_string(coalesce(v.get("store_name"), v.get("name"))),
        slug=to_safe_string(v.get("slug")),
        description=to_safe_string(v.get("description")),
        logo=image_url(coalesce(v.get("profile_image_url"), v.get("logo"), v.get("profile_image")), ctx),
        banner=image_url(coalesce(v.get("cover_image_url"), v.get("banner"), v.get("cover_image")), ctx),
        is_verified=is_verified,
    )


def normalize_product_variant(variant: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> ProductVariant:
    v = as_mapping(variant)

    attributes: Dict[str, str] = {}
    raw_attributes = as_mapping(v.get("attributes"))
    for key, value in raw_attributes.items():
        if value is not None:
            attributes[str(key)] = to_safe_string(value)
    if v.get("size"):
        attributes["size"] = to_safe_string(v["size"])
    if v.get("color"):
        attributes["color"] = to_safe_string(v["color"])

    name_parts = [to_safe_string(part) for part in (v.get("name"), v.get("size"), v.get("color")) if part]
    if name_parts:
        name = " ".join(name_parts)
    else:
        name = f"Variant {to_safe_string(v.get('id'))}".strip()

    return ProductVariant(
        id=to_entity_id(v.get("id")),
        name=name,
        sku=to_safe_string(v.get("sku")),
        price=to_money_string(coalesce(v.get("effective_price"), v.get("price"), "0")),
        compare_price=to_optional_money_string(v.get("compare_price")),
        stock=to_int(v.get("stock"), 0, minimum=0),
        attributes=attributes,
    )


def normalize_product(product: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> Product:
    """
    Product for listings, detail pages and cart lines.

    Category and vendor are normalized only when the payload embeds them.
    `in_stock` is taken from the payload when sent, otherwise derived from
    the variants' stock.
    """
    p = as_mapping(product)
    locale = ctx.locale

    images = _image_list(p.get("images"), ctx)
    thumbnail = (
        image_url(p.get("thumbnail"), ctx)
        or image_url(coalesce(p.get("image_url"), p.get("image")), ctx)
        or (images[0] if images else "")
    )
    variants = [normalize_product_variant(v, ctx) for v in unwrap_collection(p.get("variants"))]
    if "in_stock" in p:
        in_stock = to_boolean(p["in_stock"], "product.in_stock")
    else:
        in_stock = any(variant.stock > 0 for variant in variants)

    is_wishlisted = p.get("is_wishlisted")
    is_active = p.get("is_active")
    discount = p.get("discount_percentage")

    return Product(
        id=to_entity_id(p.get("id")),
        name=get_localized_field(p, "name", plain_text(p.get("name")), locale),
        slug=to_safe_string(p.get("slug")),
        description=get_localized_field(p, "description", plain_text(p.get("description")), locale),
        short_description=get_localized_field(
            p, "short_description",
            plain_text(coalesce(p.get("short_description"), p.get("description"))),
            locale,
        ),
        **locale_variants(p, "name"),
        **locale_variants(p, "description"),
        price=to_money_string(coalesce(p.get("price"), p.get("base_price"), p.get("min_price"), "0")),
        compare_price=to_optional_money_string(p.get("compare_price")),
        discount_percentage=None if discount is None else float(to_safe_number(discount)),
        is_wishlisted=None if is_wishlisted is None else to_boolean(is_wishlisted, "product.is_wishlisted"),
        status=to_safe_string(p.get("status")),
        is_active=None if is_active is None else to_boolean(is_active, "product.is_active"),
        images=images,
        thumbnail=thumbnail,
        category=normalize_category(p["category"], ctx) if is_present(p.get("category")) else None,
        vendor=normalize_vendor(p["vendor"], ctx) if is_present(p.get("vendor")) else None,
        variants=variants,
        in_stock=in_stock,
        average_rating=float(to_safe_number(p.get("average_rating"))),
        reviews_count=to_int(p.get("reviews_count"), 0, minimum=0),
    )


def normalize_home(payload: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> HomeFeed:
    data = as_mapping(payload)
    return HomeFeed(
        slides=[normalize_slide(s, ctx) for s in unwrap_collection(data.get("slides"))],
        categories=[normalize_category(c, ctx) for c in unwrap_collection(data.get("categories"))],
        new_arrivals=_products(data.get("new_arrivals"), ctx),
        featured_products=_products(coalesce(data.get("featured"), data.get("featured_products")), ctx),
        popular_products=_products(data.get("popular_products"), ctx),
    )


def normalize_product_page(payload: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> ProductPage:
    """Paginated listing; works for bare lists and `{data, meta|pagination}`"""
    if isinstance(payload, list):
        body = {"data": payload}
    else:
        body = as_mapping(payload)
    products = _products(body, ctx)
    meta = as_mapping(coalesce(body.get("meta"), body.get("pagination")))

    return ProductPage(
        data=products,
        meta=PageMeta(
            current_page=to_int(coalesce(meta.get("current_page"), 1), 1),
            last_page=to_int(coalesce(meta.get("last_page"), 1), 1),
            per_page=to_int(coalesce(meta.get("per_page"), len(products)), len(products)),
            total=to_int(coalesce(meta.get("total"), len(products)), len(products)),
        ),
    )


def _products(value: Any, ctx: NormalizationContext) -> List[Product]:
    return [normalize_product(p, ctx) for p in unwrap_collection(value)]


def _image_list(value: Any, ctx: NormalizationContext) -> List[str]:
    if not isinstance(value, list):
        return []
    return [url for url in (image_url(item, ctx) for item in value) if url]
