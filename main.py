# main.py
import asyncio
import logging
from decimal import Decimal
from storefront.config import Config, setup_logging
from storefront.controllers import CartStateController
from storefront.i18n import LocaleState
from storefront.services import ApiClient, CatalogService, HttpCartService
from storefront.utils.formatters import format_price

async def main():
    # Setup logging
    setup_logging()
    logger = logging.getLogger(__name__)

    locale = LocaleState()
    try:
        async with ApiClient(Config.API_URL, locale=locale) as api:
            catalog = CatalogService(api, locale)
            home = await catalog.get_home()
            logger.info(
                f"Home feed: {len(home.slides)} slides, {len(home.categories)} categories, "
                f"{len(home.featured_products)} featured products"
            )

            controller = CartStateController(HttpCartService(api), locale)
            cart = await controller.refresh()
            logger.info(
                f"Cart: {cart.items_count} item(s), total {format_price(Decimal(cart.total))}"
            )
    except Exception as e:
        logger.error(f"Error talking to {Config.API_URL}: {e}", exc_info=True)
        raise

if __name__ == "__main__":
    asyncio.run(main())
