"""
Portal Zuk Scraper

Fetches auction listing cards from Portal Zuk, one listing page per city,
and optionally each listing's detail page for occupancy and area.
"""
import re
from typing import List, Optional

from bs4 import BeautifulSoup
from pydantic import ValidationError

from config.settings import settings
from src.auction_tracker.models.property import AuctionProperty, OccupancyStatus
from src.auction_tracker.scrapers.base import BaseScraper
from src.auction_tracker.transformers.normalizer import (
    calculate_discount,
    parse_br_date,
    parse_price,
    title_case,
)
from src.auction_tracker.utils.logger import get_logger

logger = get_logger(__name__)

LISTING_PATH = "/leilao-de-imoveis/c/todos-imoveis/pr/regiao/{slug}"

_ID_PATTERN = re.compile(r"/(\d+)-(\d+)/?$")
_TYPE_PATTERN = re.compile(r"^(\w[\w\s]*?) em leil[aã]o", re.IGNORECASE)
_NEIGHBORHOOD_PATTERN = re.compile(r"- (.+)$")
_PERCENT_PATTERN = re.compile(r"(\d+)")
_BUILT_AREA_PATTERN = re.compile(r"Metragem constru[ií]da\s*([\d.,]+\s*m²)")
_LAND_AREA_PATTERN = re.compile(r"Metragem terreno\s*([\d.,]+\s*m²)")

SECOND_ROUND_MODALITY = "Leilão 2ª Praça"


class ZukScraper(BaseScraper):
    """
    Scraper for Portal Zuk auction listings.
    """

    source_name = "Portal Zuk"

    def __init__(
        self,
        base_url: Optional[str] = None,
        city_slugs: Optional[List[str]] = None,
        fetch_details: bool = True,
        **kwargs
    ):
        """
        Args:
            base_url: Override the Portal Zuk URL (for testing)
            city_slugs: City slugs to scrape, defaults to settings.zuk_city_slugs
            fetch_details: Visit each listing page for occupancy/area
        """
        super().__init__(base_url=base_url, **kwargs)
        self.city_slugs = city_slugs if city_slugs is not None else list(settings.zuk_city_slugs)
        self.fetch_details = fetch_details

    def default_base_url(self) -> str:
        return settings.zuk_base_url

    def fetch_properties(self) -> List[AuctionProperty]:
        """
        Fetch listings for every configured city.

        Returns:
            List of validated AuctionProperty instances
        """
        logger.info("fetching_zuk_listings", cities=len(self.city_slugs))
        properties: List[AuctionProperty] = []

        for slug in self.city_slugs:
            url = f"{self.base_url}{LISTING_PATH.format(slug=slug)}"
            html = self.fetch_text(url)
            self.pause()
            if html is None:
                continue

            city_properties = self.parse_listing_page(html, city_name=title_case(slug.replace("-", " ")))
            logger.info("zuk_city_scraped", city=slug, properties=len(city_properties))
            properties.extend(city_properties)

        if self.fetch_details:
            properties = [self._with_details(prop) for prop in properties]

        logger.info("fetch_complete", source=self.source_name, total_properties=len(properties))
        return properties

    def parse_listing_page(self, html: str, city_name: str) -> List[AuctionProperty]:
        """
        Parse every listing card on a Zuk listing page.

        Args:
            html: Listing page HTML
            city_name: Fallback neighborhood when the card has none

        Returns:
            Valid listings; cards without id, price or address are skipped
        """
        soup = BeautifulSoup(html, "html.parser")
        properties = []
        errors = 0

        for idx, card in enumerate(soup.select(".card-property.card_lotes_div")):
            try:
                data = self._parse_card(card, city_name)
                if data is None:
                    continue
                properties.append(AuctionProperty(**data))
            except ValidationError as e:
                errors += 1
                logger.warning("property_validation_failed", source=self.source_name, card_index=idx, error=str(e))

        if errors:
            logger.warning("validation_errors_occurred", source=self.source_name, total_errors=errors, success_count=len(properties))

        return properties

    def _parse_card(self, card, city_name: str) -> Optional[dict]:
        link_el = card.select_one(".card-property-image-wrapper a")
        if link_el is None:
            return None
        link = link_el.get("href", "")
        id_match = _ID_PATTERN.search(link)
        if not id_match:
            return None

        title = link_el.get("title", "")
        type_match = _TYPE_PATTERN.match(title)
        if type_match:
            property_type = type_match.group(1)
        else:
            property_type = self._text(card.select_one(".card-property-price-lote")) or "Imóvel"

        # "Curitiba / PR - Portão" followed by the street address
        spans = card.select(".card-property-address span[style]")
        location = self._text(spans[0]) if spans else ""
        neighborhood_match = _NEIGHBORHOOD_PATTERN.search(location)
        neighborhood = neighborhood_match.group(1).strip() if neighborhood_match else city_name
        address = self._text(spans[1]) if len(spans) > 1 else ""

        appraised, bid, discount, closing_date, modality = self._parse_prices(card)
        if not bid or not address:
            return None

        return {
            "id": f"zuk-{id_match.group(2)}",
            "property_type": property_type,
            "neighborhood": neighborhood,
            "address": address,
            "bid_price": bid,
            "appraised_value": appraised or None,
            "discount_percent": discount,
            "sale_modality": modality,
            "closing_date": closing_date,
            "occupancy_status": OccupancyStatus.UNKNOWN,
            "area": self._text(card.select_one(".card-property-info-label")) or None,
            "source": self.source_name,
            "link": self.absolute_url(link),
        }

    def _parse_prices(self, card):
        """
        Returns:
            Tuple of (appraised, bid, discount, closing_date, modality)
        """
        appraised = 0.0
        bid = 0.0
        discount = None
        closing_date = None
        modality = settings.default_sale_modality

        rounds_el = card.select_one("[data-pracas]")
        rounds = rounds_el.get("data-pracas") if rounds_el is not None else None
        price_lists = card.select("ul.card-property-prices")
        price_items = price_lists[-1].select(".card-property-price") if price_lists else []

        if rounds == "2":
            for i, item in enumerate(price_items):
                label = self._text(item.select_one(".card-property-price-label"))
                value = parse_price(self._text(item.select_one(".card-property-price-value"))) or 0.0
                if "1º" in label:
                    appraised = value
                if "2º" in label or i == len(price_items) - 1:
                    bid = value
                    closing_date = parse_br_date(self._text(item.select_one(".card-property-price-data")))
                    modality = SECOND_ROUND_MODALITY

            percent_match = _PERCENT_PATTERN.search(self._text(card.select_one(".card-property-price-percent")))
            if percent_match:
                discount = float(percent_match.group(1))
            elif appraised > 0 and bid > 0:
                discount = calculate_discount(appraised, bid)

        elif rounds == "1":
            for item in price_items:
                label = self._text(item.select_one(".card-property-price-label"))
                if "Valor" in label or label == "":
                    bid = parse_price(self._text(item.select_one(".card-property-price-value"))) or 0.0
                    # Single-price listings carry no separate appraisal
                    appraised = bid
                    closing_date = parse_br_date(self._text(item.select_one(".card-property-price-data")))
            if bid:
                discount = calculate_discount(appraised, bid)

        if not bid:
            # Unknown layout: first price is the appraisal, last is the bid
            for value_el in card.select(".card-property-price-value"):
                value = parse_price(self._text(value_el)) or 0.0
                if value > 0:
                    if not appraised:
                        appraised = value
                    bid = value
            for date_el in card.select(".card-property-price-data"):
                closing_date = parse_br_date(self._text(date_el)) or closing_date
            if appraised > 0 and 0 < bid < appraised:
                discount = calculate_discount(appraised, bid)
                modality = SECOND_ROUND_MODALITY

        return appraised, bid, discount, closing_date, modality

    def _with_details(self, prop: AuctionProperty) -> AuctionProperty:
        """Best-effort enrichment from the listing's own page."""
        html = self.fetch_text(prop.link)
        self.pause()
        if html is None:
            return prop
        return prop.model_copy(update=self.parse_detail_page(html))

    @staticmethod
    def parse_detail_page(html: str) -> dict:
        """
        Extract occupancy, area and modality updates from a detail page.

        Returns:
            Field updates (possibly empty)
        """
        soup = BeautifulSoup(html, "html.parser")
        body = soup.body.get_text(" ", strip=True) if soup.body else soup.get_text(" ", strip=True)
        title = soup.title.get_text(strip=True) if soup.title else ""
        updates = {}

        if re.search(r"im[oó]vel\s+desocupado", body, re.IGNORECASE):
            updates["occupancy_status"] = OccupancyStatus.VACANT
        elif re.search(r"im[oó]vel\s+ocupado", body, re.IGNORECASE):
            updates["occupancy_status"] = OccupancyStatus.OCCUPIED

        built = _BUILT_AREA_PATTERN.search(body)
        land = _LAND_AREA_PATTERN.search(body)
        if built:
            updates["area"] = built.group(1)
            if land:
                updates["area"] += f" (terreno: {land.group(1)})"
        elif land:
            updates["area"] = f"terreno: {land.group(1)}"

        if re.search(r"compra direta", title, re.IGNORECASE) or re.search(r"compra direta", body, re.IGNORECASE):
            updates["sale_modality"] = "Compra Direta"

        return updates

    @staticmethod
    def _text(el) -> str:
        return el.get_text(strip=True) if el is not None else ""
