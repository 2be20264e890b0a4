"""
Leilão Imóvel Scraper

Fetches auction and direct-sale listings for Curitiba from Leilão Imóvel.
"""
import re
from typing import List, Optional

from bs4 import BeautifulSoup
from pydantic import ValidationError

from config.settings import settings
from src.auction_tracker.models.property import AuctionProperty, OccupancyStatus
from src.auction_tracker.scrapers.base import BaseScraper
from src.auction_tracker.transformers.normalizer import calculate_discount, parse_br_date, parse_price
from src.auction_tracker.utils.logger import get_logger

logger = get_logger(__name__)

ITEM_SELECTOR = ".item-imovel, .property-item, .listing"

_ID_PATTERN = re.compile(r"(\d{6,})")

# Checked in order against the card text
_TYPE_KEYWORDS = [
    ("apartamento", "Apartamento"),
    ("casa", "Casa"),
    ("sobrado", "Sobrado"),
    ("terreno", "Terreno"),
]

_MODALITY_KEYWORDS = ["Compra Direta", "Venda Online", "Leilão SFI"]


class LeilaoImovelScraper(BaseScraper):
    """
    Scraper for leilaoimovel.com.br listing pages.
    """

    source_name = "Leilão Imóvel"

    def __init__(self, base_url: Optional[str] = None, paths: Optional[List[str]] = None, **kwargs):
        """
        Args:
            base_url: Override the site URL (for testing)
            paths: Listing paths to scrape, defaults to settings.leilao_imovel_paths
        """
        super().__init__(base_url=base_url, **kwargs)
        self.paths = paths if paths is not None else list(settings.leilao_imovel_paths)

    def default_base_url(self) -> str:
        return settings.leilao_imovel_base_url

    def fetch_properties(self) -> List[AuctionProperty]:
        """
        Fetch listings from every configured listing path.

        The same listing can appear under several paths; only its first
        occurrence is kept.
        """
        logger.info("fetching_leilao_imovel_listings", pages=len(self.paths))
        properties: List[AuctionProperty] = []
        seen_ids = set()

        for path in self.paths:
            html = self.fetch_text(self.absolute_url(path))
            self.pause()
            if html is None:
                continue

            for prop in self.parse_listing_page(html):
                if prop.id in seen_ids:
                    continue
                seen_ids.add(prop.id)
                properties.append(prop)

        logger.info("fetch_complete", source=self.source_name, total_properties=len(properties))
        return properties

    def parse_listing_page(self, html: str) -> List[AuctionProperty]:
        """
        Parse listing items from a results page.

        Returns:
            Valid listings; items without id, address or price are skipped
        """
        soup = BeautifulSoup(html, "html.parser")
        properties = []

        for idx, item in enumerate(soup.select(ITEM_SELECTOR)):
            data = self._parse_item(item)
            if data is None:
                continue
            try:
                properties.append(AuctionProperty(**data))
            except ValidationError as e:
                logger.warning("property_validation_failed", source=self.source_name, item_index=idx, error=str(e))

        return properties

    def _parse_item(self, item) -> Optional[dict]:
        link_el = item.select_one("a[href]")
        if link_el is None:
            return None
        link = self.absolute_url(link_el["href"])
        id_match = _ID_PATTERN.search(link)
        if not id_match:
            return None

        text = item.get_text(" ", strip=True)

        address = self._first_text(item, ".endereco, .address, .localizacao")
        if not address:
            return None

        bid = parse_price(self._first_text(item, ".valor-lance, .preco, .price, .valor"))
        if not bid:
            return None
        appraised = parse_price(self._first_text(item, ".valor-avaliacao, .avaliacao, .original-price"))

        neighborhood = self._first_text(item, ".bairro, .neighborhood")
        if not neighborhood:
            # "Rua X, 123, Portão, Curitiba" -> second to last part
            parts = [part.strip() for part in address.split(",")]
            neighborhood = parts[-2] if len(parts) > 1 else "Desconhecido"

        return {
            "id": f"li-{id_match.group(1)}",
            "property_type": self._first_text(item, ".tipo-imovel, .property-type, .tipo") or self._infer_type(text),
            "neighborhood": neighborhood,
            "address": address,
            "bid_price": bid,
            "appraised_value": appraised,
            "discount_percent": calculate_discount(appraised, bid),
            "sale_modality": self._first_text(item, ".modalidade, .tipo-venda") or self._infer_modality(text),
            "closing_date": parse_br_date(self._first_text(item, ".data-encerramento, .data, .date")),
            "occupancy_status": self._infer_occupancy(self._first_text(item, ".observacoes, .obs")),
            "area": self._first_text(item, ".area, .metragem") or None,
            "source": self.source_name,
            "link": link,
        }

    @staticmethod
    def _first_text(item, selector: str) -> str:
        el = item.select_one(selector)
        return el.get_text(" ", strip=True) if el is not None else ""

    @staticmethod
    def _infer_type(text: str) -> str:
        lowered = text.lower()
        for keyword, label in _TYPE_KEYWORDS:
            if keyword in lowered:
                return label
        return "Imóvel"

    @staticmethod
    def _infer_modality(text: str) -> str:
        for modality in _MODALITY_KEYWORDS:
            if modality in text:
                return modality
        return settings.default_sale_modality

    @staticmethod
    def _infer_occupancy(observations: str) -> OccupancyStatus:
        lowered = observations.lower()
        if "imóvel ocupado" in lowered or "imovel ocupado" in lowered:
            return OccupancyStatus.OCCUPIED
        if "desocupado" in lowered:
            return OccupancyStatus.VACANT
        return OccupancyStatus.UNKNOWN
