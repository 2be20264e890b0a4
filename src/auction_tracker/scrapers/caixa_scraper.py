"""
Caixa Econômica Federal Scraper

Reads the Caixa property list for Paraná (semicolon-separated, latin-1 CSV).
The download is often blocked by bot protection, so the last good CSV is
cached under the data directory and used as a fallback.
"""
import io
import re
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd
from pydantic import ValidationError

from config.settings import settings
from src.auction_tracker.models.property import AuctionProperty, OccupancyStatus
from src.auction_tracker.scrapers.base import BaseScraper
from src.auction_tracker.transformers.normalizer import normalize_text, parse_price, title_case
from src.auction_tracker.utils.logger import get_logger

logger = get_logger(__name__)

CSV_ENCODING = "latin-1"

# Number, UF, city, neighborhood, address, price, appraisal, discount,
# description, sale modality, link
CSV_COLUMNS = [
    "number", "uf", "city", "neighborhood", "address", "price",
    "appraised_value", "discount", "description", "sale_modality", "link",
]

_HEADER_MARKERS = ("Nº do imóvel", "N° do imóvel", "Nº do im")

_TYPE_PATTERN = re.compile(
    r"^(Apartamento|Casa|Sobrado|Terreno|Sala|Gleba|Loja|Galpão|Prédio)", re.IGNORECASE
)
_PRIVATE_AREA_PATTERN = re.compile(r"([\d.,]+) de área privativa")
_TOTAL_AREA_PATTERN = re.compile(r"([\d.,]+) de área total")
_LAND_AREA_PATTERN = re.compile(r"([\d.,]+) de área do terreno")


class CaixaScraper(BaseScraper):
    """
    Scraper for the Caixa property list CSV.
    """

    source_name = "Caixa Econômica"

    def __init__(
        self,
        csv_url: Optional[str] = None,
        cache_path: Optional[Union[str, Path]] = None,
        target_cities: Optional[List[str]] = None,
        **kwargs
    ):
        """
        Args:
            csv_url: Override the CSV URL (for testing)
            cache_path: Cached CSV location, defaults to <data_dir>/caixa_pr_cache.csv
            target_cities: Upper-case, unaccented city names to keep
        """
        super().__init__(**kwargs)
        self.csv_url = csv_url or settings.caixa_csv_url
        self.cache_path = Path(cache_path) if cache_path else Path(settings.data_dir) / settings.caixa_cache_filename
        cities = target_cities if target_cities is not None else settings.caixa_target_cities
        self.target_cities = {normalize_text(city).upper() for city in cities}

    def default_base_url(self) -> str:
        return "https://venda-imoveis.caixa.gov.br"

    def fetch_properties(self) -> List[AuctionProperty]:
        """
        Download (or load from cache) and parse the Caixa CSV.

        Returns:
            Listings in the target cities; empty when no CSV is available
        """
        logger.info("fetching_caixa_csv", url=self.csv_url)
        csv_text = self._download()

        if csv_text is not None:
            self._write_cache(csv_text)
        elif self.cache_path.exists():
            logger.info("using_cached_caixa_csv", path=str(self.cache_path))
            csv_text = self.cache_path.read_text(encoding=CSV_ENCODING)
        else:
            logger.error("caixa_csv_unavailable", cache_path=str(self.cache_path))
            return []

        properties = self.parse_csv(csv_text)
        logger.info("fetch_complete", source=self.source_name, total_properties=len(properties))
        return properties

    def _download(self) -> Optional[str]:
        text = self.fetch_text(
            self.csv_url,
            encoding=CSV_ENCODING,
            headers={
                "Accept": "text/csv,text/html,application/xhtml+xml,*/*",
                "Referer": f"{self.base_url}/sistema/download-lista.asp",
            }
        )
        if text is None:
            return None
        if not self._looks_like_csv(text):
            logger.warning("caixa_csv_blocked", reason="bot protection page instead of CSV")
            return None
        return text

    @staticmethod
    def _looks_like_csv(text: str) -> bool:
        return any(marker in text for marker in _HEADER_MARKERS) or "Lista de Im" in text

    def _write_cache(self, csv_text: str):
        self.cache_path.parent.mkdir(parents=True, exist_ok=True)
        self.cache_path.write_text(csv_text, encoding=CSV_ENCODING)
        logger.debug("caixa_cache_updated", path=str(self.cache_path))

    def parse_csv(self, csv_text: str) -> List[AuctionProperty]:
        """
        Parse the Caixa CSV into listings.

        Title and header lines are skipped; rows outside the target cities
        or without a price are dropped.
        """
        lines = [line for line in csv_text.splitlines() if line.strip()]
        data_lines = [
            line for line in lines
            if "Lista de Im" not in line and not any(marker in line for marker in _HEADER_MARKERS)
        ]
        if not data_lines:
            return []

        df = pd.read_csv(
            io.StringIO("\n".join(data_lines)),
            sep=";",
            header=None,
            dtype=str,
            keep_default_na=False,
            on_bad_lines="skip",
            engine="python",
        )
        if df.shape[1] < len(CSV_COLUMNS):
            logger.warning("caixa_csv_unexpected_layout", columns=df.shape[1])
            return []

        df = df.iloc[:, :len(CSV_COLUMNS)]
        df.columns = CSV_COLUMNS
        df = df.fillna("").apply(lambda col: col.str.strip())

        properties = []
        skipped = 0
        for row in df.to_dict(orient="records"):
            data = self._row_to_property(row)
            if data is None:
                skipped += 1
                continue
            try:
                properties.append(AuctionProperty(**data))
            except ValidationError as e:
                skipped += 1
                logger.warning("property_validation_failed", source=self.source_name, number=row["number"], error=str(e))

        logger.info("caixa_csv_parsed", rows=len(df), properties=len(properties), skipped=skipped)
        return properties

    def _row_to_property(self, row: dict) -> Optional[dict]:
        city = normalize_text(row["city"]).upper()
        if city not in self.target_cities:
            return None

        price = parse_price(row["price"])
        if not price:
            return None
        appraised = parse_price(row["appraised_value"])

        try:
            discount = round(float(row["discount"].replace(",", ".")), 2)
        except ValueError:
            discount = None

        neighborhood = title_case(row["neighborhood"].lower())
        if city != "CURITIBA":
            neighborhood = f"{neighborhood} ({title_case(row['city'].lower())})"

        type_match = _TYPE_PATTERN.match(row["description"])

        return {
            "id": f"caixa-{row['number']}",
            "property_type": title_case(type_match.group(1)) if type_match else "Imóvel",
            "neighborhood": neighborhood,
            "address": row["address"],
            "bid_price": price,
            "appraised_value": appraised if appraised else price,
            "discount_percent": discount,
            "sale_modality": row["sale_modality"] or "Caixa",
            "closing_date": None,
            "occupancy_status": OccupancyStatus.UNKNOWN,
            "area": self._parse_area(row["description"]),
            "source": self.source_name,
            "link": row["link"],
        }

    @staticmethod
    def _parse_area(description: str) -> Optional[str]:
        """
        "70,00 de área privativa, 200,00 de área do terreno" -> "70,00m² (terreno: 200,00m²)"
        """
        def positive(match) -> bool:
            return match is not None and (parse_price(match.group(1)) or 0) > 0

        area = ""
        private = _PRIVATE_AREA_PATTERN.search(description)
        total = _TOTAL_AREA_PATTERN.search(description)
        land = _LAND_AREA_PATTERN.search(description)

        if positive(private):
            area = f"{private.group(1)}m²"
        elif positive(total):
            area = f"{total.group(1)}m²"

        if positive(land):
            area = f"{area} (terreno: {land.group(1)}m²)" if area else f"terreno: {land.group(1)}m²"

        return area or None
