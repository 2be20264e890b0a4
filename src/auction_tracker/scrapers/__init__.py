"""
Scrapers Package

Listing scrapers for the supported auction sources: Portal Zuk,
Leilão Imóvel and Caixa Econômica Federal.
"""

from .caixa_scraper import CaixaScraper
from .leilao_imovel_scraper import LeilaoImovelScraper
from .zuk_scraper import ZukScraper

__all__ = [
    "CaixaScraper",
    "LeilaoImovelScraper",
    "ZukScraper",
]
