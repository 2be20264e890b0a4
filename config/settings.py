"""
Configuration Settings

Centralized configuration management using Pydantic and environment variables.
"""
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    List values can be given in the environment as JSON arrays.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Listing filters
    min_discount_percent: float = 40.0
    max_price: float = 800000.0

    # Neighborhoods always sorted first (Curitiba)
    priority_neighborhoods: List[str] = [
        "Portão", "Batel", "Água Verde", "Centro", "Bigorrilho",
        "Cabral", "Jardim Social", "Alto da XV", "Hugo Lange",
        "Juvevê", "Rebouças", "Cristo Rei", "Boa Vista", "Bacacheri", "Tarumã",
    ]

    # Deduplication
    dedup_similarity_threshold: float = 0.85
    default_sale_modality: str = "Leilão"

    # HTTP settings shared by all scrapers
    request_timeout_seconds: int = 30
    request_delay_seconds: float = 1.0
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    # Portal Zuk
    zuk_base_url: str = "https://www.portalzuk.com.br"
    zuk_city_slugs: List[str] = [
        "curitiba", "fazenda-rio-grande", "sao-jose-dos-pinhais", "pinhais",
        "colombo", "araucaria", "campo-largo", "almirante-tamandare",
    ]

    # Leilão Imóvel
    leilao_imovel_base_url: str = "https://www.leilaoimovel.com.br"
    leilao_imovel_paths: List[str] = [
        "/imoveis-a-venda/pr/curitiba",
        "/imoveis-leilao/pr/curitiba",
        "/imoveis-compra-direta/pr/curitiba",
    ]

    # Caixa Econômica Federal
    caixa_csv_url: str = "https://venda-imoveis.caixa.gov.br/listaweb/Lista_imoveis_PR.csv"
    caixa_cache_filename: str = "caixa_pr_cache.csv"
    caixa_target_cities: List[str] = [
        "CURITIBA", "FAZENDA RIO GRANDE", "SAO JOSE DOS PINHAIS", "PINHAIS",
        "COLOMBO", "ARAUCARIA", "CAMPO LARGO", "ALMIRANTE TAMANDARE",
    ]

    # Snapshot storage
    data_dir: str = "data"

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "json"

    # Application settings
    environment: str = "development"
    debug: bool = False


# Singleton instance
settings = Settings()
