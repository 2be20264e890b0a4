"""
Unit tests for the Caixa CSV scraper
"""
import pytest
import requests
from unittest.mock import Mock, MagicMock

from src.auction_tracker.scrapers.caixa_scraper import CaixaScraper


CAIXA_CSV = "\n".join([
    "Lista de Imóveis da Caixa - PR",
    "",
    " N° do imóvel;UF;Cidade;Bairro;Endereço;Preço;Valor de avaliação;Desconto;Descrição;Modalidade de venda;Link de acesso",
    " 8787712345678;PR;CURITIBA ;PORTAO;RUA JOAO BETTEGA, N. 1500, APTO 12;220.000,00;400.000,00;45.00;"
    "Apartamento, 0.00 de área total, 65.00 de área privativa, 0.00 de área do terreno, 2 qto(s);"
    "Venda Online;https://venda-imoveis.caixa.gov.br/sistema/detalhe-imovel.asp?hdnimovel=8787712345678",
    " 8787787654321;PR;SÃO JOSÉ DOS PINHAIS;CENTRO;RUA XV DE NOVEMBRO, N. 300;150.000,00;243.000,00;38.27;"
    "Casa, 0.00 de área total, 90.00 de área privativa, 250.00 de área do terreno, 3 qto(s);"
    "Licitação Aberta;https://venda-imoveis.caixa.gov.br/sistema/detalhe-imovel.asp?hdnimovel=8787787654321",
    " 8787700000001;PR;LONDRINA;CENTRO;AV HIGIENOPOLIS, N. 10;100.000,00;200.000,00;50.00;"
    "Apartamento, 50.00 de área privativa;Venda Online;https://venda-imoveis.caixa.gov.br/x",
    " 8787700000002;PR;CURITIBA;CAJURU;RUA A, N. 1;0,00;200.000,00;0;"
    "Terreno, 300.00 de área do terreno;Venda Online;https://venda-imoveis.caixa.gov.br/y",
])


def mock_response(text):
    response = Mock()
    response.text = text
    response.status_code = 200
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / "caixa_pr_cache.csv"


@pytest.fixture
def scraper(cache_path):
    return CaixaScraper(csv_url="https://caixa.test/lista.csv", cache_path=cache_path, delay_seconds=0)


class TestCaixaScraper:
    """Tests for CaixaScraper"""

    def test_parse_csv(self, scraper):
        """Test that rows outside target cities or without price are dropped"""
        props = scraper.parse_csv(CAIXA_CSV)
        assert [p.id for p in props] == ["caixa-8787712345678", "caixa-8787787654321"]

    def test_parse_curitiba_row(self, scraper):
        """Test field mapping for a Curitiba row"""
        prop = scraper.parse_csv(CAIXA_CSV)[0]

        assert prop.property_type == "Apartamento"
        assert prop.neighborhood == "Portao"
        assert prop.address == "RUA JOAO BETTEGA, N. 1500, APTO 12"
        assert prop.bid_price == 220000.0
        assert prop.appraised_value == 400000.0
        assert prop.discount_percent == 45.0
        assert prop.sale_modality == "Venda Online"
        assert prop.area == "65.00m²"
        assert prop.source == "Caixa Econômica"
        assert prop.link.endswith("8787712345678")

    def test_parse_metro_row(self, scraper):
        """Test that metro-area rows carry the city in the neighborhood"""
        prop = scraper.parse_csv(CAIXA_CSV)[1]

        assert prop.property_type == "Casa"
        assert prop.neighborhood == "Centro (São José Dos Pinhais)"
        assert prop.discount_percent == 38.27
        assert prop.sale_modality == "Licitação Aberta"
        assert prop.area == "90.00m² (terreno: 250.00m²)"

    def test_parse_header_only(self, scraper):
        """Test a CSV with no data rows"""
        assert scraper.parse_csv("Lista de Imóveis da Caixa - PR\n N° do imóvel;UF;Cidade\n") == []

    def test_parse_area_land_only(self):
        """Test land-only area descriptions"""
        assert CaixaScraper._parse_area("Terreno, 300.00 de área do terreno") == "terreno: 300.00m²"
        assert CaixaScraper._parse_area("Loja") is None

    def test_fetch_writes_cache(self, scraper, cache_path):
        """Test that a successful download refreshes the cache"""
        scraper.session = MagicMock()
        scraper.session.get.return_value = mock_response(CAIXA_CSV)

        props = scraper.fetch_properties()

        assert len(props) == 2
        assert cache_path.read_text(encoding="latin-1") == CAIXA_CSV

    def test_blocked_download_uses_cache(self, scraper, cache_path):
        """Test falling back to the cache when the download is blocked"""
        cache_path.write_text(CAIXA_CSV, encoding="latin-1")
        scraper.session = MagicMock()
        scraper.session.get.return_value = mock_response("<html><body>Access denied</body></html>")

        props = scraper.fetch_properties()

        assert len(props) == 2

    def test_failed_download_uses_cache(self, scraper, cache_path):
        """Test falling back to the cache when the request fails"""
        cache_path.write_text(CAIXA_CSV, encoding="latin-1")
        scraper.session = MagicMock()
        scraper.session.get.side_effect = requests.ConnectionError("connection reset")

        assert len(scraper.fetch_properties()) == 2

    def test_no_download_no_cache(self, scraper, cache_path):
        """Test that no CSV at all yields no listings"""
        scraper.session = MagicMock()
        scraper.session.get.return_value = mock_response("<html>blocked</html>")

        assert scraper.fetch_properties() == []
        assert not cache_path.exists()


@pytest.mark.integration
class TestCaixaScraperIntegration:
    """Integration tests that hit the real download"""

    def test_fetch_real_properties(self, tmp_path):
        """Test downloading the Paraná list (requires internet)"""
        props = CaixaScraper(cache_path=tmp_path / "caixa.csv").fetch_properties()
        assert all(p.id.startswith("caixa-") for p in props)
