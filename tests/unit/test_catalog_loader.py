import pytest

from trackmint.domain.models import AssetClass, RiskCategory
from trackmint.domain.models.categories import RISK_ASSET_CLASSES
from trackmint.infrastructure.catalog.loader import RecommendationCatalog


@pytest.fixture(scope="module")
def catalog():
    return RecommendationCatalog.load()


@pytest.mark.parametrize("risk", list(RiskCategory))
def test_every_risk_has_stocks_funds_and_bonds(catalog, risk):
    assert catalog.fallback_stocks(risk)
    assert catalog.mutual_funds(risk)
    assert catalog.bonds(risk)


@pytest.mark.parametrize("risk", list(RiskCategory))
def test_fallback_stocks_fit_their_risk(catalog, risk):
    for stock in catalog.fallback_stocks(risk):
        assert stock.asset_class in RISK_ASSET_CLASSES[risk]


def test_conservative_list(catalog):
    assert [s.symbol for s in catalog.fallback_stocks("conservative")] == ["AAPL", "MSFT", "JNJ", "PG", "KO"]
    assert catalog.fallback_stocks("conservative")[0].asset_class == AssetClass.MEGA_CAP


def test_missing_file_fails_fast(tmp_path):
    with pytest.raises(FileNotFoundError):
        RecommendationCatalog.load(tmp_path / "nope.yml")


def test_unknown_symbol_fails_fast(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text(
        "stocks: {}\n"
        "fallback_stocks: {conservative: [ZZZ], balanced: [], aggressive: []}\n"
        "mutual_funds: {conservative: [], balanced: [], aggressive: []}\n"
        "bonds: {conservative: [], balanced: [], aggressive: []}\n"
    )
    with pytest.raises(ValueError, match="ZZZ"):
        RecommendationCatalog.load(path)
