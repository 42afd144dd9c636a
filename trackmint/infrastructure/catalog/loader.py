"""
RECOMMENDATION CATALOGUE

Loads the built-in stock / fund / bond tables from recommendations.yml.

RULES:
✅ Fail fast on a missing file or an unknown symbol reference
✅ Read-only after load
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, List

import yaml

from trackmint.domain.models import (
    AssetClass,
    BondSuggestion,
    Candidate,
    FundSuggestion,
    RiskCategory,
)

CATALOG_FILE = Path(__file__).resolve().parent / "recommendations.yml"


class RecommendationCatalog:
    """Static per-risk recommendation tables"""

    def __init__(
        self,
        stocks: Dict[RiskCategory, List[Candidate]],
        mutual_funds: Dict[RiskCategory, List[FundSuggestion]],
        bonds: Dict[RiskCategory, List[BondSuggestion]],
    ):
        self._stocks = stocks
        self._mutual_funds = mutual_funds
        self._bonds = bonds

    @classmethod
    def load(cls, path: Path = CATALOG_FILE) -> "RecommendationCatalog":
        if not path.exists():
            raise FileNotFoundError(f"Recommendation catalogue not found: {path}")

        with open(path, "r") as f:
            data = yaml.safe_load(f)

        universe: Dict[str, Candidate] = {}
        for symbol, row in data.get("stocks", {}).items():
            universe[symbol] = Candidate(
                symbol=symbol,
                description=row["description"],
                current_price=float(row["current_price"]),
                change=float(row["change"]),
                change_percent=float(row["change_percent"]),
                asset_class=AssetClass(row["asset_class"]),
            )

        stocks: Dict[RiskCategory, List[Candidate]] = {}
        mutual_funds: Dict[RiskCategory, List[FundSuggestion]] = {}
        bonds: Dict[RiskCategory, List[BondSuggestion]] = {}
        for risk in RiskCategory:
            symbols = data["fallback_stocks"][risk.value]
            missing = [s for s in symbols if s not in universe]
            if missing:
                raise ValueError(f"Unknown symbols in {risk.value} fallback list: {missing}")
            stocks[risk] = [universe[s] for s in symbols]
            mutual_funds[risk] = [FundSuggestion(**row) for row in data["mutual_funds"][risk.value]]
            bonds[risk] = [BondSuggestion(**row) for row in data["bonds"][risk.value]]

        return cls(stocks=stocks, mutual_funds=mutual_funds, bonds=bonds)

    def fallback_stocks(self, risk: RiskCategory) -> List[Candidate]:
        return list(self._stocks[RiskCategory(risk)])

    def mutual_funds(self, risk: RiskCategory) -> List[FundSuggestion]:
        return list(self._mutual_funds[RiskCategory(risk)])

    def bonds(self, risk: RiskCategory) -> List[BondSuggestion]:
        return list(self._bonds[RiskCategory(risk)])


@lru_cache(maxsize=1)
def get_catalog() -> RecommendationCatalog:
    return RecommendationCatalog.load()
