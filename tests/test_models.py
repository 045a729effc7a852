import pytest
from pydantic import ValidationError

from setforge.models.card import NumberDescriptor, RawRow
from setforge.models.catalog import Catalog, CatalogCard, OriginalSetData, VariationSummary
from setforge.models.variation import (
    UNKNOWN_VARIATION_RANK,
    VariationType,
    variation_rank,
    variation_symbol,
)


class TestRawRow:
    def test_immutable(self) -> None:
        row = RawRow("Ember Scout", "Normal", "Near Mint", "Common", "26-045C", "$0.25")
        with pytest.raises(AttributeError):
            row.printing = "Foil"  # type: ignore[misc]


class TestNumberDescriptor:
    def test_reprint_follows_original_set_data(self) -> None:
        plain = NumberDescriptor(set=26, number=45, rarity_code="C", local_id="26-045C")
        reprint = NumberDescriptor(
            set=26,
            number=93,
            rarity_code="C",
            local_id="26-093C/15-095C",
            original_set_data=OriginalSetData(
                rarity="Common", set_number=15, number=95, local_id="15-095C"
            ),
        )

        assert plain.is_reprint is False
        assert reprint.is_reprint is True


class TestVariationType:
    def test_declared_order_is_rank(self) -> None:
        ranks = [variation.rank for variation in VariationType]
        assert ranks == [0, 1, 2, 3]

    def test_rank_by_name(self) -> None:
        assert variation_rank("Normal") < variation_rank("Foil")
        assert variation_rank("Foil") < variation_rank("Full Art")
        assert variation_rank("Full Art") < variation_rank("Full Art Signature")

    def test_unknown_names_rank_last(self) -> None:
        assert variation_rank("Etched") == UNKNOWN_VARIATION_RANK
        assert variation_rank("Etched") > variation_rank("Full Art Signature")

    def test_symbols(self) -> None:
        assert variation_symbol("Normal") == ""
        assert variation_symbol("Foil") == "✨"
        assert variation_symbol("Etched") == ""


class TestCatalogSerialization:
    def _card(self, **overrides: object) -> CatalogCard:
        fields: dict = {
            "product_name": "Ember Scout",
            "rarity": "Common",
            "set_number": 26,
            "number": 45,
            "local_id": "26-045C",
            "variation": [
                VariationSummary(
                    type="Normal",
                    market_price_low=0.25,
                    market_price_high=0.25,
                    market_price_avg=0.25,
                )
            ],
        }
        fields.update(overrides)
        return CatalogCard(**fields)

    def test_plain_card_omits_flags(self) -> None:
        data = Catalog(cards=[self._card()]).to_json_dict()
        card = data["cards"][0]

        assert list(card) == ["product_name", "rarity", "set", "number", "localID", "variation"]
        assert card["variation"] == [
            {
                "type": "Normal",
                "marketPriceLow": 0.25,
                "marketPriceHigh": 0.25,
                "marketPriceAvg": 0.25,
            }
        ]

    def test_flags_serialized_when_true(self) -> None:
        original = OriginalSetData(rarity="Common", set_number=15, number=95, local_id="15-095C")
        card = self._card(is_reprint=True, is_promo=True, original_set_data=original)
        data = Catalog(cards=[card]).to_json_dict()["cards"][0]

        assert data["isReprint"] is True
        assert data["isPromo"] is True
        assert "isLegacy" not in data
        assert data["originalSetData"] == {
            "rarity": "Common",
            "set": 15,
            "number": 95,
            "localID": "15-095C",
        }
        assert list(data)[-1] == "variation"

    def test_round_trip_from_wire_format(self) -> None:
        wire = Catalog(cards=[self._card(is_legacy=True)]).to_json_dict()
        loaded = Catalog.model_validate(wire)

        assert loaded.cards[0].is_legacy is True
        assert loaded.cards[0].is_reprint is False
        assert loaded.cards[0].set_number == 26

    def test_variation_required(self) -> None:
        with pytest.raises(ValidationError):
            CatalogCard.model_validate(
                {"product_name": "X", "rarity": "Common", "set": 1, "number": 1, "localID": "1-001C"}
            )
