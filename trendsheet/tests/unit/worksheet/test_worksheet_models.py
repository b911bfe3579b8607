"""Unit tests for worksheet models and comparable sequence operations."""

import dataclasses

import pytest

from trendsheet.worksheet import (
    ADJUSTMENT_LINE_ITEMS,
    AdjustmentConfig,
    Comparable,
    ComparableIndexError,
    Condition,
    LastComparableError,
    SiteSizeUnit,
    SubjectProperty,
    Worksheet,
    WorksheetError,
    add_comparable,
    comparable_label,
    create_default_comparables,
    default_weight,
    remove_comparable,
    replace_comparable,
)


class TestCondition:
    """Tests for the condition scale."""

    def test_nine_ordered_ratings(self) -> None:
        """Scale runs Excellent to Poor with ranks 0..8."""
        ratings = list(Condition)
        assert len(ratings) == 9
        assert ratings[0] is Condition.EXCELLENT
        assert ratings[-1] is Condition.POOR
        assert [c.rank for c in ratings] == list(range(9))

    def test_effective_ages_increase(self) -> None:
        """Worse condition means a higher effective age."""
        ages = [c.effective_age for c in Condition]
        assert ages == [0, 5, 15, 22, 30, 37, 45, 50, 55]

    def test_parse_label(self) -> None:
        """Labels parse ignoring case and extra spaces."""
        assert Condition.parse("good +") is Condition.GOOD_PLUS
        assert Condition.parse("  Moderate   + ") is Condition.MODERATE_PLUS
        assert Condition.parse("POOR") is Condition.POOR

    def test_parse_unknown_label(self) -> None:
        """Unknown labels raise ValueError."""
        with pytest.raises(ValueError, match="Unknown condition"):
            Condition.parse("Average")


class TestSiteSize:
    """Tests for site size unit conversion."""

    def test_acres_convert_to_sqft(self) -> None:
        """Acre input is converted at 43,560 sf per acre."""
        subject = SubjectProperty(site_size="0.5", site_size_unit=SiteSizeUnit.ACRES)
        assert subject.site_size_sqft == 21_780.0

    def test_sqft_passes_through(self) -> None:
        """Square-foot input is used as is."""
        comp = Comparable(site_size="9500")
        assert comp.site_size_sqft == 9500.0

    def test_blank_is_unavailable(self) -> None:
        """Blank site size is None."""
        assert Comparable().site_size_sqft is None


class TestComparable:
    """Tests for the Comparable record."""

    def test_has_every_line_item_field(self) -> None:
        """All 22 line-item keys are Comparable fields."""
        names = {f.name for f in dataclasses.fields(Comparable)}
        keys = [item.key for item in ADJUSTMENT_LINE_ITEMS]
        assert len(keys) == 22
        assert len(set(keys)) == 22
        assert set(keys) <= names

    def test_excluded_keeps_full_field_set(self) -> None:
        """Inclusion state does not change the shape of the record."""
        included = dataclasses.fields(Comparable(included=True))
        excluded = dataclasses.fields(Comparable(included=False))
        assert [f.name for f in included] == [f.name for f in excluded]

    def test_adjustment_values_in_grid_order(self) -> None:
        """adjustment_values follows the line-item order."""
        comp = Comparable(adj_gla="2250", adj_bath="-5000")
        values = comp.adjustment_values()
        assert list(values) == [item.key for item in ADJUSTMENT_LINE_ITEMS]
        assert values["adj_gla"] == "2250"
        assert values["adj_bath"] == "-5000"
        assert values["adj_view"] == ""

    def test_auto_flagged_items(self) -> None:
        """Calculator candidates are flagged."""
        auto = {item.key for item in ADJUSTMENT_LINE_ITEMS if item.auto}
        assert auto == {
            "adj_lot",
            "adj_age",
            "adj_bedroom",
            "adj_bath",
            "adj_gla",
            "adj_vehicle",
        }

    def test_frozen(self) -> None:
        """Records are immutable; edits go through replace_comparable."""
        comp = Comparable()
        with pytest.raises(dataclasses.FrozenInstanceError):
            comp.sale_price = "1"  # type: ignore[misc]


class TestComparableSequence:
    """Tests for comparable sequence operations."""

    def test_default_weights(self) -> None:
        """First three comparables default to 0.20, the rest to 0.10."""
        comps = create_default_comparables()
        assert len(comps) == 6
        assert [c.weight for c in comps] == ["0.20"] * 3 + ["0.10"] * 3

    def test_default_weight(self) -> None:
        """Position-based default weight."""
        assert default_weight(0) == "0.20"
        assert default_weight(2) == "0.20"
        assert default_weight(3) == "0.10"

    def test_label_from_position(self) -> None:
        """Labels are 1-based."""
        assert comparable_label(0) == "Comp 1"
        assert comparable_label(5) == "Comp 6"

    def test_add_appends_with_position_weight(self) -> None:
        """Added comparable goes last with the default for its position."""
        comps = add_comparable(create_default_comparables(2))
        assert len(comps) == 3
        assert comps[2].weight == "0.20"
        comps = add_comparable(comps)
        assert comps[3].weight == "0.10"

    def test_remove_shifts_later_positions(self) -> None:
        """Later comparables move down one position."""
        comps = tuple(Comparable(mls_number=f"M{i}") for i in range(4))
        result = remove_comparable(comps, 1)
        assert [c.mls_number for c in result] == ["M0", "M2", "M3"]
        # What was Comp 4 is now Comp 3
        assert result.index(comps[3]) == 2

    def test_remove_out_of_range(self) -> None:
        """Removing a missing position raises ComparableIndexError."""
        comps = create_default_comparables(2)
        with pytest.raises(ComparableIndexError) as exc_info:
            remove_comparable(comps, 2)
        assert exc_info.value.index == 2
        assert exc_info.value.size == 2
        assert isinstance(exc_info.value, WorksheetError)

    def test_remove_only_comparable_rejected(self) -> None:
        """The last remaining comparable cannot be removed."""
        comps = create_default_comparables(1)
        with pytest.raises(LastComparableError) as exc_info:
            remove_comparable(comps, 0)
        assert isinstance(exc_info.value, WorksheetError)

    def test_remove_down_to_one(self) -> None:
        """Removing from two comparables leaves one."""
        comps = (Comparable(mls_number="M0"), Comparable(mls_number="M1"))
        assert remove_comparable(comps, 0) == (comps[1],)

    def test_negative_index_rejected(self) -> None:
        """Negative positions are not treated as from-the-end."""
        with pytest.raises(ComparableIndexError):
            remove_comparable(create_default_comparables(2), -1)

    def test_replace_returns_new_sequence(self) -> None:
        """Replace changes one comparable and leaves the input untouched."""
        comps = create_default_comparables(3)
        result = replace_comparable(comps, 1, sale_price="310000", included=False)
        assert result[1].sale_price == "310000"
        assert result[1].included is False
        assert result[0] is comps[0]
        assert comps[1].sale_price == ""

    def test_replace_unknown_field(self) -> None:
        """Unknown field names raise TypeError."""
        with pytest.raises(TypeError):
            replace_comparable(create_default_comparables(1), 0, colour="red")

    def test_replace_out_of_range(self) -> None:
        """Replacing a missing position raises ComparableIndexError."""
        with pytest.raises(ComparableIndexError):
            replace_comparable((), 0, sale_price="1")


class TestWorksheetDefaults:
    """Tests for Worksheet and AdjustmentConfig defaults."""

    def test_default_worksheet(self) -> None:
        """New worksheet has six blank comparables and default coefficients."""
        worksheet = Worksheet()
        assert len(worksheet.comparables) == 6
        assert worksheet.config == AdjustmentConfig()
        assert worksheet.subject.condition is Condition.GOOD

    def test_config_to_dict(self) -> None:
        """Coefficients serialize by name."""
        config = AdjustmentConfig().to_dict()
        assert config["gla_per_sqft"] == 45.0
        assert config["below_grade_finished_pct"] == 65.0
        assert config["below_grade_unfinished_pct"] == 25.0
        assert config["bath_pct"] == 10.0
