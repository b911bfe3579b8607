"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from trendsheet.market import MLSRecord
from trendsheet.worksheet import (
    Comparable,
    Condition,
    SiteSizeUnit,
    SubjectProperty,
)

MLS_HEADER = "MLS #\tStatus\tList Price\tSold Price\tClose Date\tDOM\tSqFt"


@pytest.fixture
def mls_text() -> str:
    """Pasted MLS export: four trailing-year sales, one older sale, two listings."""
    rows = [
        MLS_HEADER,
        "A1\tSold\t$305,000\t$300,000\t2024-05-15\t10\t1,500",
        "A2\tSLD\t$325,000\t$320,000\t3/1/2024\t20\t1,600",
        "A3\tClosed\t$289,000\t$280,000\t2024-01-10\t30\t1,400",
        "A4\tSold\t$259,000\t$250,000\t7/1/2023\t40\t1,250",
        "A5\tSold\t$410,000\t$400,000\t2023-05-01\t50\t2,000",
        "B1\tActive\t$315,000\t\t\t5\t1,550",
        "B2\tACT\t$299,900\t\t\t12\t1,480",
    ]
    return "\n".join(rows)


@pytest.fixture
def trailing_year_records() -> list[MLSRecord]:
    """Four sales inside the year before 2024-06-01, plus two active listings."""
    return [
        MLSRecord(
            mls_number="A1",
            status="Sold",
            sale_price="300000",
            close_date="2024-05-15",
            days_on_market="10",
            living_area="1500",
        ),
        MLSRecord(
            mls_number="A2",
            status="SLD",
            sale_price="320000",
            close_date="2024-03-01",
            days_on_market="20",
            living_area="1600",
        ),
        MLSRecord(
            mls_number="A3",
            status="Closed",
            sale_price="280000",
            close_date="2024-01-10",
            days_on_market="30",
            living_area="1400",
        ),
        MLSRecord(
            mls_number="A4",
            status="Sold",
            sale_price="250000",
            close_date="2023-07-01",
            days_on_market="40",
            living_area="1250",
        ),
        MLSRecord(mls_number="B1", status="Active", list_price="315000"),
        MLSRecord(mls_number="B2", status="Active Under Contract", list_price="299900"),
    ]


@pytest.fixture
def subject() -> SubjectProperty:
    """Subject property with every physical field filled in."""
    return SubjectProperty(
        effective_date="2024-06-01",
        site_size="0.5",
        site_size_unit=SiteSizeUnit.ACRES,
        year_built="2000",
        bedrooms="3",
        full_baths="2",
        living_area="1850",
        below_grade_finished="500",
        below_grade_unfinished="200",
        garage="2",
        carport="1",
        condition=Condition.GOOD,
    )


@pytest.fixture
def comparable() -> Comparable:
    """Comparable sale smaller and older than the subject."""
    return Comparable(
        mls_number="A1",
        sale_price="300000",
        site_size="20000",
        year_built="1990",
        bedrooms="3",
        full_baths="3",
        living_area="1800",
        below_grade_finished="300",
        below_grade_unfinished="0",
        garage="1",
        carport="1",
    )
