from __future__ import annotations

import os

import pytest
from hypothesis import HealthCheck, settings

from analyst_report.models import TabularDataset


settings.register_profile(
    "ci_smoke",
    max_examples=30,
    derandomize=True,
    deadline=None,
    suppress_health_check=(HealthCheck.too_slow,),
)
settings.register_profile(
    "nightly_deep",
    max_examples=300,
    derandomize=True,
    deadline=None,
    suppress_health_check=(HealthCheck.too_slow,),
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci_smoke"))


@pytest.fixture()
def people() -> TabularDataset:
    return TabularDataset.from_rows(
        ["age", "city"],
        [["34", "NYC"], ["29", "LA"], ["34", "NYC"]],
    )


@pytest.fixture()
def mixed() -> TabularDataset:
    """Twenty rows: numeric, low-cardinality categorical, id, sparse and empty columns."""
    rows = []
    for i in range(20):
        rows.append(
            [
                str(10 + i),
                "East" if i % 2 else "West",
                f"id-{i}",
                "" if i % 4 == 0 else str(i * 1.5),
                "",
            ]
        )
    return TabularDataset.from_rows(["units", "region", "order_id", "discount", "notes"], rows)
