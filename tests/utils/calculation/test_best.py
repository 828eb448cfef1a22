import logging
from decimal import Decimal

import pytest

from arcaea.entities.enums import ClearRank
from arcaea.entities.profile import Profile
from arcaea.entities.record import NotePlayResult, NoteResult, ScorePlayResult
from utils.calculation.best import compute_best_n, profile_best_n, rank_results


def pm_results(*indices: int) -> dict:
    # A 10,000,000 score is worth constant + 2.
    return {
        f"song{i}@ftr": ScorePlayResult(
            chart_id=f"song{i}@ftr", clear=ClearRank.PURE_MEMORY, score=10_000_000
        )
        for i in indices
    }


def test_rank_results_orders_by_potential(catalog):
    ranked = rank_results(pm_results(3, 10, 0, 7), catalog)

    assert [item.chart.id for item in ranked] == [
        "song10@ftr",
        "song7@ftr",
        "song3@ftr",
        "song0@ftr",
    ]
    assert [item.no for item in ranked] == [1, 2, 3, 4]
    assert ranked[0].score.potential == Decimal("11.0")


def test_rank_results_keeps_stored_order_on_ties(catalog):
    results = {
        "song5@ftr": ScorePlayResult(chart_id="song5@ftr", clear=None, score=9_800_000),
        # 8.4 + 2 and 8.6 + 1.8 tie at 10.4.
        "song4@ftr": ScorePlayResult(chart_id="song4@ftr", clear=None, score=10_000_000),
        "song6@ftr": ScorePlayResult(chart_id="song6@ftr", clear=None, score=9_960_000),
    }

    ranked = rank_results(results, catalog)

    assert [item.chart.id for item in ranked] == ["song4@ftr", "song6@ftr", "song5@ftr"]
    assert ranked[0].score.potential == ranked[1].score.potential


def test_rank_results_skips_unknown_charts(catalog, caplog):
    results = {
        **pm_results(1),
        "missing@byd": ScorePlayResult(chart_id="missing@byd", clear=None, score=1),
    }

    with caplog.at_level(logging.WARNING):
        ranked = rank_results(results, catalog)

    assert [item.chart.id for item in ranked] == ["song1@ftr"]
    assert "missing@byd" in caplog.text


def test_rank_results_derives_score_from_judgments(catalog):
    results = {
        "song0@ftr": NotePlayResult(
            chart_id="song0@ftr",
            clear=ClearRank.NORMAL_CLEAR,
            result=NoteResult(pure=990, perfect=500, far=5, lost=5),
        )
    }

    (item,) = rank_results(results, catalog)

    assert item.note == NoteResult(pure=990, perfect=500, far=5, lost=5)
    assert item.score.score == 9_925_500
    assert item.clear == ClearRank.NORMAL_CLEAR


def test_compute_best_n_with_few_results(catalog):
    response = compute_best_n(pm_results(0, 1, 2, 3, 4), catalog, "10.00")

    # 10.0 + 10.1 + 10.2 + 10.3 + 10.4
    b30_sum = Decimal("51.0")
    assert len(response.b30) == 5
    assert response.b31_39 == []
    assert response.b30_average == b30_sum / 5
    assert response.min_potential == b30_sum / 40
    assert response.max_potential == (b30_sum + b30_sum) / 40
    assert response.r10_average == (Decimal("10.00") * 40 - b30_sum) / 5


def test_compute_best_n_with_many_results(catalog):
    response = compute_best_n(pm_results(*range(40)), catalog, Decimal("12.50"))

    potentials = [Decimal("2.0") + Decimal(8 * 10 + i) / 10 for i in range(40)]
    potentials.sort(reverse=True)
    b30_sum = sum(potentials[:30])
    b10_sum = sum(potentials[:10])

    assert len(response.ranked) == 40
    assert len(response.b30) == 30
    assert [item.no for item in response.b31_39] == list(range(31, 40))
    assert response.b30[0].chart.id == "song39@ftr"
    assert pytest.approx(float(response.b30_average)) == float(b30_sum / 30)
    assert pytest.approx(float(response.max_potential)) == float((b10_sum + b30_sum) / 40)
    assert pytest.approx(float(response.min_potential)) == float(b30_sum / 40)
    assert pytest.approx(float(response.r10_average)) == float(
        (Decimal("12.50") * 40 - b30_sum) / 10
    )


def test_compute_best_n_without_results(catalog):
    response = compute_best_n({}, catalog, "0")

    assert response.ranked == []
    assert response.b30_average is None
    assert response.r10_average is None
    assert response.max_potential == 0


def test_profile_best_n(catalog):
    profile = Profile(username="hikari", potential="11.00", best=pm_results(20, 21))

    response = profile_best_n(profile, catalog)

    assert response.username == "hikari"
    assert response.potential == "11.00"
    assert [item.chart.id for item in response.b30] == ["song21@ftr", "song20@ftr"]
