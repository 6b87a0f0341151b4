"""Integration tests for the high-level LinkRank API."""

import pytest
import numpy as np
import pandas as pd
import pyarrow as pa

import linkrank
from linkrank.api import LinkRank
from linkrank.core.config import RankConfig
from linkrank.core.errors import InputFormatError, LinkRankError, ReferentialError


class TestLinkRankIngestion:

    def test_load_dataframes(self, entities_df, edges_df):
        with LinkRank() as db:
            assert db.load_entities(entities_df) == 3
            assert db.load_edges(edges_df) == 4
            assert db.entity_count() == 3
            assert db.names() == ["a", "b", "c"]

    def test_raw_sql(self, engine):
        assert engine.sql("SELECT COUNT(*) AS n FROM edges").column("n")[0].as_py() == 9

    def test_requires_entities(self):
        with LinkRank() as db:
            with pytest.raises(RuntimeError, match="load_file"):
                db.top()

    def test_entity_ids_must_be_contiguous(self):
        with LinkRank() as db:
            db.load_entities(pd.DataFrame({"entity_id": [0, 2], "name": ["a", "c"]}))
            with pytest.raises(InputFormatError, match="cover"):
                db.entity_count()

    def test_entities_without_edges(self):
        with LinkRank() as db:
            db.load_entities(pd.DataFrame({"entity_id": [0, 1, 2, 3], "name": list("abcd")}))
            np.testing.assert_allclose(db.scores().column("score").to_numpy(), 0.25, atol=1e-9)

    def test_unreadable_link_file(self, tmp_path):
        with LinkRank() as db:
            with pytest.raises(LinkRankError, match="cannot read link file"):
                db.load_file(tmp_path)

    def test_fractional_edges_never_reach_the_solver(self, entities_df):
        with LinkRank() as db:
            db.load_entities(entities_df)
            with pytest.raises(LinkRankError, match="must be integers"):
                db.load_edges(pd.DataFrame({"source": [0.4, 1.6], "target": [1.5, 0.0]}))
            np.testing.assert_allclose(db.scores().column("score").to_numpy(), 1 / 3, atol=1e-9)

    def test_edge_outside_entities_rejected(self, entities_df):
        with LinkRank() as db:
            db.load_entities(entities_df)
            db.load_edges(pd.DataFrame({"source": [0, 1], "target": [1, 3]}))
            with pytest.raises(ReferentialError, match=r"\(1, 3\)"):
                db.fit()


class TestLinkRankRanking:

    def test_stochastic_matrix_collapses_duplicates(self, engine):
        s = engine.stochastic_matrix()
        np.testing.assert_allclose(s.sum(axis=1), 1.0, atol=1e-9)
        assert s[4, 0] == 1.0
        np.testing.assert_allclose(s[5], 1 / 6)

    def test_hub_ranks_first(self, engine):
        top = engine.top(3)
        assert top.num_rows == 3
        assert top.column("name")[0].as_py() == "http://www.hollins.edu/"
        assert top.column("rank").to_pylist() == [1, 2, 3]

    def test_top_defaults_to_config_and_clips(self, engine):
        assert engine.top().num_rows == 6

    def test_scores_cover_every_entity(self, engine):
        table = engine.scores()
        assert table.num_rows == 6
        assert abs(sum(table.column("score").to_pylist()) - 1.0) < 1e-4
        assert engine.result.converged

    def test_fit_is_cached_until_reload(self, engine, link_file):
        engine.fit()
        first = engine.result
        engine.top()
        assert engine.result is first
        engine.load_file(link_file)
        assert engine.result is None

    def test_resume_from_scores(self, engine):
        scores = engine.fit().result.scores
        assert engine.fit(initial=scores).result.iterations <= 1

    def test_damping_changes_spread(self, link_file):
        low = linkrank.load(link_file, damping=0.1).scores().column("score").to_numpy()
        high = linkrank.load(link_file, damping=0.9).scores().column("score").to_numpy()
        assert np.ptp(low) < np.ptp(high)

    def test_report(self, engine):
        text = engine.report(2)
        assert "Using damping factor d = 0.750000" in text
        assert "Using 2 threads" in text
        assert "The 2 biggest sites are:" in text
        assert "1(" in text and "): http://www.hollins.edu/" in text
        assert "The number of iterations is:" in text

    def test_web_graph_hubs_lead(self):
        entities, edges = linkrank.generate_web_graph(n_pages=150, hub_fraction=0.05, seed=11)
        with LinkRank(config=RankConfig(threads=3, top_k=5)) as db:
            db.load_entities(entities)
            db.load_edges(edges)
            leaders = db.top().column("entity_id").to_pylist()
        assert sum(1 for i in leaders if i < 7) >= 4


def test_factory_functions(link_file):
    db = linkrank.load(link_file, threads=1)
    assert isinstance(db, LinkRank)
    assert db.config.threads == 1
    db.close()
    with linkrank.connect() as db2:
        assert "memory" in repr(db2)
