# ---------------------------------------------------------------------------
# Tests configuration
# ---------------------------------------------------------------------------

import pytest
import pandas as pd

from linkrank.core.connection import DuckDBConnection
from linkrank.core.config import RankConfig


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

LINK_FILE = """\
6 9
1 http://www.hollins.edu/
2 http://www.hollins.edu/admissions/
3 http://www.hollins.edu/academics/
4 http://www.hollins.edu/library/
5 http://www.hollins.edu/athletics/
6 http://www.hollins.edu/orphan.html
1 2
1 3
1 4
2 1
3 1
3 4
4 1
5 1
5 1
"""


@pytest.fixture
def conn():
    """In-memory DuckDB connection for each test."""
    db = DuckDBConnection()  # :memory:
    yield db
    db.close()


@pytest.fixture
def link_file(tmp_path):
    """Small site: page 1 is the hub, page 6 is dangling, 5 -> 1 appears twice."""
    path = tmp_path / "site.dat"
    path.write_text(LINK_FILE)
    return path


@pytest.fixture
def config():
    return RankConfig(threads=2)


@pytest.fixture
def entities_df():
    return pd.DataFrame({"entity_id": [0, 1, 2], "name": ["a", "b", "c"]})


@pytest.fixture
def edges_df():
    # a -> b, b -> c, c -> a, a -> b again
    return pd.DataFrame({"source": [0, 1, 2, 0], "target": [1, 2, 0, 1]})


@pytest.fixture
def engine(link_file, config):
    """LinkRank engine with the link file loaded."""
    from linkrank.api import LinkRank
    db = LinkRank(config=config)
    db.load_file(link_file)
    yield db
    db.close()
