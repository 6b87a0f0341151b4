"""
Ranking a synthetic web graph.
Generates a site with a handful of hub pages and dangling pages, ranks it,
and prints the console report.
"""

from linkrank import LinkRank, RankConfig
from linkrank.datasets import generate_web_graph

def main():
    entities, edges = generate_web_graph(n_pages=2_000, avg_links=8, dangling_fraction=0.15)
    print(f"Generated {len(entities)} pages and {len(edges)} links.\n")

    with LinkRank(config=RankConfig(damping=0.85, top_k=10)) as db:
        db.load_entities(entities)
        db.load_edges(edges)
        print(db.report())

if __name__ == "__main__":
    main()
