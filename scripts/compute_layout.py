#!/usr/bin/env python3
"""Compute idea positions, topic islands and connections, store as JSON.

This script:
1. Loads extracted ideas (ideas-raw.json) and embeddings (embeddings.json)
2. Drops near-duplicate ideas per topic
3. Projects embeddings to 2D (UMAP, or a cached projection file)
4. Anchors topics into separated islands and declutters overlaps
5. Finds nearby/far connections
6. Writes ideas.json and topics.json back to the data directory

Run after extraction and embedding, or when the idea set changes.

Usage:
    uv run python scripts/compute_layout.py
    uv run python scripts/compute_layout.py --data-dir public/data --seed 42
    uv run python scripts/compute_layout.py --projection cached-umap.json

UMAP needs the optional extra:
    uv add "ideasea[projection]"
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

# Add src to path
sys.path.insert(0, str(project_root / "src"))

from ideasea.config import Settings
from ideasea.layout import LayoutConfig, LayoutPipeline, StaticProjector, UmapProjector
from ideasea.storage import DatasetError, load_embeddings, load_projection, load_raw_ideas, save_layout

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Main entry point."""
    settings = Settings()

    parser = argparse.ArgumentParser(description="Compute the idea map layout")
    parser.add_argument(
        "--data-dir",
        default=settings.data_dir,
        help="Directory holding ideas-raw.json / embeddings.json and receiving the output",
    )
    parser.add_argument(
        "--projection",
        default=None,
        help="JSON file with cached raw [x, y] rows (skips UMAP)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.random_seed,
        help="Seed for jitter and UMAP (default: system entropy)",
    )
    parser.add_argument(
        "--keep-offsets",
        action="store_true",
        help="Scale contracted points directly instead of following separated centroids",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger("ideasea").setLevel(logging.DEBUG)

    data_dir = Path(args.data_dir)
    config = LayoutConfig.from_settings(settings)
    config.random_seed = args.seed
    if args.keep_offsets:
        config.anchor.rebase_on_separated = False

    try:
        ideas = load_raw_ideas(data_dir / settings.raw_ideas_file)
        embeddings = load_embeddings(data_dir / settings.embeddings_file)
        projector = (
            StaticProjector(load_projection(args.projection))
            if args.projection
            else UmapProjector(
                n_neighbors=settings.umap_n_neighbors,
                min_dist=settings.umap_min_dist,
                spread=settings.umap_spread,
                random_state=args.seed,
            )
        )
    except DatasetError as e:
        logger.error(f"{e} (run extraction and embedding first)")
        return 1

    logger.info(f"Loaded {len(ideas)} ideas and {len(embeddings)} embeddings")

    pipeline = LayoutPipeline(projector, config, rng=random.Random(args.seed))
    result = pipeline.run(ideas, embeddings)
    save_layout(data_dir, result.ideas, result.topics)

    if result.ideas:
        xs = [i.x for i in result.ideas]
        ys = [i.y for i in result.ideas]
        logger.info(
            f"Bounding box: x=[{min(xs):.1f}, {max(xs):.1f}], y=[{min(ys):.1f}, {max(ys):.1f}]"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
