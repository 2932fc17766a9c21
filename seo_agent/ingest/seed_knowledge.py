#!/usr/bin/env python3
# ================================================================
# seed_knowledge.py
# ----------------------------------------------------------------
# Embeds the SEO knowledge corpus (search/knowledge.yaml) and writes
# a FAISS index + metadata sidecar. Safe to re-run: entries already in
# the index are skipped.
#
#   python -m seo_agent.ingest.seed_knowledge --faiss data/index/knowledge.index
# ================================================================

from __future__ import annotations
import argparse
import sys
import time

from seo_agent.search import FaissKnowledgeIndex, build_embedder, load_knowledge, seed_index
from seo_agent.search.knowledge import KNOWLEDGE_PATH
from seo_agent.settings import settings


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Seed the SEO knowledge index")
    ap.add_argument("--faiss", default=settings.FAISS_PATH, help="FAISS index output path")
    ap.add_argument("--knowledge", default=KNOWLEDGE_PATH, help="Knowledge corpus YAML")
    ap.add_argument("--backend", default=settings.EMBED_BACKEND,
                    help="Embedding backend: sentence-transformers | ollama | hashing")
    ap.add_argument("--verbose", action="store_true", help="Show config")
    args = ap.parse_args(argv)

    if args.verbose:
        print("== Seed config ==")
        print(f"faiss    : {args.faiss}")
        print(f"knowledge: {args.knowledge}")
        print(f"backend  : {args.backend}")
        sys.stdout.flush()

    entries = list(load_knowledge(args.knowledge))
    if not entries:
        print(">> Nothing to embed. Exiting.", flush=True)
        return 0

    index = FaissKnowledgeIndex.load_or_create(args.faiss)
    embedder = build_embedder(args.backend)

    print(f">> Embedding {len(entries)} knowledge entries...", flush=True)
    t0 = time.time()
    added = seed_index(index, embedder, entries)
    print(f">> Done. {added} new entries in {time.time() - t0:.2f}s (total={len(index)})", flush=True)

    if added:
        index.save(args.faiss)
    return 0


if __name__ == "__main__":
    sys.exit(main())
