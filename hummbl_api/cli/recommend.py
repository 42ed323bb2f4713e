# =============================================
# File: hummbl_api/cli/recommend.py
# Purpose: CLI entrypoint to get model recommendations without running the API.
# Usage:
#   python -m hummbl_api.cli.recommend "our team keeps missing deadlines" --limit 3 --workflows
# =============================================
from __future__ import annotations
import argparse
import json
import sys

from hummbl_api.services.catalog import CatalogError, get_catalog, load_catalog
from hummbl_api.services.recommender import DEFAULT_LIMIT, recommend_models
from hummbl_api.services.workflows import match_workflows


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Recommend mental models for a problem description.")
    ap.add_argument("problem", help="Free-text problem description")
    ap.add_argument("--limit", type=int, default=DEFAULT_LIMIT, help="Max models to return (1-20, default: 5)")
    ap.add_argument("--catalog", default=None, help="Catalog JSON file (default: bundled Base120)")
    ap.add_argument("--workflows", action="store_true", help="Also list matching curated workflows")
    ap.add_argument("--json", action="store_true", help="Print JSON instead of text")
    args = ap.parse_args(argv)

    try:
        catalog = load_catalog(args.catalog) if args.catalog else get_catalog()
    except CatalogError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    result = recommend_models(args.problem, catalog, args.limit)
    flows = match_workflows(args.problem) if args.workflows else []

    if args.json:
        out = result.model_dump()
        if args.workflows:
            out["workflows"] = [w.to_dict() for w in flows]
        print(json.dumps(out, indent=2, ensure_ascii=False))
        return 0

    if result.fallback:
        print("No specific matches - showing high-priority models")
    for i, m in enumerate(result.models, start=1):
        print(f"{i}. [{m.code}] {m.name} - {m.definition}")
    if result.matched_patterns:
        print(f"Patterns: {', '.join(result.matched_patterns)}")
    if result.keywords_used:
        print(f"Keywords: {', '.join(result.keywords_used)}")
    for w in flows:
        chain = " -> ".join(s.model_code for s in w.steps)
        print(f"Workflow: {w.name} ({chain})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
