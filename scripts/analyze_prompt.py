#!/usr/bin/env python3
"""
Print prompt suggestions for a piece of text.

Runs the suggestion engine locally by default, or calls a running service
when --remote is given.

Usage:
    python scripts/analyze_prompt.py "fix this thing"
    python scripts/analyze_prompt.py "Explain quantum tunnelling" --platform claude --tier premium
    python scripts/analyze_prompt.py "fix this thing" --remote --base-url http://localhost:8000 --token $TOKEN
    python scripts/analyze_prompt.py "fix this thing" --apply-all
    python scripts/analyze_prompt.py "Explain recursion" --hostname claude.ai --tier premium
"""
import argparse
import asyncio
import json
import os
import sys

from app.config import settings
from app.schemas.suggestion import Platform, Tier, UpsellMode, dump_suggestions
from app.services.suggestion_engine import apply_all, detect_platform, generate
from app.services.suggestions_client import SuggestionsAPIError, SuggestionsClient


async def analyze_remote(args: argparse.Namespace):
    async with SuggestionsClient(args.base_url, auth_token=args.token) as client:
        result = await client.analyze(args.text, args.platform, hostname=args.hostname)
    return result.suggestions, result.has_subscription


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Show prompt-improvement suggestions")
    parser.add_argument("text", help="Prompt text to analyze")
    parser.add_argument("--platform", default=Platform.UNKNOWN.value, choices=[p.value for p in Platform])
    parser.add_argument("--hostname", help="Chat site host; overrides --platform")
    parser.add_argument("--tier", default=Tier.FREE.value, choices=[t.value for t in Tier])
    parser.add_argument("--upsell-mode", default=settings.SUGGESTION_UPSELL_MODE, choices=[m.value for m in UpsellMode])
    parser.add_argument("--remote", action="store_true", help="Call a running service instead of the local engine")
    parser.add_argument("--base-url", default=settings.API_BASE_URL)
    parser.add_argument("--token", default=os.getenv("ENHANCER_TOKEN"), help="Bearer token for --remote")
    parser.add_argument("--apply-all", action="store_true", help="Also print the text with every suggestion applied")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.remote:
        try:
            suggestions, premium = asyncio.run(analyze_remote(args))
        except SuggestionsAPIError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        platform = detect_platform(args.hostname) if args.hostname else args.platform
        suggestions = generate(
            args.text,
            platform,
            args.tier,
            upsell_mode=args.upsell_mode,
            caps=settings.suggestion_caps
        )
        premium = args.tier == Tier.PREMIUM.value

    print(json.dumps(
        {"hasSubscription": premium, "suggestions": dump_suggestions(suggestions)},
        indent=2
    ))

    if args.apply_all:
        print()
        print(apply_all(args.text, suggestions))

    return 0


if __name__ == "__main__":
    sys.exit(main())
