import sys
import json
import argparse
import logging
from dataclasses import replace

from colorama import Fore, Style, init as colorama_init

from reelfetch.bootstrap import create_container
from reelfetch.core.config import load_config
from reelfetch.core.entities import ResolutionResult


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reelfetch",
        description="Resolve a Facebook or Instagram post to direct media links",
    )
    parser.add_argument("url", help="Post, reel or video URL")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every strategy attempt")
    parser.add_argument("--loose-instagram", action="store_true", help="Accept any instagram.com URL, not only posts/reels/stories")
    parser.add_argument("--no-api", action="store_true", help="Skip third-party resolver APIs, scrape the page only")
    parser.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds (10-30)")
    return parser


def print_result(result: ResolutionResult):
    meta = result.metadata
    print(f"{Style.BRIGHT}{meta.title}{Style.RESET_ALL}  [{meta.platform.label} {meta.media_kind.label}]")
    if meta.thumbnail:
        print(f"Thumbnail: {meta.thumbnail}")
    print("_" * 70)
    for i, link in enumerate(result.links, start=1):
        print(f"{i:<3} {Fore.GREEN}{link.quality:<12}{Style.RESET_ALL} {link.url}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Windows ANSI support
    colorama_init()

    config = load_config()
    overrides = {}
    if args.loose_instagram:
        overrides["loose_instagram"] = True
    if args.no_api:
        overrides["use_resolver_api"] = False
    if args.timeout is not None:
        overrides["request_timeout"] = args.timeout
    if overrides:
        config = replace(config, **overrides)

    media_service = create_container(config)["media_service"]
    outcome = media_service.resolve(args.url)

    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2))
    elif outcome.ok:
        print_result(outcome)
    else:
        print(f"{Fore.RED}Error: {outcome.message}{Style.RESET_ALL}", file=sys.stderr)

    return 0 if outcome.ok else 1


if __name__ == "__main__":
    sys.exit(main())
