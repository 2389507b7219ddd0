#------------------------------------------------------------
#                            cli.py
#       Parses command-line flags and environment into
#                 a run configuration.

import argparse
import os
import sys
from typing import List, Optional
from dotenv import load_dotenv
from .config import (
    DEFAULT_MAX_COMMITS_PER_REPO,
    DEFAULT_MAX_PRS_PER_REPO,
    DEFAULT_MAX_REPOS,
    DEFAULT_RECOMMENDATION_DISPLAY_LIMIT,
    DEFAULT_TOPCODER_API_URL,
    ENV_AI_ENABLED,
    ENV_EXCLUDE_REPOS,
    ENV_GITHUB_TOKEN,
    ENV_GITHUB_USERNAME,
    ENV_OPENAI_API_KEY,
    ENV_TOPCODER_API_URL,
    env_flag,
    env_list,
    optional_env,
)
from .controller import run_skills_analysis
from .errors import AnalyzerError
from .logger import configure_logging
from .models import AnalyzerConfig


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skills-analyzer",
        description="Recommend catalog skills from a GitHub user's repositories, commits and pull requests.",
    )
    parser.add_argument("--user", help=f"GitHub username (default: ${ENV_GITHUB_USERNAME} or the token owner)")
    parser.add_argument("--max-repos", type=_positive_int, default=DEFAULT_MAX_REPOS, help="Max repositories to analyze")
    parser.add_argument(
        "--max-commits", type=_positive_int, default=DEFAULT_MAX_COMMITS_PER_REPO, help="Max commits per repository"
    )
    parser.add_argument(
        "--max-prs", type=_positive_int, default=DEFAULT_MAX_PRS_PER_REPO, help="Max pull requests per repository"
    )
    parser.add_argument("--include-forks", action="store_true", help="Analyze forked repositories too")
    parser.add_argument(
        "--commit-stats",
        action="store_true",
        help="Fetch per-commit line stats (one extra API call per commit)",
    )
    parser.add_argument("--ai", action="store_true", help="Enable AI verification (needs OPENAI_API_KEY)")
    parser.add_argument(
        "--top", type=_positive_int, default=DEFAULT_RECOMMENDATION_DISPLAY_LIMIT, help="Recommendations to display"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser

# This function does merge parsed flags with environment settings.
# Flags win over environment variables where both apply.
def build_config(args: argparse.Namespace) -> AnalyzerConfig:
    return AnalyzerConfig(
        github_username=(args.user or os.environ.get(ENV_GITHUB_USERNAME, "")).strip(),
        github_token=os.environ.get(ENV_GITHUB_TOKEN, "").strip(),
        topcoder_api_url=optional_env(ENV_TOPCODER_API_URL) or DEFAULT_TOPCODER_API_URL,
        max_repos=args.max_repos,
        max_commits_per_repo=args.max_commits,
        max_prs_per_repo=args.max_prs,
        include_forks=args.include_forks,
        fetch_commit_stats=args.commit_stats,
        ai_enabled=args.ai or env_flag(ENV_AI_ENABLED),
        openai_api_key=optional_env(ENV_OPENAI_API_KEY),
        display_limit=args.top,
        excluded_repos=env_list(ENV_EXCLUDE_REPOS),
    )


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logger = configure_logging(args.verbose)

    try:
        run_skills_analysis(build_config(args))
    except AnalyzerError as exc:
        logger.error("Error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
