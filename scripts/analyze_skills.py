#!/usr/bin/env python3
"""
Recommend skills from a GitHub profile.

Fetches the user's repositories, commits and pull requests, estimates
per-language contribution volume, matches languages against the standardized
skill catalog and prints confidence-scored recommendations.

Environment variables:
  GITHUB_TOKEN: Personal access token (private repos, higher rate limit)
  GITHUB_USERNAME: GitHub username (default: the token owner)
  TOPCODER_API_URL: Skill catalog base URL
  OPENAI_API_KEY / AI_ENABLED: Optional AI verification
  EXCLUDE_REPOS: Comma-separated list of repo names to skip
"""

import sys

from skills_analyzer.cli import main


if __name__ == "__main__":
    sys.exit(main())
