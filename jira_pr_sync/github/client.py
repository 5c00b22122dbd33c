"""Sets up the authenticated githubkit client."""

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy


async def get_github_token_client(github_token: str, github_api_url: str) -> GitHub[TokenAuthStrategy]:
    """Returns an authenticated GitHub client using the workflow's token.

    Supports a custom base URL for GitHub Enterprise Server (GHES).
    """
    if not github_token:
        raise RuntimeError("GitHub authentication requires a github-token input.")
    # Disable HTTP caching to always get fresh data
    return GitHub(auth=TokenAuthStrategy(github_token), base_url=github_api_url, http_cache=False)
