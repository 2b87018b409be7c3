import re

_VALID_PART = re.compile(r"^[A-Za-z0-9._-]+$")


def extract_repo_path(repo: str) -> str:
    """
    Normalise a repository reference to 'owner/repo'.

    Accepts a bare slug, an HTTPS URL or an SSH remote. Raises ValueError
    when the input cannot be reduced to two valid path segments.
    """
    text = (repo or "").strip()
    match = re.search(r"github\.com[:/](.+?)(?:\.git)?/?$", text)
    if match:
        text = match.group(1)

    parts = text.strip("/").split("/")
    if len(parts) != 2 or not all(_VALID_PART.match(p) for p in parts):
        raise ValueError(
            f"Cannot parse repository: '{repo}'. Expected 'owner/repo' or a GitHub URL."
        )
    return "/".join(parts)
