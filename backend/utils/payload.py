import json

def matches_branch(raw_body: str, expected_repo: str, expected_branch: str) -> bool:
    """Check that a push payload targets the configured repository and branch.

    Comparison is exact: no case folding, no stripping of "refs/heads/".
    Anything that is not a JSON object with both fields counts as a mismatch.
    """
    try:
        payload = json.loads(raw_body)
    except (ValueError, RecursionError):
        # RecursionError: nesting deeper than the interpreter's stack allows
        return False

    if not isinstance(payload, dict):
        return False

    branch = payload.get("ref")
    repository = payload.get("repository")
    if not isinstance(repository, dict):
        return False
    repo = repository.get("full_name")

    return (
        isinstance(repo, str) and isinstance(branch, str)
        and repo == expected_repo and branch == expected_branch
    )
