import json

from utils.payload import matches_branch

REPO = "paunstefan/test_repo"
BRANCH = "refs/heads/main"

def push_body(ref=BRANCH, full_name=REPO):
    return json.dumps({
        "ref": ref,
        "before": "5a837f4",
        "after": "4c38a65",
        "repository": {"name": "test_repo", "full_name": full_name},
        "pusher": {"name": "paunstefan"},
    })

def test_matching_push():
    assert matches_branch(push_body(), REPO, BRANCH)

def test_other_branch():
    assert not matches_branch(push_body(ref="refs/heads/dev"), REPO, BRANCH)

def test_other_repository():
    assert not matches_branch(push_body(full_name="someone/else"), REPO, BRANCH)

def test_comparison_is_exact():
    assert not matches_branch(push_body(ref="main"), REPO, BRANCH)
    assert not matches_branch(push_body(full_name=REPO.upper()), REPO, BRANCH)
    assert not matches_branch(push_body(ref=BRANCH + " "), REPO, BRANCH)

def test_missing_fields():
    assert not matches_branch(json.dumps({"repository": {"full_name": REPO}}), REPO, BRANCH)
    assert not matches_branch(json.dumps({"ref": BRANCH}), REPO, BRANCH)
    assert not matches_branch(json.dumps({"ref": BRANCH, "repository": {}}), REPO, BRANCH)
    assert not matches_branch(json.dumps({"ref": BRANCH, "repository": REPO}), REPO, BRANCH)

def test_non_string_values():
    assert not matches_branch(json.dumps({"ref": None, "repository": {"full_name": REPO}}), REPO, BRANCH)
    assert not matches_branch(json.dumps({"ref": BRANCH, "repository": {"full_name": 1}}), REPO, BRANCH)

def test_malformed_payload():
    assert not matches_branch("", REPO, BRANCH)
    assert not matches_branch("{not json", REPO, BRANCH)
    assert not matches_branch("[1, 2, 3]", REPO, BRANCH)
    assert not matches_branch("null", REPO, BRANCH)

def test_deeply_nested_payload():
    body = "[" * 200000 + "]" * 200000
    assert not matches_branch(body, REPO, BRANCH)
    body = '{"a":' * 200000 + "1" + "}" * 200000
    assert not matches_branch(body, REPO, BRANCH)
