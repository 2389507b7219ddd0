import requests

from skills_analyzer.models import AnalyzerConfig, CommitRecord, PullRequestRecord, Repository
from skills_analyzer.services.github_service import GitHubService
from skills_analyzer.services.rate_limiter import RateLimiter


def _service(config, session):
    return GitHubService(config, RateLimiter(sleep=lambda _: None), session=session)


def _raw_repo(name, language="Python", fork=False):
    return {
        "name": name,
        "owner": {"login": "octo"},
        "language": language,
        "fork": fork,
        "html_url": f"https://github.com/octo/{name}",
        "stargazers_count": 2,
        "forks_count": 1,
        "pushed_at": "2026-01-01T00:00:00Z",
    }


def test_headers_include_token(config, session):
    service = _service(config, session)
    assert service.headers()["Authorization"] == "Bearer token-123"
    assert session.headers["Accept"] == "application/vnd.github+json"


def test_headers_without_token(session):
    service = _service(AnalyzerConfig(github_username="octo", github_token=""), session)
    assert "Authorization" not in service.headers()


def test_list_repositories_uses_authenticated_endpoint(config, session, fake_response):
    session.get.side_effect = [
        fake_response({"login": "Octo"}),
        fake_response([_raw_repo("api"), _raw_repo("fork", fork=True)]),
    ]
    service = _service(config, session)

    repos = service.list_repositories("octo")

    assert repos[0] == Repository(
        name="api",
        owner="octo",
        declared_language="Python",
        is_fork=False,
        html_url="https://github.com/octo/api",
        stars=2,
        forks=1,
        pushed_at="2026-01-01T00:00:00Z",
    )
    assert repos[1].is_fork is True
    url = session.get.call_args[0][0]
    assert url == "https://api.github.com/user/repos"
    assert service.api_call_count == 2


def test_list_repositories_public_endpoint_without_token(session, fake_response):
    session.get.return_value = fake_response([])
    service = _service(AnalyzerConfig(github_username="octo", github_token=""), session)

    assert service.list_repositories("octo") == []
    assert session.get.call_args[0][0] == "https://api.github.com/users/octo/repos"


def test_list_repositories_pages_until_short_page(config, session, fake_response):
    full_page = [_raw_repo(f"r{i}") for i in range(100)]
    session.get.side_effect = [
        fake_response({"login": "octo"}),
        fake_response(full_page),
        fake_response([_raw_repo("last")]),
    ]
    service = _service(config, session)

    repos = service.list_repositories("octo")

    assert len(repos) == 101
    assert session.get.call_count == 3
    assert session.get.call_args[1]["params"]["page"] == 2


def test_list_repositories_failure_returns_empty(config, session, fake_response):
    session.get.return_value = fake_response({"message": "Bad credentials"}, status_code=401)
    assert _service(config, session).list_repositories("octo") == []


def test_list_repositories_for_other_user_with_token(config, session, fake_response):
    session.get.side_effect = [fake_response({"login": "octo"}), fake_response([_raw_repo("lib")])]
    service = _service(config, session)

    repos = service.list_repositories("alice")

    assert [repo.name for repo in repos] == ["lib"]
    url = session.get.call_args[0][0]
    assert url == "https://api.github.com/users/alice/repos"
    assert session.get.call_args[1]["params"]["type"] == "owner"


def test_token_owner_login_is_fetched_once(config, session, fake_response):
    session.get.return_value = fake_response({"login": "octo"})
    service = _service(config, session)

    assert service.is_token_owner("OCTO") is True
    assert service.is_token_owner("alice") is False
    assert session.get.call_count == 1


def test_token_owner_unknown_when_profile_fails(config, session, fake_response):
    session.get.return_value = fake_response({"message": "Bad credentials"}, status_code=401)
    assert _service(config, session).is_token_owner("octo") is False


def test_no_token_never_owner(session):
    service = _service(AnalyzerConfig(github_username="octo", github_token=""), session)
    assert service.is_token_owner("octo") is False
    session.get.assert_not_called()


def test_get_language_bytes(config, session, fake_response):
    session.get.return_value = fake_response({"Python": 1200, "Shell": 40, "Bad": "x"})
    assert _service(config, session).get_language_bytes("octo", "api") == {"Python": 1200, "Shell": 40}
    assert session.get.call_args[0][0] == "https://api.github.com/repos/octo/api/languages"


def test_get_language_bytes_failure_is_empty(config, session):
    session.get.side_effect = requests.Timeout("slow")
    assert _service(config, session).get_language_bytes("octo", "api") == {}


def test_list_commits_respects_limit(config, session, fake_response):
    raw = [
        {"sha": f"s{i}", "commit": {"author": {"date": "2026-02-01T10:00:00Z"}}}
        for i in range(100)
    ]
    session.get.return_value = fake_response(raw)
    commits = _service(config, session).list_commits("octo", "api", 5)

    assert len(commits) == 5
    assert commits[0] == CommitRecord(sha="s0", date="2026-02-01T10:00:00Z")
    assert session.get.call_count == 1


def test_list_commits_fetches_stats_when_enabled(session, fake_response):
    config = AnalyzerConfig(github_username="octo", github_token="t", fetch_commit_stats=True)
    session.get.side_effect = [
        fake_response([{"sha": "abc", "commit": {"author": {"date": "2026-02-01T10:00:00Z"}}}]),
        fake_response({"sha": "abc", "stats": {"additions": 12, "deletions": 3, "total": 15}}),
    ]

    commits = _service(config, session).list_commits("octo", "api", 10)

    assert commits == [CommitRecord(sha="abc", date="2026-02-01T10:00:00Z", additions=12, deletions=3)]
    assert session.get.call_args[0][0] == "https://api.github.com/repos/octo/api/commits/abc"


def test_list_commits_empty_repository_conflict(config, session, fake_response):
    session.get.return_value = fake_response({"message": "Git Repository is empty."}, status_code=409)
    assert _service(config, session).list_commits("octo", "empty", 10) == []


def test_list_pull_requests(config, session, fake_response):
    session.get.return_value = fake_response([{"number": 4, "user": {"login": "octo"}}, {"number": 5}])
    pulls = _service(config, session).list_pull_requests("octo", "api", 30)

    assert pulls == [PullRequestRecord(number=4, author="octo"), PullRequestRecord(number=5, author="Unknown")]
    assert session.get.call_args[1]["params"]["state"] == "all"


def test_zero_limit_makes_no_calls(config, session):
    service = _service(config, session)
    assert service.list_commits("octo", "api", 0) == []
    assert service.list_pull_requests("octo", "api", 0) == []
    session.get.assert_not_called()


def test_rate_limit_headers_update_limiter(config, session, fake_response):
    session.get.return_value = fake_response({}, headers={"X-RateLimit-Remaining": "42"})
    service = _service(config, session)
    service.get_language_bytes("octo", "api")
    assert service.rate_limiter.remaining == 42
