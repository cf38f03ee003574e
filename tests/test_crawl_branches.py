"""End-to-end tests for the command line entry point."""
import asyncio
import logging
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
import crawl_branches
from branchstats.config import Settings


def make_app(branches) -> web.Application:
    """Fake GitHub API for account ``acme``; ``None`` branches means 404."""
    async def list_repos(request):
        if request.match_info["account"] != "acme":
            return web.json_response({"message": "Not Found"}, status=404)
        return web.json_response([
            {"name": name, "branches_url": f"http://{request.host}/repos/acme/{name}/branches{{/branch}}"}
            for name in branches
        ])

    async def list_branches(request):
        names = branches[request.match_info["repo"]]
        if names is None:
            return web.json_response({"message": "Not Found"}, status=404)
        return web.json_response([{"name": name} for name in names])

    app = web.Application()
    app.router.add_get("/users/{account}/repos", list_repos)
    app.router.add_get("/repos/acme/{repo}/branches", list_branches)
    return app


def run_main(app: web.Application, account: str = "acme", **overrides) -> int:
    async def runner():
        async with TestServer(app) as server:
            settings = Settings(
                account=account,
                api_url=f"http://{server.host}:{server.port}",
                **overrides
            )
            return await crawl_branches.main(settings)

    return asyncio.run(runner())


def test_failed_repository_is_skipped(capsys, caplog):
    """Test repository b failing leaves a 100% report over repository a."""
    app = make_app({"a": ["main", "dev"], "b": None})

    with caplog.at_level(logging.ERROR):
        exit_code = run_main(app)

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == [
        "Repository [a] branches: [main, dev]",
        "",
        "Percentages",
        "Branch [main] present in 100.00% of valid repositories",
        "Branch [dev] present in 100.00% of valid repositories",
    ]
    assert "Error in repository [b]: Not Found" in caplog.text


def test_shared_branches_sorted(capsys):
    """Test percentages for a branch shared by both repositories."""
    app = make_app({"a": ["main", "feature"], "b": ["main"]})

    exit_code = run_main(app, sort_results=True)

    out = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert out[:2] == [
        "Repository [a] branches: [main, feature]",
        "Repository [b] branches: [main]",
    ]
    assert out[2:] == [
        "",
        "Percentages",
        "Branch [feature] present in 50.00% of valid repositories",
        "Branch [main] present in 100.00% of valid repositories",
    ]


def test_unknown_account_exits_non_zero(capsys, caplog):
    """Test a failed repository listing is fatal."""
    with caplog.at_level(logging.ERROR):
        exit_code = run_main(make_app({}), account="nobody")

    assert exit_code == 1
    assert capsys.readouterr().out == ""
    assert "Could not list repositories of nobody: Not Found" in caplog.text


def test_run_rejects_invalid_configuration(monkeypatch):
    """Test invalid settings stop the process before any request."""
    monkeypatch.setenv("MAX_CONCURRENCY", "lots")

    with pytest.raises(SystemExit) as excinfo:
        crawl_branches.run()

    assert excinfo.value.code == 1
