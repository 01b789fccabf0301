import base64
import json

import httpx
import pytest
import respx
from httpx import Response

from app.integrations.github import GitHubClient
from tests.factories import API, OWNER, REPO


@pytest.fixture
def client():
    return GitHubClient("test-token")


@pytest.mark.asyncio
async def test_list_open_pull_requests(client, pull_request_data):
    with respx.mock:
        route = respx.get(f"{API}/pulls").mock(
            return_value=Response(200, json=[pull_request_data()])
        )

        pulls = await client.list_open_pull_requests(OWNER, REPO, "master")

        assert pulls[0]["number"] == 42
        request = route.calls.last.request
        assert request.url.params["state"] == "open"
        assert request.url.params["base"] == "master"
        assert request.url.params["sort"] == "updated"
        assert request.headers["Authorization"] == "token test-token"


@pytest.mark.asyncio
async def test_list_open_pull_requests_follows_next_link(client, pull_request_data):
    next_page = f"{API}/pulls?state=open&base=master&per_page=100&page=2"
    with respx.mock:
        route = respx.get(f"{API}/pulls").mock(
            side_effect=[
                Response(
                    200,
                    json=[pull_request_data(number=n) for n in range(1, 101)],
                    headers={"Link": f'<{next_page}>; rel="next", <{next_page}>; rel="last"'},
                ),
                Response(200, json=[pull_request_data(number=142)]),
            ]
        )

        pulls = await client.list_open_pull_requests(OWNER, REPO, "master")

        assert len(pulls) == 101
        assert pulls[-1]["number"] == 142
        assert route.call_count == 2
        assert route.calls.last.request.url.params["page"] == "2"


@pytest.mark.asyncio
async def test_list_failure_raises(client):
    with respx.mock:
        respx.get(f"{API}/pulls").mock(return_value=Response(502))

        with pytest.raises(httpx.HTTPStatusError):
            await client.list_open_pull_requests(OWNER, REPO, "master")


@pytest.mark.asyncio
async def test_fetch_pr_history(client, bot_commit):
    with respx.mock:
        respx.get(f"{API}/pulls/42/commits").mock(return_value=Response(200, json=[bot_commit]))
        respx.get(f"{API}/pulls/42/comments").mock(return_value=Response(200, json=[]))
        respx.get(f"{API}/pulls/42/reviews").mock(
            return_value=Response(200, json=[{"id": 1, "state": "COMMENTED"}])
        )

        history = await client.fetch_pr_history(OWNER, REPO, 42)

        assert len(history.commits) == 1
        assert history.comments == []
        assert len(history.reviews) == 1
        assert history.first_commit_author == "dependabot[bot]"
        assert not history.is_untouched


@pytest.mark.asyncio
async def test_approve_pull_request(client):
    with respx.mock:
        route = respx.post(f"{API}/pulls/42/reviews").mock(
            return_value=Response(200, json={"id": 80, "state": "APPROVED"})
        )

        await client.approve_pull_request(OWNER, REPO, 42)

        assert json.loads(route.calls.last.request.content) == {"event": "APPROVE"}


@pytest.mark.asyncio
async def test_merge_pull_request(client):
    with respx.mock:
        route = respx.put(f"{API}/pulls/42/merge").mock(
            return_value=Response(200, json={"merged": True, "message": "Pull Request successfully merged"})
        )

        merged = await client.merge_pull_request(OWNER, REPO, 42, sha="abc", merge_method="squash")

        assert merged is True
        body = json.loads(route.calls.last.request.content)
        assert body == {"merge_method": "squash", "sha": "abc"}


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [405, 409])
async def test_refused_merge_returns_false(client, status):
    with respx.mock:
        respx.put(f"{API}/pulls/42/merge").mock(
            return_value=Response(status, json={"message": "Pull Request is not mergeable"})
        )

        assert await client.merge_pull_request(OWNER, REPO, 42) is False


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [403, 422, 500, 502])
async def test_failed_merge_returns_false(client, status):
    with respx.mock:
        respx.put(f"{API}/pulls/42/merge").mock(
            return_value=Response(status, json={"message": "Resource not accessible by integration"})
        )

        assert await client.merge_pull_request(OWNER, REPO, 42) is False


@pytest.mark.asyncio
async def test_merge_connection_error_returns_false(client):
    with respx.mock:
        respx.put(f"{API}/pulls/42/merge").mock(side_effect=httpx.ConnectError("connection refused"))

        assert await client.merge_pull_request(OWNER, REPO, 42) is False


@pytest.mark.asyncio
async def test_create_deployment(client):
    with respx.mock:
        route = respx.post(f"{API}/deployments").mock(
            return_value=Response(201, json={"id": 1, "environment": "production"})
        )

        deployment = await client.create_deployment(
            OWNER, REPO, ref="abc", environment="production", payload={"pull_number": 42}
        )

        assert deployment["id"] == 1
        body = json.loads(route.calls.last.request.content)
        assert body["ref"] == "abc"
        assert body["auto_merge"] is False
        assert body["payload"] == {"pull_number": 42}


@pytest.mark.asyncio
async def test_get_file_contents(client):
    content = base64.b64encode(b'{"name": "webapp"}').decode()
    with respx.mock:
        route = respx.get(f"{API}/contents/package.json").mock(
            return_value=Response(200, json={"encoding": "base64", "content": content})
        )

        text = await client.get_file_contents(OWNER, REPO, "package.json", "master")

        assert json.loads(text) == {"name": "webapp"}
        assert route.calls.last.request.url.params["ref"] == "master"


@pytest.mark.asyncio
async def test_get_missing_file_returns_none(client):
    with respx.mock:
        respx.get(f"{API}/contents/frontend/package.json").mock(return_value=Response(404))

        assert await client.get_file_contents(OWNER, REPO, "frontend/package.json", "master") is None
