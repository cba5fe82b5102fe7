"""Sample Ballerina sources and project builders for tests."""

import json
from pathlib import Path

TWITTER_SOURCE = '''import ballerina/http;

# Client for the Twitter API.
# Posts and searches tweets.
@display {label: "Twitter", iconPath: "icon.png"}
public isolated client class Client {
    final http:Client clientEp;

    # Initializes the client.
    #
    # + config - Connection configuration
    # + serviceUrl - URL of the target service
    # + return - An error if initialization failed
    public isolated function init(ConnectionConfig config, string serviceUrl = "https://api.twitter.com/2") returns error? {
        self.clientEp = check new (serviceUrl, {timeout: 30});
    }

    # Post a tweet.
    #
    # + text - Tweet text, may contain "{braces}"
    # + tags - Hashtags
    # + return - The created tweet
    remote isolated function tweet(@display {label: "Text"} string text, string... tags) returns Tweet|error {
        // a comment with a } brace
        string path = string `/tweets/${text}}`;
        return self.clientEp->post(path, {text: text});
    }

    # Get a user.
    #
    # + id - User id
    resource isolated function get users/[string id](map<string> headers = {}) returns record {| string name; |}|error {
        return self.clientEp->get(string `/users/${id}`);
    }

    isolated function helper() returns string {
        return "}";
    }
}

# Not a connector.
public class Tweet {
    string text = "";
}

client class Hidden {
    remote function ping() {
    }
}
'''

STREAM_SOURCE = '''# Streaming client.
public client class StreamClient {
    remote function open(string topic) returns error? {
    }
}
'''


def write_build_project(root: Path, org: str = "wso2", name: str = "twitter", version: str = "1.2.0") -> Path:
    """Create a build project with a default module and a `stream` submodule."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "Ballerina.toml").write_text(
        f'[package]\norg = "{org}"\nname = "{name}"\nversion = "{version}"\n'
    )
    (root / "client.bal").write_text(TWITTER_SOURCE)
    sub = root / "modules" / "stream"
    sub.mkdir(parents=True)
    (sub / "stream.bal").write_text(STREAM_SOURCE)
    return root


def write_bala(cache: Path, org: str, name: str, version: str, platform: str = "any") -> Path:
    """Create an extracted bala in a bala cache directory."""
    root = cache / org / name / version / platform
    module_dir = root / "modules" / name
    module_dir.mkdir(parents=True)
    (root / "package.json").write_text(
        json.dumps({"organization": org, "name": name, "version": version})
    )
    (module_dir / "client.bal").write_text(TWITTER_SOURCE)
    return root


class FakeRegistryClient:
    """In-memory registry client; records calls and whether it was closed."""

    def __init__(self, registry: "FakeRegistry") -> None:
        self.registry = registry
        self.closed = False

    async def __aenter__(self) -> "FakeRegistryClient":
        return self

    async def __aexit__(self, *args) -> None:
        self.closed = True

    async def search_connectors(self, query, platform, tool_version):
        return self._answer("search", (query, platform, tool_version), self.registry.search)

    async def get_connector_by_id(self, connector_id, platform, tool_version):
        return self._answer("by_id", (connector_id, platform, tool_version), self.registry.by_id)

    async def get_connector_by_fqn(self, info, platform, tool_version):
        return self._answer("by_fqn", (info, platform, tool_version), self.registry.by_fqn)

    def _answer(self, kind, args, value):
        self.registry.calls.append((kind, *args))
        if self.registry.error is not None:
            raise self.registry.error
        return value


class FakeRegistry:
    """Client factory handing out a fresh FakeRegistryClient per call."""

    def __init__(self, search=None, by_id=None, by_fqn=None, error=None) -> None:
        self.search = search if search is not None else {"connectors": [], "count": 0}
        self.by_id = by_id
        self.by_fqn = by_fqn
        self.error = error
        self.calls: list[tuple] = []
        self.clients: list[FakeRegistryClient] = []

    def __call__(self, settings) -> FakeRegistryClient:
        client = FakeRegistryClient(self)
        self.clients.append(client)
        return client
