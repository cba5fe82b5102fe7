"""Tests for connector extraction from Ballerina sources."""

import pytest

from connector_service.contracts import ProjectLoadError
from connector_service.generator import ConnectorGenerator
from connector_service.generator.source import SourceText, mask, parse_doc
from connector_service.project import ProjectLoader
from connector_service.project.model import Module, Project, ProjectKind


@pytest.fixture
def project(build_project):
    return ProjectLoader().load(build_project)


class TestMask:
    """Comment and string masking."""

    def test_keeps_offsets(self):
        source = 'string s = "a{b}"; // c}\n# d{\nint x = 1;'

        masked = mask(source)

        assert len(masked) == len(source)
        assert "{" not in masked
        assert "}" not in masked
        assert masked.endswith("int x = 1;")

    def test_template_literal(self):
        masked = mask("string p = string `/x/${id}}`;")

        assert "}" not in masked

    def test_escaped_quote(self):
        masked = mask('string s = "say \\"}\\"" ; int y;')

        assert "}" not in masked
        assert masked.endswith("; int y;")


class TestParseDoc:
    """Documentation comment parsing."""

    def test_description_params_and_return(self):
        doc = parse_doc(
            "# Does things.\n"
            "# More detail.\n"
            "#\n"
            "# + a - First\n"
            "#   continued\n"
            "# + return - Result\n"
        )

        assert doc.description == "Does things.\nMore detail."
        assert doc.param_docs == {"a": "First continued"}
        assert doc.return_doc == "Result"

    def test_no_docs(self):
        doc = parse_doc("\n\n")

        assert doc.description is None
        assert doc.param_docs == {}


class TestSummaryMode:
    """Connectors without function details."""

    def test_finds_public_client_classes(self, project):
        connectors = ConnectorGenerator().get_project_connectors(project, detailed=False)

        assert [c.name for c in connectors] == ["Client", "StreamClient"]

    def test_connector_identity(self, project):
        client = ConnectorGenerator().get_project_connectors(project, detailed=False)[0]

        assert client.display_name == "Twitter"
        assert client.icon == "icon.png"
        assert client.display_annotation == {"label": "Twitter", "iconPath": "icon.png"}
        assert client.documentation == "Client for the Twitter API.\nPosts and searches tweets."
        assert client.module_name == "twitter"
        assert client.package.organization == "wso2"
        assert client.package.name == "twitter"
        assert client.package.version == "1.2.0"
        assert client.functions == []

    def test_submodule_connector(self, project):
        stream = ConnectorGenerator().get_project_connectors(project, detailed=False)[1]

        assert stream.module_name == "twitter.stream"
        assert stream.display_name == "StreamClient"
        assert stream.documentation == "Streaming client."

    def test_wire_shape(self, project):
        client = ConnectorGenerator().get_project_connectors(project, detailed=False)[0]

        wire = client.to_wire()

        assert wire["name"] == "Client"
        assert wire["displayName"] == "Twitter"
        assert wire["moduleName"] == "twitter"
        assert wire["package"]["organization"] == "wso2"
        assert "id" not in wire


class TestDetailedMode:
    """Connectors with their function schema."""

    @pytest.fixture
    def client(self, project):
        return ConnectorGenerator().get_project_connectors(project, detailed=True)[0]

    def test_function_selection(self, client):
        """init, remote and resource functions only; helpers are skipped."""
        assert [f.name for f in client.functions] == ["init", "tweet", "users/[string id]"]

    def test_init(self, client):
        init = client.functions[0]

        assert init.qualifiers == ["isolated"]
        assert init.documentation == "Initializes the client."
        assert init.return_type == "error?"
        assert [p.name for p in init.parameters] == ["config", "serviceUrl"]

        config, service_url = init.parameters
        assert config.type_name == "ConnectionConfig"
        assert config.optional is False
        assert config.documentation == "Connection configuration"
        assert service_url.optional is True
        assert service_url.default_value == '"https://api.twitter.com/2"'

    def test_remote_function(self, client):
        tweet = client.functions[1]

        assert tweet.qualifiers == ["remote", "isolated"]
        assert tweet.return_type == "Tweet|error"
        assert tweet.accessor is None

        text, tags = tweet.parameters
        assert (text.name, text.type_name) == ("text", "string")
        assert text.documentation == 'Tweet text, may contain "{braces}"'
        assert (tags.name, tags.type_name, tags.optional) == ("tags", "string...", True)

    def test_resource_function(self, client):
        users = client.functions[2]

        assert users.qualifiers == ["resource", "isolated"]
        assert users.accessor == "get"
        assert users.path == "users/[string id]"
        assert users.return_type == "record {| string name; |}|error"
        assert users.parameters[0].type_name == "map<string>"
        assert users.parameters[0].default_value == "{}"

    def test_function_wire_names(self, client):
        wire = client.to_wire()["functions"][0]

        assert wire["returnType"] == "error?"
        assert wire["parameters"][1]["typeName"] == "string"
        assert wire["parameters"][1]["defaultValue"] == '"https://api.twitter.com/2"'


class TestEdgeCases:
    """Sources the scanner must not trip over."""

    def test_unreadable_source_raises(self, tmp_path):
        missing = tmp_path / "gone.bal"
        project = Project(ProjectKind.SINGLE_FILE, tmp_path, "$anon", "gone", "0.0.0", (Module("gone", (missing,)),))

        with pytest.raises(ProjectLoadError):
            ConnectorGenerator().get_project_connectors(project, detailed=False)

    def test_class_keyword_in_comment_and_string(self, tmp_path):
        source = tmp_path / "main.bal"
        source.write_text(
            '// public client class Fake {\n'
            'string s = "public client class AlsoFake {";\n'
            'public client class Real {\n'
            '}\n'
        )

        project = ProjectLoader().load(source)
        connectors = ConnectorGenerator().get_project_connectors(project, detailed=True)

        assert [c.name for c in connectors] == ["Real"]
        assert connectors[0].functions == []

    def test_external_function(self, tmp_path):
        source = tmp_path / "native.bal"
        source.write_text(
            "public isolated client class Native {\n"
            "    remote isolated function call(string name) returns int = @java:Method {\n"
            "        'class: \"io.example.Native\"\n"
            "    } external;\n"
            "}\n"
        )

        project = ProjectLoader().load(source)
        native = ConnectorGenerator().get_project_connectors(project, detailed=True)[0]

        assert native.functions[0].name == "call"
        assert native.functions[0].return_type == "int"

    def test_depth_tracking(self):
        text = SourceText("a { b { c } d }")

        assert text.depth(0) == 0
        assert text.depth(text.raw.index("c")) == 2
        assert text.matching(2) == len(text.raw) - 1
