"""Tests for the kt command-line tool."""

import json

import httpx
import pytest

from kinesis_client import cli
from kinesis_client.client import KinesisClient
from kinesis_client.config import Settings

CREDENTIALS = [
    "-k", "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
    "-i", "AKIDEXAMPLE",
    "-r", "us-east-1",
    "-e", "kinesis.us-east-1.amazonaws.com",
]


@pytest.fixture
def cli_env(monkeypatch, test_settings, fixed_timestamp):
    """Run the CLI against a mock transport with an empty settings source."""
    requests = []
    responses = []
    client_kwargs = []

    def handler(request):
        requests.append(request)
        if responses:
            return responses.pop(0)
        return httpx.Response(200, json={"StreamNames": ["test-stream"], "HasMoreStreams": False})

    def make_client(context, verify_ssl=None):
        client_kwargs.append({"verify_ssl": verify_ssl})
        return KinesisClient(
            context=context,
            config=test_settings,
            http_client=httpx.Client(transport=httpx.MockTransport(handler)),
            clock=lambda: fixed_timestamp,
        )

    empty_settings = Settings(
        _env_file=None,
        AWS_SECRET_ACCESS_KEY=None,
        AWS_ACCESS_KEY_ID=None,
        AWS_SESSION_TOKEN=None,
        AWS_REGION="us-east-1",
        KINESIS_ENDPOINT=None,
    )
    monkeypatch.setattr(cli, "settings", empty_settings)
    monkeypatch.setattr(cli, "KinesisClient", make_client)
    monkeypatch.setattr(cli, "configure_logging", lambda level=None, fmt=None: None)

    return {"requests": requests, "responses": responses, "client_kwargs": client_kwargs}


def test_list_streams(cli_env, capsys):
    """Test -L prints the body and exits 0."""
    code = cli.main(["-L"] + CREDENTIALS)

    assert code == 0
    assert cli_env["requests"][0].headers["x-amz-target"] == "Kinesis_20131202.ListStreams"
    assert "test-stream" in capsys.readouterr().err
    assert cli_env["client_kwargs"] == [{"verify_ssl": None}]


def test_describe_stream(cli_env):
    """Test -D sends the stream name."""
    code = cli.main(["-D", "-s", "test-stream"] + CREDENTIALS)

    assert code == 0
    assert cli_env["requests"][0].content == b'{"StreamName":"test-stream"}'


def test_put_text(cli_env):
    """Test -P with -x sends a single PutRecord."""
    code = cli.main(["-P", "-s", "test-stream", "-p", "pk", "-x", "hello world"] + CREDENTIALS)

    assert code == 0
    request = cli_env["requests"][0]
    assert request.headers["x-amz-target"] == "Kinesis_20131202.PutRecord"
    assert json.loads(request.content)["Data"] == "aGVsbG8gd29ybGQ="


def test_put_file_and_text_batch(cli_env, tmp_path):
    """Test several payloads are batched in command-line order."""
    data_file = tmp_path / "record.bin"
    data_file.write_bytes(b"\x00\x01binary")

    code = cli.main(
        ["-P", "-s", "test-stream", "-p", "a", "-f", str(data_file), "-x", "two", "-x", "three"] + CREDENTIALS
    )

    assert code == 0
    request = cli_env["requests"][0]
    assert request.headers["x-amz-target"] == "Kinesis_20131202.PutRecords"
    body = json.loads(request.content)
    assert [r["PartitionKey"] for r in body["Records"]] == ["a", "a", "a"]
    assert [r["Data"] for r in body["Records"]] == ["AAFiaW5hcnk=", "dHdv", "dGhyZWU="]


def test_put_missing_file(cli_env, tmp_path, capsys):
    """Test an unreadable file is reported before any request."""
    code = cli.main(["-P", "-s", "test-stream", "-p", "pk", "-f", str(tmp_path / "missing")] + CREDENTIALS)

    assert code == 1
    assert cli_env["requests"] == []
    assert "Cannot open file" in capsys.readouterr().err


def test_session_token_flag(cli_env):
    """Test -t adds the security token header."""
    cli.main(["-L", "-t", "session-token"] + CREDENTIALS)

    assert cli_env["requests"][0].headers["x-amz-security-token"] == "session-token"


def test_insecure_flag(cli_env):
    """Test --insecure disables TLS verification."""
    cli.main(["-L", "--insecure"] + CREDENTIALS)

    assert cli_env["client_kwargs"] == [{"verify_ssl": False}]


def test_api_error_prints_headers_and_body(cli_env, capsys, mock_resource_not_found_body):
    """Test non-200 output includes header text and body."""
    cli_env["responses"].append(httpx.Response(400, content=mock_resource_not_found_body.encode("utf-8")))

    code = cli.main(["-D", "-s", "missing-stream"] + CREDENTIALS)

    assert code == 1
    err = capsys.readouterr().err
    assert "HTTP/1.1 400 Bad Request" in err
    assert "ResourceNotFoundException" in err


def test_transport_error_prints_message(cli_env, capsys, monkeypatch):
    """Test status 0 prints the transport error message."""
    def fail(request):
        raise httpx.ConnectError("Connection refused", request=request)

    cli_env["responses"].clear()
    monkeypatch.setattr(
        cli,
        "KinesisClient",
        lambda context, verify_ssl=None: KinesisClient(
            context=context,
            http_client=httpx.Client(transport=httpx.MockTransport(fail)),
        ),
    )

    code = cli.main(["-L"] + CREDENTIALS)

    assert code == 1
    assert "Connection refused" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["-L", "-D"] + CREDENTIALS,
        ["-L", "-i", "AKIDEXAMPLE", "-r", "us-east-1", "-e", "kinesis.us-east-1.amazonaws.com"],
        ["-L", "-k", "secret", "-r", "us-east-1", "-e", "kinesis.us-east-1.amazonaws.com"],
        ["-D"] + CREDENTIALS,
        ["-P", "-p", "pk", "-x", "data"] + CREDENTIALS,
        ["-P", "-s", "test-stream", "-x", "data"] + CREDENTIALS,
        ["-P", "-s", "test-stream", "-p", "pk"] + CREDENTIALS,
    ],
)
def test_usage_errors_exit_1(cli_env, capsys, argv):
    """Test missing or conflicting arguments print usage and exit 1."""
    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)

    assert exc_info.value.code == 1
    assert "usage:" in capsys.readouterr().err
    assert cli_env["requests"] == []
