"""Unit tests for the JSON-RPC clients.

Requests are served by ``httpx.MockTransport`` so no network is used.
"""

import base64
import json

import httpx
import pytest

from explorer_api.clients.base_client import JsonRpcHttpClient, unwrap_envelope
from explorer_api.clients.bitcoin_rpc import BitcoinCoreClient
from explorer_api.clients.solana_rpc import SolanaRpcClient
from explorer_api.config import CoreRpcConfig, SolanaConfig
from explorer_api.utils.errors import RpcConnectionError, RpcError

RPC_URL = "https://rpc.example.com"


def make_http_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def result_handler(result, seen=None):
    """Handler answering every request with ``result``, recording request bodies."""
    def handler(request):
        body = json.loads(request.content)
        if seen is not None:
            seen.append(body)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})
    return handler


@pytest.fixture
def solana_config():
    return SolanaConfig(rpc_url=RPC_URL, commitment="confirmed", timeout=5)


def test_unwrap_envelope_result():
    assert unwrap_envelope({"jsonrpc": "2.0", "id": 1, "result": 0}, "getBalance") == 0


def test_unwrap_envelope_error():
    with pytest.raises(RpcError) as excinfo:
        unwrap_envelope({"error": {"code": -32602, "message": "Invalid param"}}, "getBalance")

    assert excinfo.type is RpcError
    assert excinfo.value.message == "Invalid param"
    assert excinfo.value.rpc_code == -32602
    assert excinfo.value.method == "getBalance"


@pytest.mark.parametrize("body", [None, [], "text", {"jsonrpc": "2.0", "id": 1}])
def test_unwrap_envelope_malformed(body):
    with pytest.raises(RpcConnectionError):
        unwrap_envelope(body, "getBalance")


@pytest.mark.asyncio
async def test_call_builds_jsonrpc_payload():
    seen = []
    async with make_http_client(result_handler("ok", seen)) as http_client:
        client = JsonRpcHttpClient(RPC_URL, http_client=http_client)
        assert await client.call("getHealth") == "ok"
        assert await client.call("getSlot", [{"commitment": "finalized"}]) == "ok"

    assert seen[0] == {"jsonrpc": "2.0", "id": 1, "method": "getHealth", "params": []}
    assert seen[1]["id"] == 2
    assert seen[1]["params"] == [{"commitment": "finalized"}]


@pytest.mark.asyncio
async def test_call_keeps_remote_error_message():
    def handler(request):
        return httpx.Response(200, json={
            "jsonrpc": "2.0",
            "id": 1,
            "error": {
                "code": -32002,
                "message": "Transaction simulation failed: Blockhash not found",
                "data": {"logs": []},
            },
        })

    async with make_http_client(handler) as http_client:
        client = JsonRpcHttpClient(RPC_URL, http_client=http_client)
        with pytest.raises(RpcError) as excinfo:
            await client.call("sendTransaction", ["AAAA"])

    assert excinfo.type is RpcError
    assert str(excinfo.value) == "Transaction simulation failed: Blockhash not found"
    assert excinfo.value.rpc_code == -32002
    assert excinfo.value.data == {"logs": []}


@pytest.mark.asyncio
async def test_call_http_error_with_rpc_error_body():
    def handler(request):
        return httpx.Response(429, json={"jsonrpc": "2.0", "id": 1,
                                         "error": {"code": 429, "message": "Too many requests"}})

    async with make_http_client(handler) as http_client:
        client = JsonRpcHttpClient(RPC_URL, http_client=http_client)
        with pytest.raises(RpcError) as excinfo:
            await client.call("getBalance", [])

    assert excinfo.type is RpcError
    assert excinfo.value.message == "Too many requests"


@pytest.mark.asyncio
async def test_call_http_error_without_body():
    async with make_http_client(lambda request: httpx.Response(502, text="Bad Gateway")) as http_client:
        client = JsonRpcHttpClient(RPC_URL, http_client=http_client)
        with pytest.raises(RpcConnectionError) as excinfo:
            await client.call("getBalance", [])

    assert "502" in excinfo.value.message


@pytest.mark.asyncio
async def test_call_non_json_body():
    async with make_http_client(lambda request: httpx.Response(200, text="<html>")) as http_client:
        client = JsonRpcHttpClient(RPC_URL, http_client=http_client)
        with pytest.raises(RpcConnectionError):
            await client.call("getBalance", [])


@pytest.mark.asyncio
async def test_call_connection_refused():
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    async with make_http_client(handler) as http_client:
        client = JsonRpcHttpClient(RPC_URL, http_client=http_client)
        with pytest.raises(RpcConnectionError) as excinfo:
            await client.call("getBalance", [])

    assert "Connection refused" in excinfo.value.message


@pytest.mark.asyncio
async def test_call_timeout():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with make_http_client(handler) as http_client:
        client = JsonRpcHttpClient(RPC_URL, http_client=http_client)
        with pytest.raises(RpcConnectionError) as excinfo:
            await client.call("getBalance", [])

    assert "timed out" in excinfo.value.message


@pytest.mark.asyncio
async def test_close_leaves_injected_client_open():
    http_client = make_http_client(result_handler(1))
    client = JsonRpcHttpClient(RPC_URL, http_client=http_client)
    await client.close()

    assert not http_client.is_closed
    await http_client.aclose()


@pytest.mark.asyncio
async def test_solana_get_balance(solana_config):
    seen = []
    async with make_http_client(result_handler({"context": {"slot": 1}, "value": 2500000000}, seen)) as http_client:
        client = SolanaRpcClient(solana_config, http_client=http_client)
        assert await client.get_balance("addr") == 2500000000

    assert seen[0]["method"] == "getBalance"
    assert seen[0]["params"] == ["addr", {"commitment": "confirmed"}]


@pytest.mark.asyncio
async def test_solana_get_token_accounts_by_owner(solana_config):
    seen = []
    async with make_http_client(result_handler({"context": {"slot": 1}, "value": [{"pubkey": "x"}]}, seen)) as http_client:
        client = SolanaRpcClient(solana_config, http_client=http_client)
        accounts = await client.get_token_accounts_by_owner("owner", "program")

    assert accounts == [{"pubkey": "x"}]
    assert seen[0]["params"][1] == {"programId": "program"}
    assert seen[0]["params"][2]["encoding"] == "jsonParsed"


@pytest.mark.asyncio
async def test_solana_get_transaction_params(solana_config):
    seen = []
    async with make_http_client(result_handler(None, seen)) as http_client:
        client = SolanaRpcClient(solana_config, http_client=http_client)
        assert await client.get_transaction("sig") is None

    options = seen[0]["params"][1]
    assert options["encoding"] == "jsonParsed"
    assert options["maxSupportedTransactionVersion"] == 0


@pytest.mark.asyncio
async def test_solana_get_latest_blockhash(solana_config):
    value = {"blockhash": "hash", "lastValidBlockHeight": 10}
    async with make_http_client(result_handler({"context": {"slot": 1}, "value": value})) as http_client:
        client = SolanaRpcClient(solana_config, http_client=http_client)
        assert await client.get_latest_blockhash() == value


@pytest.mark.asyncio
async def test_solana_send_raw_transaction_encodes_base64(solana_config):
    seen = []
    async with make_http_client(result_handler("sig", seen)) as http_client:
        client = SolanaRpcClient(solana_config, http_client=http_client)
        assert await client.send_raw_transaction(b"\x01\x02\x03") == "sig"

    assert seen[0]["method"] == "sendTransaction"
    assert seen[0]["params"][0] == base64.b64encode(b"\x01\x02\x03").decode()
    assert seen[0]["params"][1]["encoding"] == "base64"


@pytest.mark.asyncio
async def test_solana_get_signature_status(solana_config):
    status = {"slot": 5, "confirmations": None, "err": None, "confirmationStatus": "finalized"}
    async with make_http_client(result_handler({"context": {"slot": 6}, "value": [status]})) as http_client:
        client = SolanaRpcClient(solana_config, http_client=http_client)
        assert await client.get_signature_status("sig") == status


@pytest.mark.asyncio
async def test_solana_get_signature_status_unknown(solana_config):
    async with make_http_client(result_handler({"context": {"slot": 6}, "value": [None]})) as http_client:
        client = SolanaRpcClient(solana_config, http_client=http_client)
        assert await client.get_signature_status("sig") is None


@pytest.mark.asyncio
async def test_bitcoin_client_uses_basic_auth_and_jsonrpc_1():
    seen_requests = []

    def handler(request):
        seen_requests.append(request)
        body = json.loads(request.content)
        return httpx.Response(200, json={"result": {"chain": "main", "blocks": 1}, "error": None, "id": body["id"]})

    config = CoreRpcConfig(host="127.0.0.1", port=8332, username="user", password="secret")
    async with make_http_client(handler) as http_client:
        client = BitcoinCoreClient(config, http_client=http_client)
        info = await client.get_blockchain_info()

    assert info == {"chain": "main", "blocks": 1}
    request = seen_requests[0]
    assert request.url.host == "127.0.0.1"
    assert request.url.port == 8332
    assert request.headers["authorization"].startswith("Basic ")
    body = json.loads(request.content)
    assert body["jsonrpc"] == "1.0"
    assert body["method"] == "getblockchaininfo"
