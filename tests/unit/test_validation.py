"""Unit tests for address and signature validation."""

import base64

import base58
import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from explorer_api.constants import SYSTEM_PROGRAM_ID, TOKEN_PROGRAM_ID
from explorer_api.utils.errors import DecodeError, InvalidPublicKeyError
from explorer_api.utils.validation import (
    decode_signature,
    is_valid_address,
    require_address,
    validate_transaction_signature,
    verify_signature,
)

MESSAGE = "Sign in to the explorer"


@pytest.fixture
def signer():
    return Keypair.from_seed(bytes([3] * 32))


@pytest.fixture
def signature_bytes(signer):
    return bytes(signer.sign_message(MESSAGE.encode("utf-8")))


@pytest.mark.parametrize("address", [SYSTEM_PROGRAM_ID, TOKEN_PROGRAM_ID])
def test_is_valid_address_accepts_known_addresses(address):
    assert is_valid_address(address) is True


def test_is_valid_address_accepts_generated_pubkey():
    assert is_valid_address(str(Keypair().pubkey()))


@pytest.mark.parametrize("address", [
    "invalid-address",
    "",
    "0OIl",  # characters outside the base58 alphabet
    base58.b58encode(bytes(31)).decode(),
    base58.b58encode(bytes(33)).decode(),
    SYSTEM_PROGRAM_ID + " ",
    " " + SYSTEM_PROGRAM_ID,
    SYSTEM_PROGRAM_ID + "\n",
    TOKEN_PROGRAM_ID[:20] + " " + TOKEN_PROGRAM_ID[20:],
    None,
    12345,
])
def test_is_valid_address_rejects_bad_input(address):
    assert is_valid_address(address) is False


def test_validate_transaction_signature(signer):
    assert validate_transaction_signature(str(signer.sign_message(b"tx")))
    assert not validate_transaction_signature(SYSTEM_PROGRAM_ID)
    assert not validate_transaction_signature("not-a-signature")
    assert not validate_transaction_signature("")


def test_require_address_returns_pubkey():
    pubkey = require_address(TOKEN_PROGRAM_ID)
    assert isinstance(pubkey, Pubkey)
    assert str(pubkey) == TOKEN_PROGRAM_ID


def test_require_address_raises_with_field_name():
    with pytest.raises(InvalidPublicKeyError) as excinfo:
        require_address("bogus", "sender address")

    assert excinfo.value.message == "Invalid Solana sender address: bogus"
    assert excinfo.value.pubkey == "bogus"
    assert excinfo.value.status_code == 400


def test_require_address_rejects_padded_address():
    with pytest.raises(InvalidPublicKeyError):
        require_address(TOKEN_PROGRAM_ID + " ", "sender address")


def test_validate_transaction_signature_rejects_padding(signer):
    signature = str(signer.sign_message(b"tx"))

    assert not validate_transaction_signature(signature + " ")
    assert not validate_transaction_signature("\t" + signature)


def test_decode_signature_base64(signature_bytes):
    encoded = base64.b64encode(signature_bytes).decode()
    assert decode_signature(encoded) == signature_bytes


def test_decode_signature_hex(signature_bytes):
    # Hex digits are valid base64, so this also exercises the length fallback
    assert decode_signature(signature_bytes.hex()) == signature_bytes


@pytest.mark.parametrize("value", ["!!!not-encoded!!!", "abcd", base64.b64encode(bytes(10)).decode()])
def test_decode_signature_rejects_garbage(value):
    with pytest.raises(DecodeError):
        decode_signature(value)


def test_verify_signature_base64(signer, signature_bytes):
    encoded = base64.b64encode(signature_bytes).decode()
    assert verify_signature(MESSAGE, encoded, str(signer.pubkey())) is True


def test_verify_signature_hex(signer, signature_bytes):
    assert verify_signature(MESSAGE, signature_bytes.hex(), str(signer.pubkey())) is True


def test_verify_signature_wrong_message(signer, signature_bytes):
    encoded = base64.b64encode(signature_bytes).decode()
    assert verify_signature("A different message", encoded, str(signer.pubkey())) is False


def test_verify_signature_wrong_key(signature_bytes):
    encoded = base64.b64encode(signature_bytes).decode()
    assert verify_signature(MESSAGE, encoded, str(Keypair().pubkey())) is False


@pytest.mark.parametrize("message,signature,public_key", [
    ("", "", ""),
    (MESSAGE, "", SYSTEM_PROGRAM_ID),
    ("", "abcd", SYSTEM_PROGRAM_ID),
    (MESSAGE, "abcd", ""),
])
def test_verify_signature_empty_inputs(message, signature, public_key):
    assert verify_signature(message, signature, public_key) is False


def test_verify_signature_malformed_inputs(signer, signature_bytes):
    encoded = base64.b64encode(signature_bytes).decode()
    assert verify_signature(MESSAGE, "zz-not-a-signature", str(signer.pubkey())) is False
    assert verify_signature(MESSAGE, encoded, "invalid-address") is False
