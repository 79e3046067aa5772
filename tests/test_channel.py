from __future__ import annotations

import base64
import threading

import pytest

from qkd_chat.core.errors import EmptyKey, MalformedCiphertext
from qkd_chat.modules.channel.service import KeyedChannel, Message, pack_key, xor_cycle

def test_pack_key_msb_first_zero_padded():
    assert pack_key([1, 0, 1, 1]) == b"\xb0"
    assert pack_key([1] * 9) == b"\xff\x80"
    assert pack_key([]) == b""

def test_known_vector():
    ch = KeyedChannel([1, 0, 1, 1])
    msg = ch.encrypt(b"A", "Alice")
    assert base64.b64decode(msg.ciphertext) == b"\xf1"
    assert msg.ciphertext == "8Q=="
    assert ch.decrypt(msg.ciphertext) == b"A"

def test_key_repeats_cyclically():
    assert xor_cycle(b"\x00\x00\x00", b"\x01\x02") == b"\x01\x02\x01"

@pytest.mark.parametrize("plaintext", [b"", b"hello", "žabe in čaj".encode("utf-8"), bytes(range(256))])
def test_round_trip(plaintext):
    ch = KeyedChannel([0, 1, 1, 0, 1, 0, 0, 1, 1, 1, 0])
    assert ch.decrypt(ch.encrypt(plaintext, "Bob").ciphertext) == plaintext

def test_same_plaintext_same_ciphertext_across_senders():
    ch = KeyedChannel([1, 1, 0, 1, 0, 0, 1, 0])
    a = ch.encrypt(b"ping", "Alice")
    b = ch.encrypt(b"ping", "Bob")
    assert a.ciphertext == b.ciphertext
    assert ch.messages() == [Message(a.ciphertext, "Alice"), Message(b.ciphertext, "Bob")]

def test_decrypt_does_not_touch_history():
    ch = KeyedChannel([1, 0])
    m = ch.encrypt(b"x", "Alice")
    ch.decrypt(m.ciphertext)
    assert len(ch) == 1

def test_malformed_ciphertext():
    ch = KeyedChannel([1])
    with pytest.raises(MalformedCiphertext):
        ch.decrypt("not base64!!")
    with pytest.raises(MalformedCiphertext):
        ch.decrypt("QQ")

def test_empty_key_fails_on_use_not_construction():
    ch = KeyedChannel([])
    with pytest.raises(EmptyKey):
        ch.encrypt(b"hi", "Alice")
    with pytest.raises(EmptyKey):
        ch.decrypt("aGk=")
    assert ch.messages() == []

def test_concurrent_encrypts_all_recorded():
    ch = KeyedChannel([1, 0, 1])

    def worker(name: str) -> None:
        for _ in range(50):
            ch.encrypt(b"msg", name)

    threads = [threading.Thread(target=worker, args=(f"t{i}",)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(ch.messages()) == 400
