from __future__ import annotations

from qkd_chat.demo import main

def test_demo_runs(capsys):
    assert main(["--bits", "128"]) == 0
    out = capsys.readouterr().out
    assert "Initial number of bits: 128" in out
    assert "Bob decrypted the message: Hello Bob! This is a secret message from Alice." in out

def test_demo_reply_leg_labels(capsys):
    assert main(["--bits", "128"]) == 0
    out = capsys.readouterr().out
    assert "Bob's original message: Hi Alice!" in out
    assert "Encrypted reply: " in out
    assert "Alice decrypted the reply: Hi Alice! I received your secret message successfully!" in out
