"""Offline audit trail for reconstruction runs.

Each event is written to its own JSON file, signed with an Ed25519 key that
lives next to the entries and chained to the previous entry through a
SHA3-512 hash. Entries describe *how* a secret was recovered (share counts,
inlier and outlier indices); the secret itself is never recorded.
"""
from __future__ import annotations

import hashlib
import json
import os
import time
import uuid
from pathlib import Path
from typing import Any, Dict

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

GENESIS = "GENESIS"


class AuditTrail:
    def __init__(self, directory: os.PathLike[str] | str) -> None:
        self.directory = Path(directory).expanduser()
        self.directory.mkdir(parents=True, exist_ok=True)
        self.key_path = self.directory / "signing_key.pem"
        self.chain_state_path = self.directory / "chain.state"

    def _load_private_key(self) -> Ed25519PrivateKey:
        if self.key_path.exists():
            data = self.key_path.read_bytes()
            return serialization.load_pem_private_key(data, password=None)
        private_key = Ed25519PrivateKey.generate()
        self.key_path.write_bytes(
            private_key.private_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption(),
            )
        )
        return private_key

    def _load_prev_hash(self) -> str:
        try:
            return self.chain_state_path.read_text().strip()
        except FileNotFoundError:
            return GENESIS

    def record_event(self, event: str, *, details: Dict[str, Any] | None = None) -> Path:
        """Append ``event`` to the chain and return the path of the new entry."""
        timestamp = int(time.time())
        payload = {
            "event": event,
            "details": details or {},
            "timestamp": timestamp,
            "prev_hash": self._load_prev_hash(),
        }
        message = json.dumps(payload, ensure_ascii=False, sort_keys=True).encode("utf-8")
        signature = self._load_private_key().sign(message)
        chain_hash = hashlib.sha3_512(message + signature).hexdigest()
        entry = {
            "payload": payload,
            "signature": signature.hex(),
            "chain_hash": chain_hash,
        }
        file_path = self.directory / f"audit_{timestamp}_{uuid.uuid4().hex}.json"
        file_path.write_text(json.dumps(entry, ensure_ascii=False, indent=2))
        self.chain_state_path.write_text(chain_hash)
        return file_path

    def verify_log(self, path: os.PathLike[str] | str) -> bool:
        """Check the signature and chain hash of a single entry."""
        data = json.loads(Path(path).read_text())
        payload = json.dumps(data["payload"], ensure_ascii=False, sort_keys=True).encode("utf-8")
        signature = bytes.fromhex(data.get("signature") or "")
        public_key = self._load_private_key().public_key()
        try:
            public_key.verify(signature, payload)
        except InvalidSignature:
            return False
        expected_chain_hash = hashlib.sha3_512(payload + signature).hexdigest()
        return expected_chain_hash == data.get("chain_hash")


__all__ = ["AuditTrail", "GENESIS"]
