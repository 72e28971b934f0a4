"""
JSON file persistence for accepted contacts.
"""

from __future__ import annotations

import base64
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from qrhandshake.common.exceptions import ContactStoreError
from qrhandshake.common.models import PublicKeyMaterial, TrustedContact

logger = logging.getLogger(__name__)


class JsonContactStore:
    """Stores trusted contacts in a JSON file keyed by fingerprint."""

    def __init__(self, file_path: Path) -> None:
        self.file_path = file_path
        self._lock = threading.Lock()

    @staticmethod
    def _serialize_contact(contact: TrustedContact) -> dict[str, Any]:
        data = contact.model_dump(mode="python")
        data["material"]["der"] = base64.b64encode(contact.material.der).decode(
            "ascii"
        )
        data["material"]["algorithm"] = contact.material.algorithm.value
        return data

    @staticmethod
    def _deserialize_contact(data: dict[str, Any]) -> TrustedContact:
        material = dict(data["material"])
        material["der"] = base64.b64decode(material["der"])
        return TrustedContact(
            material=PublicKeyMaterial(**material),
            fingerprint=data["fingerprint"],
            added_at=data["added_at"],
        )

    def load_contacts(self) -> dict[str, TrustedContact]:
        """Load contacts from file. Raises ContactStoreError if it is unreadable."""
        try:
            with self.file_path.open() as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except ValueError as err:
            msg = f"Contacts file {self.file_path} is not valid JSON: {err}"
            raise ContactStoreError(msg) from err

        if not isinstance(data, dict):
            msg = f"Contacts file {self.file_path} does not hold a JSON object"
            raise ContactStoreError(msg)
        try:
            return {fp: self._deserialize_contact(v) for fp, v in data.items()}
        except (KeyError, TypeError, ValueError) as err:
            # ValueError covers pydantic ValidationError and bad base64
            msg = f"Contacts file {self.file_path} has an invalid entry: {err}"
            raise ContactStoreError(msg) from err

    def save_contact(self, contact: TrustedContact) -> None:
        """Add or replace a contact.

        The file is rewritten through a temporary file in the same directory,
        so readers see either the old or the new contents.
        """
        with self._lock:
            contacts = self.load_contacts()
            contacts[contact.fingerprint] = contact
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.file_path.parent, prefix=f".{self.file_path.name}."
            )
            tmp_path = Path(tmp_name)
            try:
                with os.fdopen(fd, "w") as f:
                    json.dump(
                        {fp: self._serialize_contact(c) for fp, c in contacts.items()},
                        f,
                        indent=2,
                    )
                tmp_path.replace(self.file_path)
            except BaseException:
                tmp_path.unlink(missing_ok=True)
                raise
        logger.debug("Saved contact %s to %s", contact.fingerprint, self.file_path)
