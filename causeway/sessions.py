# causeway/sessions.py
# ------------------------------------------------------------
# In-memory store of named design sessions.
#
# - A session is an immutable snapshot (inputs + computed result).
# - The store owns its sessions: they are deep-copied on save and on
#   load, so no caller ever holds a reference into the map.
# - All map access is serialised by one re-entrant lock.
# - The store is an explicit object: construct it at start-up, pass it to
#   whatever needs it, and clear() it on teardown.
#
# Library files
# -------------
# export_library()/import_library() write and read a flat JSON document:
#   {"version": 1, "exportDate": ..., "designs": [...], "metadata": {...}}
# Each design carries its inputs and a rounded copy of its result for
# readers; on import the result is recomputed from the inputs.
#
from __future__ import annotations

import copy
import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .config import CausewayConfig
from .errors import InvalidInputError, SessionNotFoundError
from .models import CalculationResult, DesignInput, DesignSession, SessionSummary
from .structural import calculate

logger = logging.getLogger(__name__)

LIBRARY_VERSION = 1


class SessionStore:
    """Thread-safe id -> DesignSession map."""

    def __init__(self):
        self._sessions: Dict[str, DesignSession] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def save(
        self,
        name: Optional[str],
        inputs: DesignInput,
        result: CalculationResult,
    ) -> str:
        """
        Store a snapshot and return its new session id.

        Raises InvalidInputError when ``inputs`` are not the inputs the
        result was computed from.
        """
        if inputs != result.inputs:
            raise InvalidInputError(
                "Session inputs do not match the inputs of the calculation result", field="inputs"
            )
        session_id = uuid.uuid4().hex
        session = DesignSession(
            id=session_id,
            name=name or f"Design_{session_id[:8]}",
            timestamp=datetime.now(timezone.utc).isoformat(),
            inputs=copy.deepcopy(inputs),
            result=copy.deepcopy(result),
        )
        with self._lock:
            self._sessions[session_id] = session
        logger.info(f"Saved design session '{session.name}' ({session_id})")
        return session_id

    def load(self, session_id: str) -> DesignSession:
        """Return a copy of a stored session; raises SessionNotFoundError."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            return copy.deepcopy(session)

    def list(self) -> List[SessionSummary]:
        """Summaries in save order."""
        with self._lock:
            return [SessionSummary(s.id, s.name, s.timestamp) for s in self._sessions.values()]

    def delete(self, session_id: str) -> None:
        with self._lock:
            if session_id not in self._sessions:
                raise SessionNotFoundError(session_id)
            del self._sessions[session_id]
        logger.info(f"Deleted design session {session_id}")

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    # ------------------------------------------------------------------ library
    def export_library(self, path: Union[str, Path]) -> int:
        """Write every session to a JSON library file; returns the count."""
        with self._lock:
            sessions = list(self._sessions.values())
        document = {
            "version": LIBRARY_VERSION,
            "exportDate": datetime.now(timezone.utc).isoformat(),
            "designs": [_session_record(s) for s in sessions],
            "metadata": {"totalDesigns": len(sessions)},
        }
        Path(path).write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info(f"Exported {len(sessions)} design sessions to {path}")
        return len(sessions)

    def import_library(
        self,
        path: Union[str, Path],
        config: Optional[CausewayConfig] = None,
    ) -> List[str]:
        """
        Append the designs of a JSON library file; returns the new session ids.

        Results are recomputed from the stored inputs, so invalid inputs in
        the file raise the calculator's errors and nothing is imported.
        Records without inputs, or with missing or non-numeric input fields,
        raise InvalidInputError.
        """
        document = json.loads(Path(path).read_text(encoding="utf-8"))
        designs = document.get("designs") if isinstance(document, dict) else None
        if not isinstance(designs, list):
            raise ValueError(f"Invalid library file format: {path}")

        prepared = []
        for index, record in enumerate(designs):
            if not isinstance(record, dict) or "inputs" not in record:
                raise InvalidInputError(
                    f"Library design #{index + 1} in {path} has no inputs", field="inputs"
                )
            inputs = DesignInput.from_dict(record["inputs"])
            prepared.append((record.get("name"), inputs, calculate(inputs, config)))

        ids = [self.save(name, inputs, result) for name, inputs, result in prepared]
        logger.info(f"Imported {len(ids)} design sessions from {path}")
        return ids


def _session_record(session: DesignSession) -> Dict[str, Any]:
    return {
        "id": session.id,
        "name": session.name,
        "timestamp": session.timestamp,
        "inputs": session.inputs.to_dict(),
        "result": session.result.to_dict(),
    }


__all__ = ["SessionStore", "LIBRARY_VERSION"]
