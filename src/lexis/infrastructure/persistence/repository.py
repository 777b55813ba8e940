"""File-backed storage for a learner's ``StudyState``."""

import logging
import os
import tempfile
from pathlib import Path

from lexis.domain.errors import PersistenceError
from lexis.domain.state import StudyState

from .json_codec import deserialize_state, serialize_state

logger = logging.getLogger(__name__)


class JsonStateRepository:
    """
    Reads and writes the whole state as one UTF-8 JSON document.

    Writes go to a temporary file in the same directory which then replaces
    the target, so an interrupted save leaves the previous state intact.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> StudyState:
        if not self.path.exists():
            logger.info(f"No state at {self.path}, starting empty")
            return StudyState()

        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Could not read {self.path}: {e}") from e

        state = deserialize_state(text)
        logger.info(
            f"Loaded {len(state.cards)} cards and {len(state.vocabulary)} "
            f"vocabulary items from {self.path}"
        )
        return state

    def save(self, state: StudyState) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = serialize_state(state)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceError(f"Could not write {self.path}: {e}") from e

        logger.info(f"Saved state to {self.path}")
