from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional, Union
from pydantic import ValidationError
from genbackend.schemas.backend import BackendModel

log = logging.getLogger(__name__)


class ModelStore:
    """
    Owner of the current backend model.

    Readers get the snapshot held at the moment of the call. `replace` swaps
    the reference in a single assignment, so a reader sees either the old or
    the new model and never a partial one. Writers are not ordered: the last
    successful replace wins.
    """

    def __init__(self, state_file: Optional[Union[str, Path]] = None):
        self.state_file = Path(state_file) if state_file else None
        self._current: Optional[BackendModel] = None

    def current(self) -> Optional[BackendModel]:
        return self._current

    def replace(self, model: BackendModel, persist: bool = True) -> None:
        self._current = model
        log.info("Installed backend '%s' (%s) as current", model.name, model.id)
        if persist and self.state_file:
            self._persist(model)

    def _persist(self, model: BackendModel) -> None:
        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.state_file.with_name(self.state_file.name + ".tmp")
            tmp_path.write_text(model.to_json(), encoding="utf-8")
            os.replace(tmp_path, self.state_file)
        except OSError as e:
            log.error("Error saving generated backend data to %s: %s", self.state_file, e)

    def load(self) -> Optional[BackendModel]:
        """Restore the persisted model, if any. Unreadable files are logged and ignored."""
        if not self.state_file or not self.state_file.exists():
            return None
        try:
            model = BackendModel.model_validate_json(self.state_file.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            log.error("Error loading generated backend data from %s: %s", self.state_file, e)
            return None
        self._current = model
        log.info("Loaded generated backend: %s", model.name)
        return model
