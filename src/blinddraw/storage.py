"""
JSON persistence for a tournament state.

Writers go through update_state, which holds a file lock next to the state
file so mutating operations on one tournament are applied one at a time.
"""
import json
import logging
import os
from typing import Callable

from filelock import FileLock

from blinddraw.state import TournamentState

logger = logging.getLogger(__name__)

LOCK_TIMEOUT_SECONDS = 10


def _lock_for(path: str) -> FileLock:
    return FileLock(f"{path}.lock", timeout=LOCK_TIMEOUT_SECONDS)


def load_state(path: str) -> TournamentState:
    """Load a tournament state. A missing or empty file gives an empty state."""
    if not os.path.exists(path):
        return TournamentState()
    with open(path, 'r', encoding='utf-8') as f:
        raw = f.read()
    if not raw.strip():
        return TournamentState()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f'Failed to parse {path}: {e}')
        raise ValueError(f"{path} is not a valid tournament file") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path} is not a valid tournament file")
    return TournamentState.from_dict(data)


def save_state(state: TournamentState, path: str):
    """Save a tournament state as JSON."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(state.to_dict(), f, ensure_ascii=False, indent=2)


def update_state(path: str, operation: Callable[[TournamentState], TournamentState]) -> TournamentState:
    """
    Apply `operation` to the stored state under the tournament's file lock.

    Returns the new state after saving it.
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with _lock_for(path):
        state = load_state(path)
        new_state = operation(state)
        save_state(new_state, path)
    logger.debug(f'Saved {new_state!r} to {path}')
    return new_state
