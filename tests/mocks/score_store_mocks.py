#!/usr/bin/env python3
"""
Test Mock Implementations - In-memory score stores and scorers.

These mocks provide deterministic behavior for cache and ranker tests
without Redis or a database.
"""
import threading
import time
from typing import Any, Dict, Optional, Tuple

from core.cache.score_store import ScoreStore
from core.models import UserProfile


class InMemoryScoreStore(ScoreStore):
    """Dict-backed score store; safe to share across scoring threads."""

    def __init__(self, name: str = "memory", initial: Optional[Dict[Tuple[int, int], int]] = None):
        self.name = name
        self._data: Dict[Tuple[int, int], int] = dict(initial or {})
        self._lock = threading.Lock()
        self.get_calls = 0
        self.set_calls = 0

    def get(self, requester_id: int, target_id: int) -> Optional[int]:
        with self._lock:
            self.get_calls += 1
            return self._data.get((requester_id, target_id))

    def set(self, requester_id: int, target_id: int, score: int) -> bool:
        with self._lock:
            self.set_calls += 1
            self._data[(requester_id, target_id)] = score
        return True

    def delete(self, requester_id: int, target_id: int) -> bool:
        with self._lock:
            return self._data.pop((requester_id, target_id), None) is not None

    def stats(self) -> Dict[str, Any]:
        return {"available": True, "keys": len(self._data)}

    def snapshot(self) -> Dict[Tuple[int, int], int]:
        with self._lock:
            return dict(self._data)


class FailingScoreStore(ScoreStore):
    """Every operation raises, as an unreachable backend would."""

    name = "failing"

    def __init__(self, error: Exception = None):
        self.error = error or ConnectionError("store unreachable")

    def get(self, requester_id: int, target_id: int) -> Optional[int]:
        raise self.error

    def set(self, requester_id: int, target_id: int, score: int) -> bool:
        raise self.error

    def delete(self, requester_id: int, target_id: int) -> bool:
        raise self.error

    def stats(self) -> Dict[str, Any]:
        raise self.error


class CountingScorer:
    """
    Scorer stand-in returning fixed scores and counting computations.

    ``scores`` maps target id -> score; ``errors`` maps target id -> the
    exception to raise; ``delays`` maps target id -> seconds to sleep.
    """

    def __init__(
        self,
        scores: Optional[Dict[int, int]] = None,
        default: int = 50,
        errors: Optional[Dict[int, Exception]] = None,
        delays: Optional[Dict[int, float]] = None
    ):
        self.scores = scores or {}
        self.default = default
        self.errors = errors or {}
        self.delays = delays or {}
        self.computations = 0
        self._lock = threading.Lock()

    def score(self, requester: UserProfile, candidate: UserProfile) -> int:
        with self._lock:
            self.computations += 1
        if candidate.id in self.delays:
            time.sleep(self.delays[candidate.id])
        if candidate.id in self.errors:
            raise self.errors[candidate.id]
        return self.scores.get(candidate.id, self.default)
