"""
In-memory analysis store.

Created once at app startup and passed to whoever needs it. Results are
kept for the life of the process; nothing is evicted or persisted.
"""

from sitelens.models import AnalysisResult


class AnalysisStore:
    def __init__(self):
        self._results: dict[str, AnalysisResult] = {}

    def save(self, result: AnalysisResult):
        self._results[result.id] = result
        print(f"[store] Saved analysis {result.id} ({len(self._results)} stored)")

    def get(self, analysis_id: str) -> AnalysisResult | None:
        result = self._results.get(analysis_id)
        print(f"[store] Lookup {analysis_id}: {'found' if result else 'not found'}")
        return result

    def __len__(self) -> int:
        return len(self._results)
