"""
Session-scoped proposal cache.

Pages read proposals through ProposalStore instead of calling the repository
directly. Successful reads are cached for max_age_seconds; every mutation
made through the store invalidates the entries it can affect, so the next read
goes back to the server. Errors are never cached.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from .models import ActionResult, Document, Proposal
from .repository import ProposalRepository
from .utils import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_AGE_SECONDS = 30.0


class ProposalStore:
    def __init__(
        self,
        repository: ProposalRepository,
        max_age_seconds: float = DEFAULT_MAX_AGE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.repository = repository
        self.max_age_seconds = max_age_seconds
        self.clock = clock
        self._lock = threading.Lock()
        self._list: Optional[Tuple[float, List[Proposal]]] = None
        self._proposals: Dict[int, Tuple[float, Proposal]] = {}

    def _fresh(self, stored_at: float) -> bool:
        return self.clock() - stored_at < self.max_age_seconds

    # --- Reads ---

    def list_proposals(self, force: bool = False) -> ActionResult[List[Proposal]]:
        with self._lock:
            if not force and self._list and self._fresh(self._list[0]):
                return ActionResult.success(list(self._list[1]))

        result = self.repository.list_proposals()
        if result.ok:
            with self._lock:
                now = self.clock()
                self._list = (now, list(result.data))
                for proposal in result.data:
                    self._proposals[proposal.id] = (now, proposal)
        return result

    def get_proposal(self, proposal_id: int, force: bool = False) -> ActionResult[Proposal]:
        with self._lock:
            cached = self._proposals.get(proposal_id)
            if not force and cached and self._fresh(cached[0]):
                return ActionResult.success(cached[1])

        result = self.repository.get_proposal(proposal_id)
        with self._lock:
            if result.ok:
                self._proposals[proposal_id] = (self.clock(), result.data)
            else:
                self._proposals.pop(proposal_id, None)
        return result

    def get_document(self, proposal_id: int, document_id: int, force: bool = False) -> ActionResult[Document]:
        result = self.get_proposal(proposal_id, force=force)
        if not result.ok:
            return ActionResult.failure(result.error)
        document = result.data.get_document(document_id)
        if document is None:
            return ActionResult.failure("Document not found in the proposal.")
        return ActionResult.success(document)

    # --- Invalidation ---

    def invalidate(self, proposal_id: Optional[int] = None) -> None:
        """Drop the proposal list and, when given, one proposal's entry; with no id drop everything."""
        with self._lock:
            self._list = None
            if proposal_id is None:
                self._proposals.clear()
            else:
                self._proposals.pop(proposal_id, None)
        logger.debug(f"Invalidated proposal cache ({proposal_id if proposal_id is not None else 'all'})")

    def _mutate(self, proposal_id: Optional[int], result: ActionResult) -> ActionResult:
        if result.ok:
            self.invalidate(proposal_id)
        return result

    # --- Mutations ---

    def create_proposal(self, name: str, chat_session_id: Optional[str] = None) -> ActionResult[Proposal]:
        result = self.repository.create_proposal(name, chat_session_id)
        return self._mutate(result.data.id if result.ok else None, result)

    def delete_proposal(self, proposal_id: int) -> ActionResult[int]:
        return self._mutate(proposal_id, self.repository.delete_proposal(proposal_id))

    def upload_document(
        self,
        proposal_id: int,
        file_name: str,
        content: bytes,
        content_type: Optional[str] = None,
    ) -> ActionResult[Document]:
        return self._mutate(
            proposal_id,
            self.repository.upload_document(proposal_id, file_name, content, content_type),
        )

    def start_signature_analysis(self, proposal_id: int) -> ActionResult[str]:
        return self._mutate(proposal_id, self.repository.start_signature_analysis(proposal_id))

    def extract_html(self, proposal_id: int, document_id: int, page_number: int) -> ActionResult[str]:
        return self._mutate(proposal_id, self.repository.extract_html(proposal_id, document_id, page_number))
