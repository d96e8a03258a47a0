import random
import threading
import uuid
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime

from docassist.classification.base import BaseClassifier
from docassist.documents.exceptions import DocumentStateError
from docassist.documents.models import Document, RegistryStats, UploadedFile
from docassist.logging.logger import Log
from docassist.risk.bands import HIGH_RISK, risk_label
from docassist.risk.base import BaseRiskAssessor
from docassist.risk.models import RiskAssessment
from docassist.scheduling.base import BaseScheduler
from docassist.scheduling.exceptions import SchedulerError

DocumentListener = Callable[[Document], None]


def _local_now() -> datetime:
    return datetime.now().astimezone()


class DocumentRegistry:
    """In-memory collection of uploaded documents for one session.

    Upload classifies synchronously and stores documents as ``processing``.
    Each document then gets its own randomized analysis delay; when it fires
    the risk assessment is attached in a single replacement of the snapshot.
    """

    TASK_GROUP = "documents"

    def __init__(
        self,
        classifier: BaseClassifier,
        assessor: BaseRiskAssessor,
        scheduler: BaseScheduler,
        *,
        processing_delay_min_ms: int = 2000,
        processing_delay_max_ms: int = 5000,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self._classifier = classifier
        self._assessor = assessor
        self._scheduler = scheduler
        self._delay_min_ms = processing_delay_min_ms
        self._delay_max_ms = processing_delay_max_ms
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock
        self._lock = threading.RLock()
        self._documents: dict[str, Document] = {}
        self._listeners: list[DocumentListener] = []

    def upload(self, files: Iterable[UploadedFile]) -> list[Document]:
        """Classify and store each file, then schedule its analysis.

        A document whose analysis cannot be scheduled moves to ``error``.
        Returns the snapshot of each document as it stood after upload.
        """
        created = [self._create(file) for file in files]
        with self._lock:
            for document in created:
                self._documents[document.id] = document
        snapshots: list[Document] = []
        for document in created:
            Log.info(
                "Document uploaded",
                id=document.id,
                name=document.name,
                document_type=document.content.document_type,
            )
            self._notify(document)
            try:
                self._schedule_analysis(document.id)
            except SchedulerError as exc:
                Log.error(f"Could not schedule analysis of document {document.id}: {exc}")
                failed = self._transition(document.id, status="error", error_message=str(exc))
                snapshots.append(failed or document)
            else:
                snapshots.append(document)
        return snapshots

    def get(self, document_id: str) -> Document | None:
        """Current snapshot, or None if the id is unknown."""
        with self._lock:
            return self._documents.get(document_id)

    def select(self, document_id: str) -> Document | None:
        """Current snapshot of a document, or None if unknown."""
        document = self.get(document_id)
        if document is None:
            Log.info("Selected unknown document", id=document_id)
        return document

    def analysis(self, document_id: str) -> RiskAssessment | None:
        """Risk assessment of a completed document; None otherwise."""
        document = self.get(document_id)
        if document is None or not document.is_completed:
            return None
        return document.assessment

    def list_documents(self) -> list[Document]:
        """All documents in upload order."""
        with self._lock:
            return list(self._documents.values())

    def completed_documents(self) -> list[Document]:
        """Documents whose analysis has finished."""
        return [document for document in self.list_documents() if document.is_completed]

    def pending_ids(self) -> list[str]:
        """Ids of documents still waiting for their analysis task."""
        prefix = "analysis:"
        return [
            key.removeprefix(prefix)
            for key in self._scheduler.pending(self.TASK_GROUP)
        ]

    def stats(self) -> RegistryStats:
        """Dashboard counters; high risk uses the risk band."""
        documents = self.list_documents()
        scores = [
            document.assessment.risk_score
            for document in documents
            if document.is_completed and document.assessment is not None
        ]
        return RegistryStats(
            total=len(documents),
            completed=len(scores),
            high_risk=sum(1 for score in scores if risk_label(score) == HIGH_RISK),
            average_risk_score=sum(scores) / len(scores) if scores else 0.0,
        )

    def subscribe(self, listener: DocumentListener) -> Callable[[], None]:
        """Register a listener for new and updated snapshots.

        Returns a callable that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def clear(self) -> None:
        """Cancel pending analyses and discard every document."""
        cancelled = self._scheduler.cancel_group(self.TASK_GROUP)
        with self._lock:
            count = len(self._documents)
            self._documents.clear()
        Log.info("Registry cleared", documents=count, cancelled=cancelled)

    def _create(self, file: UploadedFile) -> Document:
        content = self._classifier.classify(file.name, file.size_bytes, file.mime_type)
        return Document(
            id=uuid.uuid4().hex,
            name=file.name,
            size_bytes=file.size_bytes,
            mime_type=file.mime_type,
            uploaded_at=self._clock(),
            content=content,
        )

    def _schedule_analysis(self, document_id: str) -> None:
        spread = self._delay_max_ms - self._delay_min_ms
        delay_ms = self._delay_min_ms + int(self._rng.random() * spread)
        self._scheduler.schedule(
            f"analysis:{document_id}",
            delay_ms,
            lambda: self._run_analysis(document_id),
            group=self.TASK_GROUP,
        )

    def _run_analysis(self, document_id: str) -> None:
        document = self.get(document_id)
        if document is None:
            Log.debug("Skipping analysis of discarded document", id=document_id)
            return
        try:
            assessment = self._assessor.assess(document.content)
        except Exception as exc:
            Log.error(f"Analysis of document {document_id} failed: {exc}")
            self._transition(document_id, status="error", error_message=str(exc))
            return
        updated = self._transition(document_id, status="completed", assessment=assessment)
        if updated is not None:
            Log.info(
                "Document analysis completed",
                id=document_id,
                score=f"{assessment.risk_score:.1f}",
                band=risk_label(assessment.risk_score),
            )

    def _transition(self, document_id: str, **changes: object) -> Document | None:
        with self._lock:
            current = self._documents.get(document_id)
            if current is None:
                return None
            if current.status != "processing":
                raise DocumentStateError(
                    f"Document {document_id} is already {current.status}"
                )
            updated = replace(current, **changes)
            self._documents[document_id] = updated
        self._notify(updated)
        return updated

    def _notify(self, document: Document) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(document)
            except Exception as exc:
                Log.warning(f"Document listener failed: {exc}")
